"""Pure rules deciding how much of a requested write-off may be posted.

Nothing in this module touches storage. ``evaluate_write_off`` is total:
every input, however malformed, maps to a ``PolicyOutcome`` and identical
inputs always map to identical outcomes.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, Optional

from ..models.vendor import VendorStatus


class PolicyRejection(str, Enum):
    """Reasons the policy refuses a write-off."""

    NO_PENDING_BALANCE = "NoPendingBalance"
    INVALID_AMOUNT = "InvalidAmount"
    EFFECTIVE_AMOUNT_ZERO = "EffectiveAmountZero"


@dataclass(frozen=True, slots=True)
class PolicyOutcome:
    """Result of evaluating a requested write-off against a balance."""

    accepted: bool
    effective_amount: Decimal = Decimal("0")
    remaining_balance: Optional[Decimal] = None
    new_status: Optional[str] = None
    reason: Optional[PolicyRejection] = None

    @classmethod
    def reject(cls, reason: PolicyRejection) -> "PolicyOutcome":
        return cls(accepted=False, reason=reason)


def parse_amount(value: Any) -> Optional[Decimal]:
    """Return ``value`` as a finite Decimal, or ``None`` when it is not numeric."""

    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, (int, float)):
        amount = Decimal(str(value))
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            amount = Decimal(text)
        except InvalidOperation:
            return None
    else:
        return None
    if not amount.is_finite():
        return None
    return amount


def evaluate_write_off(
    *, outstanding: Any, requested: Any, tracks_status: bool
) -> PolicyOutcome:
    """Decide the effective amount and status transition for a write-off.

    The requested amount is clamped to the outstanding balance. When
    ``tracks_status`` is set and the clamped posting clears the balance, the
    outcome signals a move to ``VendorStatus.WRITTEN_OFF``.
    """

    amount = parse_amount(requested)
    if amount is None or amount <= 0:
        return PolicyOutcome.reject(PolicyRejection.INVALID_AMOUNT)

    balance = parse_amount(outstanding)
    if balance is None or balance <= 0:
        return PolicyOutcome.reject(PolicyRejection.NO_PENDING_BALANCE)

    effective = min(amount, balance)
    if effective <= 0:
        return PolicyOutcome.reject(PolicyRejection.EFFECTIVE_AMOUNT_ZERO)

    remaining = balance - effective
    new_status = None
    if tracks_status and remaining <= 0:
        new_status = VendorStatus.WRITTEN_OFF

    return PolicyOutcome(
        accepted=True,
        effective_amount=effective,
        remaining_balance=remaining,
        new_status=new_status,
    )
