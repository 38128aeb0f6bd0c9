"""Vendor form definitions and validation helpers."""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Iterable, List, Optional

from ...models.vendor import VendorStatus

STATUS_CHOICES = (VendorStatus.ACTIVE, VendorStatus.WRITTEN_OFF)


@dataclass(slots=True)
class VendorForm:
    """Represents vendor inputs and associated validation errors."""

    name: Any = ""
    outstanding: Decimal | str | float | int | None = None
    status: Optional[str] = VendorStatus.ACTIVE
    errors: Dict[str, List[str]] = field(default_factory=dict, init=False)

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "VendorForm":
        return cls(
            name=payload.get("name", ""),
            outstanding=payload.get("currentOutStanding", payload.get("outstanding")),
            status=payload.get("status", VendorStatus.ACTIVE),
        )

    def validate(self) -> bool:
        """Validate vendor inputs returning True when all values are acceptable."""

        self.errors.clear()

        if not isinstance(self.name, str) or not self.name.strip():
            self.errors.setdefault("name", []).append("Enter the vendor name.")
        else:
            self.name = self.name.strip()
            if len(self.name) > 120:
                self.errors.setdefault("name", []).append("Keep the name under 120 characters.")

        self.outstanding = self._parse_balance(self.outstanding)

        if self.status is not None and self.status not in STATUS_CHOICES:
            self.errors.setdefault("status", []).append(
                f"Status must be one of: {', '.join(STATUS_CHOICES)}."
            )

        return not self.errors

    def _parse_balance(self, value: Any) -> Decimal | None:
        """Parse the opening balance, storing errors when parsing fails."""

        if value is None or value == "":
            return Decimal("0")
        if isinstance(value, bool):
            self.errors.setdefault("outstanding", []).append("Enter a valid number.")
            return None
        try:
            amount = Decimal(str(value))
        except (InvalidOperation, TypeError, ValueError):
            self.errors.setdefault("outstanding", []).append("Enter a valid number.")
            return None
        if not amount.is_finite():
            self.errors.setdefault("outstanding", []).append("Enter a valid number.")
            return None
        if amount < 0:
            self.errors.setdefault("outstanding", []).append("Balance cannot be negative.")
        return amount

    @property
    def error_messages(self) -> Iterable[str]:
        """Flattened iterable of error strings for summaries."""

        for messages in self.errors.values():
            yield from messages
