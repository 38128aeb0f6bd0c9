"""Posting of a single write-off against a vendor balance.

A posting reads the vendor, asks the balance policy how much may be written
off, then persists the write-off and the vendor decrement using one of two
strategies:

``ATOMIC``
    ``WriteOffRepository.post_atomic`` stores both rows in one transaction.
    The vendor decrement is guarded by the store, so a balance that changed
    since our read surfaces as ``BalanceConflictError`` and we re-read.

``SEQUENTIAL``
    The write-off is inserted first, then the vendor is updated. If the
    second write fails the write-off row exists without its debit; the
    result reports this as ``PersistenceError`` at step ``vendor_update``
    together with the orphaned record so it can be reconciled by hand.

ATOMIC is used when it is preferred and the store sets
``supports_atomic_posting``; otherwise postings are SEQUENTIAL. Neither
strategy deduplicates retries: re-posting after an unknown outcome may post
twice.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, time, timezone
from enum import Enum
from typing import Any, Mapping, Optional

from ..domain.errors import BalanceConflictError, VendorNotFoundError
from ..domain.repositories.vendor import VendorRepository, VendorUpdate
from ..domain.repositories.writeoff import WriteOffRepository
from ..logging_config import get_logger
from ..models.vendor import Vendor
from ..models.writeoff import WriteOff
from .balance_policy import PolicyOutcome, evaluate_write_off
from .serialization import money, vendor_to_dict, write_off_to_dict

logger = get_logger(__name__)


class ReasonCode(str, Enum):
    """Failure reasons surfaced to callers of the posting services."""

    VALIDATION_ERROR = "ValidationError"
    NOT_FOUND = "NotFound"
    NO_PENDING_BALANCE = "NoPendingBalance"
    INVALID_AMOUNT = "InvalidAmount"
    EFFECTIVE_AMOUNT_ZERO = "EffectiveAmountZero"
    PERSISTENCE_ERROR = "PersistenceError"
    BALANCE_CHANGED = "BalanceChanged"


class PostingStrategy(str, Enum):
    ATOMIC = "atomic"
    SEQUENTIAL = "sequential"


class PostingStep:
    """Names of the store calls a posting performs."""

    VENDOR_READ = "vendor_read"
    ATOMIC_POST = "atomic_post"
    WRITE_OFF_INSERT = "write_off_insert"
    VENDOR_UPDATE = "vendor_update"


def _as_utc(value: datetime) -> datetime:
    """Read naive datetimes as UTC and convert aware ones to UTC."""

    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _parse_date(value: Any) -> Optional[datetime]:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return _as_utc(value)
    if isinstance(value, date):
        return datetime.combine(value, time.min, tzinfo=timezone.utc)
    if isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = f"{text[:-1]}+00:00"
        return _as_utc(datetime.fromisoformat(text))
    raise ValueError(f"Unsupported date value: {value!r}")


def _optional_int(value: Any) -> Optional[int]:
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        raise ValueError("boolean is not an identifier")
    return int(value)


@dataclass
class WriteOffRequest:
    """Caller input for one write-off.

    ``amount`` is kept raw; the balance policy decides whether it is a valid
    positive number.
    """

    vendor_id: Any
    fm_number: Any
    amount: Any
    note: Optional[str] = None
    date: Any = None
    admin_id: Any = None
    branch_id: Any = None

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "WriteOffRequest":
        """Build a request from the JSON wire keys (``vendorId``, ``fmNumber``...)."""

        return cls(
            vendor_id=payload.get("vendorId"),
            fm_number=payload.get("fmNumber"),
            amount=payload.get("amount"),
            note=payload.get("note"),
            date=payload.get("date"),
            admin_id=payload.get("adminId"),
            branch_id=payload.get("branchId"),
        )

    def validate(self) -> list[str]:
        """Return a list of problems; empty when the request is well formed."""

        errors: list[str] = []
        if self.vendor_id is None or not str(self.vendor_id).strip():
            errors.append("vendorId is required")
        if self.fm_number is None or not str(self.fm_number).strip():
            errors.append("fmNumber is required")
        if self.amount is None:
            errors.append("amount is required")
        if self.note is not None and not isinstance(self.note, str):
            errors.append("note must be text")
        try:
            _parse_date(self.date)
        except (TypeError, ValueError):
            errors.append("date must be an ISO-8601 date or datetime")
        for name, value in (("adminId", self.admin_id), ("branchId", self.branch_id)):
            try:
                _optional_int(value)
            except (TypeError, ValueError):
                errors.append(f"{name} must be an integer")
        return errors

    def build_record(self, amount) -> WriteOff:
        """Create the unsaved write-off row for an effective ``amount``."""

        record = WriteOff(
            fm_number=str(self.fm_number).strip(),
            note=self.note,
            amount=amount,
            vendor_id=str(self.vendor_id).strip(),
            admin_id=_optional_int(self.admin_id),
            branch_id=_optional_int(self.branch_id),
        )
        effective_date = _parse_date(self.date)
        if effective_date is not None:
            record.effective_date = effective_date
        return record


@dataclass
class PostingResult:
    """Outcome of posting one write-off."""

    success: bool
    reason: Optional[ReasonCode] = None
    detail: Optional[str] = None
    write_off: Optional[WriteOff] = None
    vendor: Optional[Vendor] = None
    strategy: Optional[PostingStrategy] = None
    degraded: bool = False
    failed_step: Optional[str] = None
    completed_steps: tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def failure(cls, reason: ReasonCode, detail: str | None = None, **kwargs) -> "PostingResult":
        return cls(success=False, reason=reason, detail=detail, **kwargs)

    @property
    def is_partial(self) -> bool:
        """True when a write-off row was stored but its debit was not applied."""

        return not self.success and self.write_off is not None

    def to_dict(self) -> dict[str, Any]:
        if self.success:
            return {
                "success": True,
                "writeOff": write_off_to_dict(self.write_off) if self.write_off else None,
                "updatedVendor": vendor_to_dict(self.vendor) if self.vendor else None,
                "strategy": self.strategy.value if self.strategy else None,
                "degraded": self.degraded,
            }
        payload: dict[str, Any] = {
            "success": False,
            "reason": self.reason.value if self.reason else None,
            "detail": self.detail,
        }
        if self.reason is ReasonCode.PERSISTENCE_ERROR:
            payload["failedStep"] = self.failed_step
            payload["completedSteps"] = list(self.completed_steps)
            payload["writeOff"] = write_off_to_dict(self.write_off) if self.write_off else None
            payload["strategy"] = self.strategy.value if self.strategy else None
        return payload


class WriteOffPoster:
    """Validate, clamp and persist write-offs against live vendor balances."""

    def __init__(
        self,
        vendor_store: VendorRepository,
        write_off_store: WriteOffRepository,
        *,
        tracks_status: bool = True,
        prefer_atomic: bool = True,
        fallback_on_atomic_failure: bool = True,
        conflict_retries: int = 2,
    ):
        self.vendor_store = vendor_store
        self.write_off_store = write_off_store
        self.tracks_status = tracks_status
        self.prefer_atomic = prefer_atomic
        self.fallback_on_atomic_failure = fallback_on_atomic_failure
        self.conflict_retries = max(0, conflict_retries)

    @property
    def strategy(self) -> PostingStrategy:
        """Strategy selected from configuration and the store capability flag."""

        atomic_capable = bool(getattr(self.write_off_store, "supports_atomic_posting", False))
        if self.prefer_atomic and atomic_capable:
            return PostingStrategy.ATOMIC
        return PostingStrategy.SEQUENTIAL

    def post(self, request: WriteOffRequest) -> PostingResult:
        """Post one write-off and report the outcome; never raises for store failures."""

        problems = request.validate()
        if problems:
            logger.info("Write-off rejected by validation", extra={"problems": problems})
            return PostingResult.failure(ReasonCode.VALIDATION_ERROR, "; ".join(problems))

        vendor_id = str(request.vendor_id).strip()
        attempts = self.conflict_retries + 1
        for attempt in range(1, attempts + 1):
            try:
                vendor = self.vendor_store.get(vendor_id)
            except Exception as exc:
                logger.exception("Vendor read failed", extra={"vendor_id": vendor_id})
                return PostingResult.failure(
                    ReasonCode.PERSISTENCE_ERROR, str(exc), failed_step=PostingStep.VENDOR_READ
                )
            if vendor is None:
                return PostingResult.failure(ReasonCode.NOT_FOUND, f"Vendor {vendor_id} not found")

            outcome = evaluate_write_off(
                outstanding=vendor.outstanding,
                requested=request.amount,
                tracks_status=self.tracks_status,
            )
            if not outcome.accepted:
                logger.info(
                    "Write-off rejected by balance policy",
                    extra={
                        "vendor_id": vendor_id,
                        "reason": outcome.reason.value if outcome.reason else None,
                        "requested": str(request.amount),
                        "outstanding": money(vendor.outstanding),
                    },
                )
                return PostingResult.failure(ReasonCode(outcome.reason.value))

            changes = VendorUpdate(decrement=outcome.effective_amount, status=outcome.new_status)
            if self.strategy is PostingStrategy.ATOMIC:
                try:
                    write_off, updated = self.write_off_store.post_atomic(
                        request.build_record(outcome.effective_amount), vendor_id, changes
                    )
                except BalanceConflictError:
                    logger.warning(
                        "Vendor balance changed during posting; re-reading",
                        extra={"vendor_id": vendor_id, "attempt": attempt},
                    )
                    continue
                except VendorNotFoundError:
                    return PostingResult.failure(
                        ReasonCode.NOT_FOUND, f"Vendor {vendor_id} not found"
                    )
                except Exception as exc:
                    if not self.fallback_on_atomic_failure:
                        logger.exception("Atomic posting failed", extra={"vendor_id": vendor_id})
                        return PostingResult.failure(
                            ReasonCode.PERSISTENCE_ERROR,
                            str(exc),
                            strategy=PostingStrategy.ATOMIC,
                            failed_step=PostingStep.ATOMIC_POST,
                        )
                    logger.warning(
                        "Atomic posting failed; falling back to sequential writes",
                        extra={"vendor_id": vendor_id, "error": str(exc)},
                    )
                    return self._post_sequential(request, vendor_id, outcome, changes, degraded=True)
                return self._succeeded(write_off, updated, PostingStrategy.ATOMIC)

            return self._post_sequential(request, vendor_id, outcome, changes)

        logger.warning(
            "Giving up after repeated balance conflicts",
            extra={"vendor_id": vendor_id, "attempts": attempts},
        )
        return PostingResult.failure(
            ReasonCode.BALANCE_CHANGED,
            f"Outstanding balance kept changing after {attempts} attempts",
            strategy=PostingStrategy.ATOMIC,
        )

    def _post_sequential(
        self,
        request: WriteOffRequest,
        vendor_id: str,
        outcome: PolicyOutcome,
        changes: VendorUpdate,
        *,
        degraded: bool = False,
    ) -> PostingResult:
        """Insert the write-off, then debit the vendor.

        The record goes first so that a failure in between leaves a visible
        write-off without its debit rather than a debit without a record.
        """

        try:
            write_off = self.write_off_store.insert(request.build_record(outcome.effective_amount))
        except Exception as exc:
            logger.exception("Write-off insert failed", extra={"vendor_id": vendor_id})
            return PostingResult.failure(
                ReasonCode.PERSISTENCE_ERROR,
                str(exc),
                strategy=PostingStrategy.SEQUENTIAL,
                degraded=degraded,
                failed_step=PostingStep.WRITE_OFF_INSERT,
            )

        try:
            updated = self.vendor_store.update(vendor_id, changes)
        except Exception as exc:
            logger.error(
                "Write-off stored but vendor balance not debited; manual reconciliation needed",
                exc_info=True,
                extra={
                    "vendor_id": vendor_id,
                    "write_off_id": write_off.id,
                    "amount": money(outcome.effective_amount),
                },
            )
            return PostingResult.failure(
                ReasonCode.PERSISTENCE_ERROR,
                str(exc),
                write_off=write_off,
                strategy=PostingStrategy.SEQUENTIAL,
                degraded=degraded,
                failed_step=PostingStep.VENDOR_UPDATE,
                completed_steps=(PostingStep.WRITE_OFF_INSERT,),
            )

        return self._succeeded(write_off, updated, PostingStrategy.SEQUENTIAL, degraded=degraded)

    def _succeeded(
        self,
        write_off: WriteOff,
        vendor: Vendor,
        strategy: PostingStrategy,
        *,
        degraded: bool = False,
    ) -> PostingResult:
        logger.info(
            "Write-off posted",
            extra={
                "vendor_id": vendor.id,
                "write_off_id": write_off.id,
                "amount": money(write_off.amount),
                "outstanding": money(vendor.outstanding),
                "status": vendor.status,
                "strategy": strategy.value,
                "degraded": degraded,
            },
        )
        return PostingResult(
            success=True,
            write_off=write_off,
            vendor=vendor,
            strategy=strategy,
            degraded=degraded,
        )
