"""Exceptions raised by store implementations."""

from __future__ import annotations

from decimal import Decimal


class StoreError(RuntimeError):
    """Base class for failures reported by a vendor or write-off store."""


class VendorNotFoundError(StoreError):
    """The vendor addressed by an update does not exist."""

    def __init__(self, vendor_id: str):
        super().__init__(f"Vendor {vendor_id!r} not found")
        self.vendor_id = vendor_id


class BalanceConflictError(StoreError):
    """A guarded decrement found less outstanding balance than it needed.

    Raised instead of applying the change; the store is left untouched.
    """

    def __init__(self, vendor_id: str, required: Decimal):
        super().__init__(
            f"Vendor {vendor_id!r} no longer has {required} outstanding"
        )
        self.vendor_id = vendor_id
        self.required = required
