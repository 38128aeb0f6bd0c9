"""Vendor repository protocol."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional, Protocol

from ...models.vendor import Vendor


@dataclass(frozen=True, slots=True)
class VendorUpdate:
    """Partial change applied to a vendor row.

    ``decrement`` is relative and guarded: stores apply it only while the
    outstanding balance is at least ``decrement`` and raise
    ``BalanceConflictError`` otherwise.
    """

    decrement: Optional[Decimal] = None
    status: Optional[str] = None
    name: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        return self.decrement is None and self.status is None and self.name is None


class VendorRepository(Protocol):
    """Repository owning vendor balance mutation."""

    def get(self, vendor_id: str) -> Optional[Vendor]:
        """Retrieve a vendor snapshot by ID."""
        ...

    def update(self, vendor_id: str, changes: VendorUpdate) -> Vendor:
        """Apply ``changes`` and return the updated vendor."""
        ...

    def create(self, vendor: Vendor) -> Vendor:
        """Create a new vendor."""
        ...

    def list_all(self) -> list[Vendor]:
        """List all vendors."""
        ...
