"""Write-off repository protocol."""

from __future__ import annotations

from typing import Protocol

from ...models.vendor import Vendor
from ...models.writeoff import WriteOff
from .vendor import VendorUpdate


class WriteOffRepository(Protocol):
    """Append-only history of posted write-offs.

    ``supports_atomic_posting`` advertises whether ``post_atomic`` can insert
    the record and update the vendor as a single all-or-nothing unit.
    """

    supports_atomic_posting: bool

    def insert(self, record: WriteOff) -> WriteOff:
        """Persist a new write-off record."""
        ...

    def post_atomic(
        self, record: WriteOff, vendor_id: str, changes: VendorUpdate
    ) -> tuple[WriteOff, Vendor]:
        """Insert ``record`` and apply ``changes`` to the vendor in one transaction."""
        ...

    def list_by_vendor(self, vendor_id: str, *, newest_first: bool = True) -> list[WriteOff]:
        """List write-offs for a vendor ordered by creation time."""
        ...

    def list_all(self, *, newest_first: bool = True) -> list[WriteOff]:
        """List every write-off ordered by creation time."""
        ...
