"""SQLModel implementation of the vendor repository."""

from __future__ import annotations

from typing import Callable, Optional

from sqlalchemy import Numeric, func, update
from sqlmodel import Session, select

from ...domain.errors import BalanceConflictError, VendorNotFoundError
from ...domain.repositories.vendor import VendorUpdate
from ...models.vendor import Vendor

_MONEY = Numeric(14, 2)


def _cents(expression):
    """Round a money expression to cents inside the database.

    SQLite evaluates NUMERIC arithmetic in binary floating point, so an
    unrounded ``0.30 - 0.10`` compares below ``0.20``.
    """

    return func.round(expression, 2, type_=_MONEY)


def apply_vendor_update(session: Session, vendor_id: str, changes: VendorUpdate) -> Vendor:
    """Apply ``changes`` inside ``session`` without committing.

    The decrement is issued as a single conditional UPDATE
    (``outstanding >= decrement``, both sides in cents) so a concurrent
    posting cannot push the balance below zero between our read and this
    write.
    """

    if not changes.is_empty:
        values: dict = {}
        conditions = [Vendor.id == vendor_id]
        if changes.decrement is not None:
            values["outstanding"] = _cents(Vendor.outstanding - changes.decrement)
            conditions.append(_cents(Vendor.outstanding) >= changes.decrement)
        if changes.status is not None:
            values["status"] = changes.status
        if changes.name is not None:
            values["name"] = changes.name

        statement = (
            update(Vendor)
            .where(*conditions)
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        result = session.exec(statement)  # type: ignore[call-overload]
        if result.rowcount == 0:
            if session.get(Vendor, vendor_id) is None:
                raise VendorNotFoundError(vendor_id)
            raise BalanceConflictError(vendor_id, changes.decrement)

    vendor = session.get(Vendor, vendor_id, populate_existing=True)
    if vendor is None:
        raise VendorNotFoundError(vendor_id)
    return vendor


class SQLModelVendorRepository:
    """SQLModel-based vendor repository implementation."""

    def __init__(self, session_factory: Callable[[], Session]):
        """Initialize with a session factory."""
        self.session_factory = session_factory

    def get(self, vendor_id: str) -> Optional[Vendor]:
        """Retrieve a vendor snapshot by ID."""
        with self.session_factory() as session:
            vendor = session.get(Vendor, vendor_id)
            if vendor:
                session.expunge(vendor)
            return vendor

    def update(self, vendor_id: str, changes: VendorUpdate) -> Vendor:
        """Apply ``changes`` and return the updated vendor."""
        with self.session_factory() as session:
            vendor = apply_vendor_update(session, vendor_id, changes)
            session.commit()
            session.refresh(vendor)
            session.expunge(vendor)
            return vendor

    def create(self, vendor: Vendor) -> Vendor:
        """Create a new vendor."""
        with self.session_factory() as session:
            session.add(vendor)
            session.commit()
            session.refresh(vendor)
            session.expunge(vendor)
            return vendor

    def list_all(self) -> list[Vendor]:
        """List all vendors ordered by name."""
        with self.session_factory() as session:
            statement = select(Vendor).order_by(Vendor.name, Vendor.created_at)  # type: ignore
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows
