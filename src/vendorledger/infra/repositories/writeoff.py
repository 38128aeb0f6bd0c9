"""SQLModel implementation of the write-off repository."""

from __future__ import annotations

from typing import Callable

from sqlmodel import Session, select

from ...domain.repositories.vendor import VendorUpdate
from ...models.vendor import Vendor
from ...models.writeoff import WriteOff
from .vendor import apply_vendor_update


class SQLModelWriteOffRepository:
    """SQLModel-based write-off repository.

    Both tables live in the same database, so the insert and the vendor
    update can share one transaction.
    """

    supports_atomic_posting = True

    def __init__(self, session_factory: Callable[[], Session]):
        """Initialize with a session factory."""
        self.session_factory = session_factory

    def insert(self, record: WriteOff) -> WriteOff:
        """Persist a new write-off record."""
        with self.session_factory() as session:
            session.add(record)
            session.commit()
            session.refresh(record)
            session.expunge(record)
            return record

    def post_atomic(
        self, record: WriteOff, vendor_id: str, changes: VendorUpdate
    ) -> tuple[WriteOff, Vendor]:
        """Insert ``record`` and apply ``changes`` to the vendor in one transaction."""
        with self.session_factory() as session:
            # Nothing is committed unless both writes succeed.
            session.add(record)
            session.flush()
            vendor = apply_vendor_update(session, vendor_id, changes)
            session.commit()
            session.refresh(record)
            session.refresh(vendor)
            session.expunge_all()
            return record, vendor

    def list_by_vendor(self, vendor_id: str, *, newest_first: bool = True) -> list[WriteOff]:
        """List write-offs for a vendor ordered by creation time."""
        with self.session_factory() as session:
            statement = self._ordered(
                select(WriteOff).where(WriteOff.vendor_id == vendor_id), newest_first
            )
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def list_all(self, *, newest_first: bool = True) -> list[WriteOff]:
        """List every write-off ordered by creation time."""
        with self.session_factory() as session:
            statement = self._ordered(select(WriteOff), newest_first)
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    @staticmethod
    def _ordered(statement, newest_first: bool):
        if newest_first:
            return statement.order_by(
                WriteOff.created_at.desc(), WriteOff.id.desc()  # type: ignore
            )
        return statement.order_by(WriteOff.created_at, WriteOff.id)  # type: ignore
