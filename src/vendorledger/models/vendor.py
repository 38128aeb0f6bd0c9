"""Vendor entity carrying the outstanding balance eligible for write-off."""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal
from typing import TYPE_CHECKING, ClassVar, Optional
from uuid import uuid4

from sqlalchemy.orm import relationship
from sqlmodel import Field, Relationship, SQLModel

if TYPE_CHECKING:  # pragma: no cover - import guard for circular dependency
    from .writeoff import WriteOff


class VendorStatus:
    """Status values a vendor moves through."""

    ACTIVE = "Active"
    WRITTEN_OFF = "Written Off"


def _new_vendor_id() -> str:
    return uuid4().hex


class Vendor(SQLModel, table=True):
    """A vendor and the balance it still owes."""

    __tablename__: ClassVar[str] = "vendor"

    id: str = Field(default_factory=_new_vendor_id, primary_key=True, max_length=64)
    name: str = Field(nullable=False, max_length=120, index=True)
    outstanding: Decimal = Field(
        default=Decimal("0"), max_digits=14, decimal_places=2, nullable=False
    )
    status: Optional[str] = Field(default=None, max_length=32)
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    write_offs: list["WriteOff"] = Relationship(
        back_populates="vendor",
        sa_relationship=relationship("WriteOff", back_populates="vendor"),
    )
