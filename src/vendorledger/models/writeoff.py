"""SQLModel definition for posted write-offs."""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal
from typing import TYPE_CHECKING, ClassVar, Optional

from sqlalchemy.orm import relationship
from sqlmodel import Field, Relationship, SQLModel

if TYPE_CHECKING:  # pragma: no cover - import guard for circular dependency
    from .vendor import Vendor


class WriteOff(SQLModel, table=True):
    """An immutable reduction of a vendor's outstanding balance."""

    __tablename__: ClassVar[str] = "write_off"

    id: Optional[int] = Field(default=None, primary_key=True)
    fm_number: str = Field(nullable=False, max_length=64, index=True)
    note: Optional[str] = Field(default=None, max_length=500)
    amount: Decimal = Field(
        nullable=False,
        max_digits=14,
        decimal_places=2,
        description="Effective amount debited, after clamping to the balance",
    )
    effective_date: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
    vendor_id: str = Field(foreign_key="vendor.id", nullable=False, index=True)
    admin_id: Optional[int] = Field(default=None, foreign_key="admin.id")
    branch_id: Optional[int] = Field(default=None, foreign_key="branch.id")
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        nullable=False,
        index=True,
    )

    vendor: "Vendor" = Relationship(
        back_populates="write_offs",
        sa_relationship=relationship("Vendor", back_populates="write_offs"),
    )
