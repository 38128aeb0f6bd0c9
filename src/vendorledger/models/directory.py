"""Posting actors and organizational units referenced by write-offs."""

from __future__ import annotations

from typing import ClassVar, Optional

from sqlmodel import Field, SQLModel


class Admin(SQLModel, table=True):
    """Staff member recorded as the actor of a write-off."""

    __tablename__: ClassVar[str] = "admin"

    id: Optional[int] = Field(default=None, primary_key=True)
    username: str = Field(nullable=False, unique=True, index=True, max_length=64)
    branch: Optional[str] = Field(default=None, max_length=80)


class Branch(SQLModel, table=True):
    """Organizational unit a write-off is booked against."""

    __tablename__: ClassVar[str] = "branch"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(nullable=False, max_length=80, index=True)
    location: Optional[str] = Field(default=None, max_length=120)
