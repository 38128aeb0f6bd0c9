"""Concrete repository implementations using SQLModel."""

from .directory import SQLModelAdminRepository, SQLModelBranchRepository
from .vendor import SQLModelVendorRepository, apply_vendor_update
from .writeoff import SQLModelWriteOffRepository

__all__ = [
    "SQLModelAdminRepository",
    "SQLModelBranchRepository",
    "SQLModelVendorRepository",
    "SQLModelWriteOffRepository",
    "apply_vendor_update",
]
