"""SQLModel table exports."""

from .directory import Admin, Branch
from .vendor import Vendor, VendorStatus
from .writeoff import WriteOff

__all__ = [
    "Admin",
    "Branch",
    "Vendor",
    "VendorStatus",
    "WriteOff",
]
