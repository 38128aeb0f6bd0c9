"""Repository protocol definitions for domain layer."""

from .vendor import VendorRepository, VendorUpdate
from .writeoff import WriteOffRepository

__all__ = [
    "VendorRepository",
    "VendorUpdate",
    "WriteOffRepository",
]
