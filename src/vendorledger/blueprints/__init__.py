"""Blueprint exports."""

from . import directory, vendors, writeoffs

__all__ = [
    "directory",
    "vendors",
    "writeoffs",
]
