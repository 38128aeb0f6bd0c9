"""Service module exports."""

from . import balance_policy, batch, posting, seed, serialization

__all__ = [
    "balance_policy",
    "batch",
    "posting",
    "seed",
    "serialization",
]
