"""Ordered, failure-isolated posting of several write-offs."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from decimal import Decimal
from typing import Any

from ..logging_config import get_logger
from .posting import PostingResult, ReasonCode, WriteOffPoster, WriteOffRequest
from .serialization import money

logger = get_logger(__name__)


class EmptyBatchError(ValueError):
    """Raised when a batch is empty or not a sequence of items."""


def _coerce_items(items: Any) -> list[Any]:
    if items is None or isinstance(items, (str, bytes, bytearray, Mapping)):
        raise EmptyBatchError("Batch must be a non-empty list of write-off requests.")
    if not isinstance(items, Iterable):
        raise EmptyBatchError("Batch must be a non-empty list of write-off requests.")
    materialized = list(items)
    if not materialized:
        raise EmptyBatchError("Batch must be a non-empty list of write-off requests.")
    return materialized


def post_batch(poster: WriteOffPoster, items: Any) -> list[PostingResult]:
    """Post every item in order and return one result per item.

    Items are independent: a failed item is recorded in its slot and the
    remaining items still run. Earlier successes are never rolled back. Each
    item re-reads its vendor, so later items see the balance left by earlier
    ones.
    """

    requests = _coerce_items(items)
    results: list[PostingResult] = []
    for index, item in enumerate(requests):
        try:
            if isinstance(item, WriteOffRequest):
                request = item
            elif isinstance(item, Mapping):
                request = WriteOffRequest.from_payload(item)
            else:
                results.append(
                    PostingResult.failure(
                        ReasonCode.VALIDATION_ERROR,
                        f"Item {index} is not a write-off request object",
                    )
                )
                continue
            results.append(poster.post(request))
        except Exception as exc:
            logger.exception("Unexpected failure posting batch item", extra={"index": index})
            results.append(PostingResult.failure(ReasonCode.PERSISTENCE_ERROR, str(exc)))

    summary = summarize_batch(results)
    logger.info("Batch posted", extra=summary)
    return results


def summarize_batch(results: Iterable[PostingResult]) -> dict[str, Any]:
    """Return item counts and the total amount actually written off."""

    total = Decimal("0")
    succeeded = failed = 0
    reasons: dict[str, int] = {}
    for result in results:
        if result.success:
            succeeded += 1
            if result.write_off is not None:
                total += Decimal(str(result.write_off.amount))
        else:
            failed += 1
            key = result.reason.value if result.reason else "unknown"
            reasons[key] = reasons.get(key, 0) + 1
    return {
        "total": succeeded + failed,
        "succeeded": succeeded,
        "failed": failed,
        "amountPosted": money(total),
        "failureReasons": reasons,
    }
