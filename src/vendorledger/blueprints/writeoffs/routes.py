"""Write-off routes: single posting, batch posting and history."""

from __future__ import annotations

from flask import jsonify, request

from ...extensions import get_poster, write_off_repository
from ...services.batch import EmptyBatchError, post_batch, summarize_batch
from ...services.posting import PostingResult, ReasonCode, WriteOffRequest
from ...services.serialization import write_off_to_dict
from . import bp

_STATUS_BY_REASON = {
    ReasonCode.VALIDATION_ERROR: 400,
    ReasonCode.INVALID_AMOUNT: 400,
    ReasonCode.NOT_FOUND: 404,
    ReasonCode.NO_PENDING_BALANCE: 409,
    ReasonCode.EFFECTIVE_AMOUNT_ZERO: 409,
    ReasonCode.BALANCE_CHANGED: 409,
    ReasonCode.PERSISTENCE_ERROR: 500,
}


def status_for(result: PostingResult) -> int:
    """HTTP status code matching a single posting result."""

    if result.success:
        return 200
    return _STATUS_BY_REASON.get(result.reason, 500)


@bp.post("/writeoffs")
def create_write_off():
    """Post one write-off; body uses the ``vendorId``/``fmNumber``/``amount`` keys."""

    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        return jsonify({"error": ReasonCode.VALIDATION_ERROR.value, "detail": "JSON object body required"}), 400

    result = get_poster().post(WriteOffRequest.from_payload(payload))
    body = result.to_dict()
    if not result.success:
        body["error"] = body["reason"]
    return jsonify(body), status_for(result)


@bp.post("/writeoffs/batch")
def create_write_off_batch():
    """Post several write-offs in order; one result per item."""

    payload = request.get_json(silent=True)
    items = payload.get("items") if isinstance(payload, dict) else payload
    try:
        results = post_batch(get_poster(), items)
    except EmptyBatchError as exc:
        return jsonify({"error": "EmptyBatch", "detail": str(exc)}), 400

    return jsonify(
        {
            "results": [result.to_dict() for result in results],
            "summary": summarize_batch(results),
        }
    )


@bp.get("/writeoffs")
def list_write_offs():
    """List every write-off, newest first."""

    rows = write_off_repository().list_all(newest_first=True)
    return jsonify([write_off_to_dict(row) for row in rows])
