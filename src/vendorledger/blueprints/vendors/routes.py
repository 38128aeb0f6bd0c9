"""Vendor routes."""

from __future__ import annotations

from flask import jsonify, request

from ...extensions import vendor_repository, write_off_repository
from ...models.vendor import Vendor
from ...services.serialization import vendor_to_dict, write_off_to_dict
from . import bp
from .forms import VendorForm


def _not_found(vendor_id: str):
    return jsonify({"error": "NotFound", "detail": f"Vendor {vendor_id} not found"}), 404


@bp.get("")
def list_vendors():
    """List all vendors."""

    return jsonify([vendor_to_dict(vendor) for vendor in vendor_repository().list_all()])


@bp.post("")
def create_vendor():
    """Create a vendor with an opening outstanding balance."""

    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        return jsonify({"error": "ValidationError", "detail": "JSON object body required"}), 400

    form = VendorForm.from_payload(payload)
    if not form.validate():
        return jsonify({"error": "ValidationError", "fields": form.errors}), 400

    vendor = vendor_repository().create(
        Vendor(name=form.name, outstanding=form.outstanding, status=form.status)
    )
    return jsonify(vendor_to_dict(vendor)), 201


@bp.get("/<vendor_id>")
def get_vendor(vendor_id: str):
    vendor = vendor_repository().get(vendor_id)
    if vendor is None:
        return _not_found(vendor_id)
    return jsonify(vendor_to_dict(vendor))


@bp.get("/<vendor_id>/writeoffs")
def vendor_write_offs(vendor_id: str):
    """List a vendor's write-offs, newest first."""

    if vendor_repository().get(vendor_id) is None:
        return _not_found(vendor_id)
    rows = write_off_repository().list_by_vendor(vendor_id, newest_first=True)
    return jsonify([write_off_to_dict(row) for row in rows])
