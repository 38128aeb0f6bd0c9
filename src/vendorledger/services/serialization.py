"""JSON-ready dictionaries for vendors, write-offs and directory rows."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Any, Optional

from ..models.directory import Admin, Branch
from ..models.vendor import Vendor
from ..models.writeoff import WriteOff


def money(value: Decimal | float | None) -> Optional[float]:
    """Render a currency amount as a JSON number."""

    if value is None:
        return None
    return float(value)


def _iso(value: datetime | None) -> Optional[str]:
    return value.isoformat() if value is not None else None


def vendor_to_dict(vendor: Vendor) -> dict[str, Any]:
    return {
        "id": vendor.id,
        "name": vendor.name,
        "outstanding": money(vendor.outstanding),
        "status": vendor.status,
        "createdAt": _iso(vendor.created_at),
    }


def write_off_to_dict(write_off: WriteOff) -> dict[str, Any]:
    return {
        "id": write_off.id,
        "fmNumber": write_off.fm_number,
        "note": write_off.note,
        "amount": money(write_off.amount),
        "date": _iso(write_off.effective_date),
        "vendorId": write_off.vendor_id,
        "adminId": write_off.admin_id,
        "branchId": write_off.branch_id,
        "createdAt": _iso(write_off.created_at),
    }


def admin_to_dict(admin: Admin) -> dict[str, Any]:
    return {"id": admin.id, "userName": admin.username, "branch": admin.branch}


def branch_to_dict(branch: Branch) -> dict[str, Any]:
    return {"id": branch.id, "name": branch.name, "location": branch.location}
