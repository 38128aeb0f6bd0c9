"""Demo data mirroring the sample vendors, admins and branches."""

from __future__ import annotations

from decimal import Decimal

from sqlmodel import select

from ..infra.database import SessionFactory
from ..infra.repositories import (
    SQLModelAdminRepository,
    SQLModelBranchRepository,
    SQLModelVendorRepository,
    SQLModelWriteOffRepository,
)
from ..logging_config import get_logger
from ..models import Admin, Branch, Vendor, VendorStatus
from .posting import PostingResult, WriteOffPoster, WriteOffRequest

logger = get_logger(__name__)

DEMO_VENDORS = (("Vendor A", Decimal("5000")), ("Vendor B", Decimal("3200")))
DEMO_ADMINS = (("manager1", "Mumbai"), ("manager2", "Delhi"))
DEMO_BRANCHES = (("Mumbai", "Andheri"), ("Delhi", "Connaught Place"))


def seed_demo_data(session_factory: SessionFactory, **posting_options) -> list[PostingResult]:
    """Create demo rows and post two sample write-offs through the poster.

    Returns the posting results. Running it against a database that already
    holds vendors is a no-op.
    """

    with session_factory() as session:
        if session.exec(select(Vendor).limit(1)).first() is not None:
            logger.info("Seed skipped; vendors already present")
            return []

    vendors = SQLModelVendorRepository(session_factory)
    admins = SQLModelAdminRepository(session_factory)
    branches = SQLModelBranchRepository(session_factory)

    created_vendors = [
        vendors.create(Vendor(name=name, outstanding=balance, status=VendorStatus.ACTIVE))
        for name, balance in DEMO_VENDORS
    ]
    created_admins = [admins.create(Admin(username=u, branch=b)) for u, b in DEMO_ADMINS]
    created_branches = [branches.create(Branch(name=n, location=loc)) for n, loc in DEMO_BRANCHES]

    poster = WriteOffPoster(vendors, SQLModelWriteOffRepository(session_factory), **posting_options)
    samples = (
        ("FM-101", Decimal("500"), "Damaged goods - Vendor A"),
        ("FM-102", Decimal("200"), "Short supply - Vendor B"),
    )
    results = []
    for index, (fm_number, amount, note) in enumerate(samples):
        results.append(
            poster.post(
                WriteOffRequest(
                    vendor_id=created_vendors[index].id,
                    fm_number=fm_number,
                    amount=amount,
                    note=note,
                    admin_id=created_admins[index].id,
                    branch_id=created_branches[index].id,
                )
            )
        )
    logger.info("Demo data seeded", extra={"vendors": len(created_vendors)})
    return results
