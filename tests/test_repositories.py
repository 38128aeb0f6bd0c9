"""Unit tests for the SQLModel repository implementations."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from tests.conftest import assert_money_equal
from vendorledger.domain.errors import BalanceConflictError, VendorNotFoundError
from vendorledger.domain.repositories import VendorUpdate
from vendorledger.infra.repositories import SQLModelAdminRepository, SQLModelBranchRepository
from vendorledger.models import Admin, Branch, Vendor, VendorStatus, WriteOff


def test_vendor_repository_create_get_list(vendor_store):
    created = vendor_store.create(Vendor(name="Vendor B", outstanding=Decimal("3200")))
    vendor_store.create(Vendor(name="Vendor A", outstanding=Decimal("5000")))

    assert created.id
    fetched = vendor_store.get(created.id)
    assert fetched is not None
    assert fetched.name == "Vendor B"
    assert_money_equal(fetched.outstanding, 3200)

    assert [v.name for v in vendor_store.list_all()] == ["Vendor A", "Vendor B"]
    assert vendor_store.get("unknown") is None


def test_guarded_decrement_applies_when_balance_suffices(vendor_store, vendor_factory):
    vendor = vendor_factory(outstanding=500)

    updated = vendor_store.update(
        vendor.id, VendorUpdate(decrement=Decimal("500"), status=VendorStatus.WRITTEN_OFF)
    )

    assert_money_equal(updated.outstanding, 0)
    assert updated.status == VendorStatus.WRITTEN_OFF


def test_guarded_decrement_refuses_to_overdraw(vendor_store, vendor_factory):
    vendor = vendor_factory(outstanding=100)

    with pytest.raises(BalanceConflictError):
        vendor_store.update(vendor.id, VendorUpdate(decrement=Decimal("100.01")))

    assert_money_equal(vendor_store.get(vendor.id).outstanding, 100)


def test_update_missing_vendor(vendor_store):
    with pytest.raises(VendorNotFoundError):
        vendor_store.update("ghost", VendorUpdate(decrement=Decimal("1")))
    with pytest.raises(VendorNotFoundError):
        vendor_store.update("ghost", VendorUpdate())


def test_update_name_only(vendor_store, vendor_factory):
    vendor = vendor_factory(name="Old", outstanding=10)

    updated = vendor_store.update(vendor.id, VendorUpdate(name="New"))

    assert updated.name == "New"
    assert_money_equal(updated.outstanding, 10)
    assert not VendorUpdate(name="New").is_empty


def test_empty_update_returns_vendor_unchanged(vendor_store, vendor_factory):
    vendor = vendor_factory(name="Same", outstanding="10.50")

    unchanged = vendor_store.update(vendor.id, VendorUpdate())

    assert VendorUpdate().is_empty
    assert unchanged.name == "Same"
    assert_money_equal(unchanged.outstanding, "10.50")
    assert unchanged.status == VendorStatus.ACTIVE


def test_post_atomic_writes_both_rows(write_off_store, vendor_store, vendor_factory):
    vendor = vendor_factory(outstanding=800)
    record = WriteOff(fm_number="FM-1", amount=Decimal("300"), vendor_id=vendor.id)

    stored, updated = write_off_store.post_atomic(
        record, vendor.id, VendorUpdate(decrement=Decimal("300"))
    )

    assert stored.id is not None
    assert_money_equal(updated.outstanding, 500)
    assert_money_equal(vendor_store.get(vendor.id).outstanding, 500)


def test_post_atomic_rolls_back_insert_on_conflict(write_off_store, vendor_store, vendor_factory):
    vendor = vendor_factory(outstanding=100)
    record = WriteOff(fm_number="FM-1", amount=Decimal("300"), vendor_id=vendor.id)

    with pytest.raises(BalanceConflictError):
        write_off_store.post_atomic(record, vendor.id, VendorUpdate(decrement=Decimal("300")))

    assert write_off_store.list_all() == []
    assert_money_equal(vendor_store.get(vendor.id).outstanding, 100)


def test_write_off_listing_order(write_off_store, vendor_factory):
    first = vendor_factory(name="A")
    second = vendor_factory(name="B")
    base = datetime(2024, 1, 1, 9, 0, tzinfo=timezone.utc)
    for offset, (vendor, fm_number) in enumerate(
        [(first, "FM-1"), (second, "FM-2"), (first, "FM-3")]
    ):
        write_off_store.insert(
            WriteOff(
                fm_number=fm_number,
                amount=Decimal("10"),
                vendor_id=vendor.id,
                created_at=base + timedelta(minutes=offset),
            )
        )

    assert [w.fm_number for w in write_off_store.list_all()] == ["FM-3", "FM-2", "FM-1"]
    assert [w.fm_number for w in write_off_store.list_all(newest_first=False)] == [
        "FM-1",
        "FM-2",
        "FM-3",
    ]
    assert [w.fm_number for w in write_off_store.list_by_vendor(first.id)] == ["FM-3", "FM-1"]
    assert write_off_store.list_by_vendor("nobody") == []


def test_admin_and_branch_repositories(session_factory):
    admins = SQLModelAdminRepository(session_factory)
    branches = SQLModelBranchRepository(session_factory)

    admins.create(Admin(username="manager2", branch="Delhi"))
    admins.create(Admin(username="manager1", branch="Mumbai"))
    branches.create(Branch(name="Mumbai", location="Andheri"))

    assert [a.username for a in admins.list_all()] == ["manager1", "manager2"]
    assert admins.get_by_username("manager2").branch == "Delhi"
    assert admins.get_by_username("nobody") is None
    assert [b.location for b in branches.list_all()] == ["Andheri"]
