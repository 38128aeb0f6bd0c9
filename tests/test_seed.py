"""Demo data seeding through the service and the Flask CLI."""

from __future__ import annotations

from vendorledger.services.seed import seed_demo_data
from tests.conftest import assert_money_equal


def test_seed_demo_data(session_factory, vendor_store, write_off_store):
    results = seed_demo_data(session_factory)

    assert [r.success for r in results] == [True, True]
    balances = {v.name: v.outstanding for v in vendor_store.list_all()}
    assert_money_equal(balances["Vendor A"], 4500)
    assert_money_equal(balances["Vendor B"], 3000)
    assert {w.fm_number for w in write_off_store.list_all()} == {"FM-101", "FM-102"}


def test_seed_is_noop_when_vendors_exist(session_factory, vendor_factory, write_off_store):
    vendor_factory()

    assert seed_demo_data(session_factory) == []
    assert write_off_store.list_all() == []


def test_seed_cli_command(app, client):
    runner = app.test_cli_runner()

    first = runner.invoke(args=["vendorledger-seed"])
    second = runner.invoke(args=["vendorledger-seed"])

    assert first.exit_code == 0
    assert "Posted FM-101" in first.output
    assert "nothing seeded" in second.output
    names = [v["name"] for v in client.get("/vendors").get_json()]
    assert names == ["Vendor A", "Vendor B"]
