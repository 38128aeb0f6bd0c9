"""Pytest configuration and shared fixtures for VendorLedger tests.

Provides temp-file SQLite engines, repository fixtures and model factories so
that posting logic can be exercised without touching the real app database.
"""

from __future__ import annotations

import tempfile
from decimal import Decimal
from pathlib import Path

import pytest
from sqlmodel import SQLModel, create_engine

# Import all models to ensure they're registered with SQLModel metadata
from vendorledger.infra.database import create_session_factory
from vendorledger.infra.repositories import (
    SQLModelAdminRepository,
    SQLModelBranchRepository,
    SQLModelVendorRepository,
    SQLModelWriteOffRepository,
)
from vendorledger.models import Admin, Branch, Vendor, VendorStatus
from vendorledger.services.posting import WriteOffPoster

# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture(scope="function")
def db_engine():
    """Create an isolated SQLite database file for each test.

    Yields:
        Engine: SQLModel engine connected to test database
    """
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        db_path = Path(f.name)

    engine = create_engine(f"sqlite:///{db_path}", echo=False)
    SQLModel.metadata.create_all(engine)

    yield engine

    engine.dispose()
    db_path.unlink(missing_ok=True)


@pytest.fixture(scope="function")
def session_factory(db_engine):
    """Session factory matching what the app hands to repositories."""

    return create_session_factory(db_engine)


@pytest.fixture
def vendor_store(session_factory):
    return SQLModelVendorRepository(session_factory)


@pytest.fixture
def write_off_store(session_factory):
    return SQLModelWriteOffRepository(session_factory)


@pytest.fixture
def poster(vendor_store, write_off_store):
    """Poster over the SQLModel stores with status tracking enabled."""

    return WriteOffPoster(vendor_store, write_off_store, tracks_status=True)


# =============================================================================
# Test Data Factories
# =============================================================================


@pytest.fixture
def vendor_factory(vendor_store):
    """Factory for creating persisted vendors.

    Returns:
        Callable: Function that creates and persists Vendor instances
    """

    def _create_vendor(
        name: str = "Test Vendor",
        outstanding: Decimal | int | str = Decimal("1000"),
        status: str | None = VendorStatus.ACTIVE,
    ) -> Vendor:
        return vendor_store.create(
            Vendor(name=name, outstanding=Decimal(str(outstanding)), status=status)
        )

    return _create_vendor


@pytest.fixture
def admin(session_factory) -> Admin:
    return SQLModelAdminRepository(session_factory).create(Admin(username="manager1", branch="Mumbai"))


@pytest.fixture
def branch(session_factory) -> Branch:
    return SQLModelBranchRepository(session_factory).create(Branch(name="Mumbai", location="Andheri"))


# =============================================================================
# Flask Fixtures
# =============================================================================


@pytest.fixture()
def app(tmp_path, monkeypatch: pytest.MonkeyPatch):
    """Application bound to a throwaway SQLite database."""

    from vendorledger import create_app

    monkeypatch.setenv("VENDORLEDGER_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("VENDORLEDGER_DATABASE_URL", f"sqlite:///{tmp_path / 'vendorledger.db'}")
    application = create_app("testing")
    application.config.update(TESTING=True)
    return application


@pytest.fixture()
def client(app):
    with app.test_client() as test_client:
        yield test_client


# =============================================================================
# Helper Utilities
# =============================================================================


def assert_money_equal(actual, expected) -> None:
    """Assert two currency amounts are equal to the cent."""

    assert Decimal(str(actual)).quantize(Decimal("0.01")) == Decimal(str(expected)).quantize(
        Decimal("0.01")
    ), f"Expected {expected}, got {actual}"
