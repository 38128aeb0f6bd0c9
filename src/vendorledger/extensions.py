"""Database and service wiring for the Flask application."""

from __future__ import annotations

from flask import Flask, current_app
from sqlalchemy.engine import Engine

from . import models  # noqa: F401  # ensure models registered with SQLModel metadata
from .config import BaseConfig
from .infra.database import SessionFactory, bootstrap_database
from .infra.repositories import (
    SQLModelAdminRepository,
    SQLModelBranchRepository,
    SQLModelVendorRepository,
    SQLModelWriteOffRepository,
)
from .services.posting import WriteOffPoster

EXTENSION_KEY = "vendorledger"


def init_db(app: Flask) -> None:
    """Create the engine and schema, and attach a session factory to the app."""

    config: BaseConfig = app.config["VENDORLEDGER_CONFIG"]
    engine, session_factory = bootstrap_database(config)
    app.extensions[EXTENSION_KEY] = {
        "engine": engine,
        "session_factory": session_factory,
    }


def _state() -> dict:
    state = current_app.extensions.get(EXTENSION_KEY)
    if state is None:  # pragma: no cover - exercised only on misconfigured apps
        raise RuntimeError("Database engine not initialized")
    return state


def get_engine() -> Engine:
    """Return the engine bound to the current app."""

    return _state()["engine"]


def get_session_factory() -> SessionFactory:
    return _state()["session_factory"]


def vendor_repository() -> SQLModelVendorRepository:
    return SQLModelVendorRepository(get_session_factory())


def write_off_repository() -> SQLModelWriteOffRepository:
    return SQLModelWriteOffRepository(get_session_factory())


def admin_repository() -> SQLModelAdminRepository:
    return SQLModelAdminRepository(get_session_factory())


def branch_repository() -> SQLModelBranchRepository:
    return SQLModelBranchRepository(get_session_factory())


def get_poster() -> WriteOffPoster:
    """Build a poster over the app's stores using the configured options."""

    config: BaseConfig = current_app.config["VENDORLEDGER_CONFIG"]
    return WriteOffPoster(
        vendor_repository(), write_off_repository(), **config.posting_options()
    )
