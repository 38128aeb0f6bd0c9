"""Application configuration objects and helpers."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: bool = False) -> bool:
    """Interpret environment variable values as booleans."""

    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return int(value)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {value!r}") from exc


class BaseConfig:
    """Base configuration shared across environments."""

    APP_NAME = "VendorLedger"
    DB_FILENAME = "vendorledger.db"
    ENV_PREFIX = "VENDORLEDGER_"
    DEBUG = False
    TESTING = False

    def __init__(self) -> None:
        self.SECRET_KEY = os.getenv("VENDORLEDGER_SECRET_KEY", "replace-me")
        self.DATA_DIR = self._resolve_data_dir()
        self.DEV_MODE = _env_bool("VENDORLEDGER_DEV_MODE", default=True)
        self.DATABASE_URL = os.getenv("VENDORLEDGER_DATABASE_URL", self._build_sqlite_url())

        # Posting behaviour
        self.TRACK_VENDOR_STATUS = _env_bool("VENDORLEDGER_TRACK_STATUS", default=True)
        self.ATOMIC_POSTING = _env_bool("VENDORLEDGER_ATOMIC_POSTING", default=True)
        self.ATOMIC_FALLBACK = _env_bool("VENDORLEDGER_ATOMIC_FALLBACK", default=True)
        self.CONFLICT_RETRIES = _env_int("VENDORLEDGER_CONFLICT_RETRIES", default=2)

        if not self.DEV_MODE and self.SECRET_KEY == "replace-me":
            raise ValueError("VENDORLEDGER_SECRET_KEY must be set in non-dev mode.")
        if self.CONFLICT_RETRIES < 0:
            raise ValueError("VENDORLEDGER_CONFLICT_RETRIES cannot be negative.")

    def _resolve_data_dir(self) -> Path:
        """Return the directory where the SQLite file and logs live."""

        data_root = os.getenv("VENDORLEDGER_DATA_DIR", "instance")
        path = Path(data_root).expanduser().resolve()
        path.mkdir(parents=True, exist_ok=True)
        return path

    def _build_sqlite_url(self) -> str:
        db_path = self.DATA_DIR / self.DB_FILENAME
        return f"sqlite:///{db_path}"

    def sqlalchemy_engine_options(self) -> dict[str, Any]:
        """Expose engine kwargs for SQLModel to consume."""

        engine_options: dict[str, Any] = {}
        if self.DATABASE_URL.startswith("sqlite"):
            # Flask serves requests from worker threads; sessions are per call.
            engine_options["connect_args"] = {"check_same_thread": False}
        return engine_options

    def posting_options(self) -> dict[str, Any]:
        """Keyword arguments for ``WriteOffPoster`` derived from this config."""

        return {
            "tracks_status": self.TRACK_VENDOR_STATUS,
            "prefer_atomic": self.ATOMIC_POSTING,
            "fallback_on_atomic_failure": self.ATOMIC_FALLBACK,
            "conflict_retries": self.CONFLICT_RETRIES,
        }


class DevConfig(BaseConfig):
    """Development configuration using local SQLite."""

    DEBUG = True


class TestConfig(BaseConfig):
    """Configuration used by the test-suite app fixtures."""

    TESTING = True
