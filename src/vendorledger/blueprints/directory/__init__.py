"""Admins and branches blueprint package."""

from __future__ import annotations

from flask import Blueprint

bp = Blueprint("directory", __name__)

from . import routes  # noqa: E402,F401

__all__ = ["bp"]
