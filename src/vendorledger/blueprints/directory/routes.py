"""Pass-through CRUD for posting actors and branches."""

from __future__ import annotations

from flask import jsonify, request

from ...extensions import admin_repository, branch_repository
from ...models.directory import Admin, Branch
from ...services.serialization import admin_to_dict, branch_to_dict
from . import bp


def _text(payload: dict, key: str) -> str | None:
    value = payload.get(key)
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


@bp.get("/admins")
def list_admins():
    return jsonify([admin_to_dict(admin) for admin in admin_repository().list_all()])


@bp.post("/admins")
def create_admin():
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        return jsonify({"error": "ValidationError", "detail": "JSON object body required"}), 400

    username = _text(payload, "userName")
    if username is None:
        return jsonify({"error": "ValidationError", "detail": "userName is required"}), 400

    repo = admin_repository()
    if repo.get_by_username(username) is not None:
        return jsonify({"error": "Conflict", "detail": f"Admin {username} already exists"}), 409

    admin = repo.create(Admin(username=username, branch=_text(payload, "branch")))
    return jsonify(admin_to_dict(admin)), 201


@bp.get("/branches")
def list_branches():
    return jsonify([branch_to_dict(branch) for branch in branch_repository().list_all()])


@bp.post("/branches")
def create_branch():
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        return jsonify({"error": "ValidationError", "detail": "JSON object body required"}), 400

    name = _text(payload, "name")
    if name is None:
        return jsonify({"error": "ValidationError", "detail": "name is required"}), 400

    branch = branch_repository().create(Branch(name=name, location=_text(payload, "location")))
    return jsonify(branch_to_dict(branch)), 201
