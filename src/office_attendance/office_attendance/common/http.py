"""Helpers shared by the JSON controllers."""
from __future__ import annotations

import logging
from functools import wraps
from typing import Any, Optional

from flask import jsonify, request, session

from ..core.enums import Role
from ..core.exceptions import (
    AuthorizationError,
    DomainError,
    DuplicateRecordError,
    NotFoundError,
    OfficeNotConfiguredError,
)
from .datetime_utils import parse_iso_date

logger = logging.getLogger(__name__)


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return jsonify({"message": "Authentication required"}), 401
        return view(*args, **kwargs)

    return wrapper


def admin_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return jsonify({"message": "Authentication required"}), 401
        if session.get("role") != Role.ADMIN.value:
            return jsonify({"message": "Admin access required"}), 403
        return view(*args, **kwargs)

    return wrapper


def current_user_id() -> int:
    return int(session["user_id"])


def current_role() -> Role:
    try:
        return Role(session.get("role"))
    except ValueError:
        return Role.EMPLOYEE


def current_user_name() -> Optional[str]:
    return session.get("name")


def json_body() -> dict[str, Any]:
    return request.get_json(silent=True) or {}


def query_date(name: str):
    value = request.args.get(name)
    return parse_iso_date(value) if value else None


def error_response(exc: Exception):
    """Map an exception raised by a service to a JSON response."""
    if isinstance(exc, NotFoundError):
        return jsonify(exc.to_dict()), 404
    if isinstance(exc, AuthorizationError):
        return jsonify(exc.to_dict()), 403
    if isinstance(exc, DuplicateRecordError):
        return jsonify(exc.to_dict()), 409
    if isinstance(exc, OfficeNotConfiguredError):
        logger.warning("Rejected %s %s: %s", request.method, request.path, exc.message)
        return jsonify(exc.to_dict()), 400
    if isinstance(exc, DomainError):
        logger.info("Rejected %s %s: %s", request.method, request.path, exc.message)
        return jsonify(exc.to_dict()), 400

    logger.exception("Unhandled error on %s %s", request.method, request.path)
    return jsonify({"message": "Server error"}), 500
