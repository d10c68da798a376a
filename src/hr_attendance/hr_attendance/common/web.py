"""Shared Flask helpers: role guards and DomainError -> JSON mapping.

Controllers stay thin: they read the caller from the session, pass role/id
explicitly into services and turn domain errors into status codes.
"""

from __future__ import annotations

import logging
from datetime import date
from functools import wraps
from typing import Optional

from flask import jsonify, request, session

from ..core.enums import Role
from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    DomainError,
    DownstreamError,
    NotFoundError,
    StateConflictError,
    ValidationError,
)
from .datetime_utils import parse_iso_date

logger = logging.getLogger(__name__)


def _fail(message: str, status: int):
    return jsonify({"success": False, "message": message}), status


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return _fail("Not authorized, please log in", 401)
        return view(*args, **kwargs)

    return wrapper


def role_required(role: Role):
    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if "user_id" not in session:
                return _fail("Not authorized, please log in", 401)
            if session.get("role") != role.value:
                return _fail(f"Access denied: {role.value} role required", 403)
            return view(*args, **kwargs)

        return wrapper

    return decorator


admin_required = role_required(Role.ADMIN)
employee_required = role_required(Role.EMPLOYEE)


def current_user_id() -> int:
    return int(session["user_id"])


def current_role() -> Role:
    return Role(session["role"])


def status_for(exc: DomainError) -> int:
    if isinstance(exc, AuthenticationError):
        return 401
    if isinstance(exc, AuthorizationError):
        return 403
    if isinstance(exc, NotFoundError):
        return 404
    if isinstance(exc, StateConflictError):
        return 409
    if isinstance(exc, DownstreamError):
        return 503
    return 400


def handle_errors(action: str):
    """Wrap a JSON view: domain errors keep their message, anything else is a generic 500."""

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            try:
                return view(*args, **kwargs)
            except DomainError as e:
                return _fail(str(e), status_for(e))
            except Exception:
                logger.exception("%s failed", action)
                return _fail(f"Server error during {action}.", 500)

        return wrapper

    return decorator


def json_body() -> dict:
    return request.get_json(silent=True) or {}


def optional_date_arg(name: str) -> Optional[date]:
    value = request.args.get(name)
    if not value:
        return None
    try:
        return parse_iso_date(value)
    except ValueError:
        raise ValidationError(f"{name} must be YYYY-MM-DD")


def required_date(value, name: str) -> date:
    if not value:
        raise ValidationError(f"{name} is required")
    try:
        return parse_iso_date(str(value))
    except ValueError:
        raise ValidationError(f"{name} must be YYYY-MM-DD")


def optional_int_arg(name: str) -> Optional[int]:
    value = request.args.get(name)
    if value in (None, ""):
        return None
    try:
        return int(value)
    except ValueError:
        raise ValidationError(f"{name} must be an integer")


def json_flag(value) -> bool:
    """Strict JSON boolean: true, "true" and "1" are on; anything else is off."""
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() in {"true", "1"}
    return False
