from __future__ import annotations

from functools import wraps
from typing import Any, Optional

import structlog
from flask import jsonify, request, session

from ..core.enums import Role
from ..core.exceptions import AuthenticationError, AuthorizationError, DomainError, NotFoundError
from ..core.result import ActionResult
from ..identity.model import SessionUser

log = structlog.get_logger(__name__)


def current_user() -> Optional[SessionUser]:
    if "uid" not in session:
        return None
    return SessionUser(
        uid=session["uid"],
        email=session.get("email", ""),
        name=session.get("name", ""),
        role=Role(session.get("role", Role.CLEANER.value)),
    )


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "uid" not in session:
            return jsonify({"success": False, "message": "Please sign in to continue"}), 401
        return view(*args, **kwargs)

    return wrapper


def admin_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        user = current_user()
        if not user:
            return jsonify({"success": False, "message": "Please sign in to continue"}), 401
        if not user.role.is_admin:
            return jsonify({"success": False, "message": "You do not have permission"}), 403
        return view(*args, **kwargs)

    return wrapper


def payload() -> dict[str, Any]:
    """JSON body, falling back to form fields."""
    data = request.get_json(silent=True)
    if isinstance(data, dict):
        return data
    return request.form.to_dict()


def result_response(result: ActionResult, *, ok_status: int = 200, **extra: Any):
    body = {**result.to_dict(), **extra}
    return jsonify(body), (ok_status if result.success else 400)


def error_response(e: Exception, action: str):
    """One terminal message per failed action."""
    if isinstance(e, AuthenticationError):
        status = 401
    elif isinstance(e, AuthorizationError):
        status = 403
    elif isinstance(e, NotFoundError):
        status = 404
    elif isinstance(e, DomainError):
        status = 400
    else:
        log.exception("action_failed", action=action)
        return jsonify({"success": False, "message": f"System error while trying to {action}"}), 500

    return jsonify({"success": False, "message": str(e)}), status


def as_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in {"1", "true", "yes", "on"}
