from __future__ import annotations

from functools import wraps
from typing import Optional

from flask import jsonify, redirect, session, url_for

from ..core.constants import SESSION_USER_KEY
from ..core.enums import Role


def current_session_user() -> Optional[dict]:
    return session.get(SESSION_USER_KEY)


def login_required(view):
    """Page gate: redirect to the login form when no session user is present."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        if not current_session_user():
            return redirect(url_for("login"))
        return view(*args, **kwargs)

    return wrapper


def admin_required(view):
    """Role gate: 403 with a JSON message unless the session user is an admin. Never redirects."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        user = current_session_user()
        if not user or user.get("role") != Role.ADMIN.value:
            return jsonify({"message": "Access denied! Admins only."}), 403
        return view(*args, **kwargs)

    return wrapper
