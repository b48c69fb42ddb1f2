from __future__ import annotations

from functools import wraps

from flask import flash, redirect, session, url_for

from ..core.enums import RoleKey
from ..core.exceptions import AuthorizationError


def current_staff() -> dict:
    return {"full_name": session.get("name"), "roles": session.get("roles", [])}


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "staff_id" not in session:
            flash("Please log in to continue.", "warning")
            return redirect(url_for("login"))
        return view(*args, **kwargs)

    return wrapper


def role_required(role: RoleKey):
    """Reject the request before the view runs unless the staff holds ``role``.

    Anonymous requests go to the login page; a missing role raises
    ``AuthorizationError``, rendered as the 403 page by the app error handler.
    """

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if "staff_id" not in session:
                return redirect(url_for("login"))

            if role.value not in session.get("roles", []):
                raise AuthorizationError(f"Role {role.value} is required")

            return view(*args, **kwargs)

        return wrapper

    return decorator
