from __future__ import annotations

from functools import wraps
from typing import Callable

from flask import flash, redirect, url_for

from ..core.enums import Role


def make_guards(current_user: Callable):
    """Build ``login_required`` / ``roles_required`` bound to a session source.

    No session -> entry page. Session without an allowed role -> dashboard.
    """

    def login_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if current_user() is None:
                flash("Please log in to continue.", "warning")
                return redirect(url_for("login"))
            return view(*args, **kwargs)

        return wrapper

    def roles_required(*roles: Role):
        allowed = set(roles)

        def decorator(view):
            @wraps(view)
            def wrapper(*args, **kwargs):
                user = current_user()
                if user is None:
                    flash("Please log in to continue.", "warning")
                    return redirect(url_for("login"))
                if user.role not in allowed:
                    return redirect(url_for("dashboard"))
                return view(*args, **kwargs)

            return wrapper

        return decorator

    return login_required, roles_required
