from __future__ import annotations

from functools import wraps

from flask import abort, session

from ..core.enums import Role
from ..core.exceptions import AuthorizationError


def current_role() -> Role:
    try:
        return Role(session.get("role"))
    except ValueError:
        abort(401)


def current_user_id() -> str:
    return str(session.get("user_id") or "")


def login_required(view):
    """Async view guard: the outer login layer must have set user_id and role."""

    @wraps(view)
    async def wrapper(*args, **kwargs):
        if "user_id" not in session:
            abort(401)
        current_role()
        return await view(*args, **kwargs)

    return wrapper


def roles_required(*roles: Role):
    def decorator(view):
        @wraps(view)
        async def wrapper(*args, **kwargs):
            if "user_id" not in session:
                abort(401)
            if current_role() not in roles:
                raise AuthorizationError("You do not have access to this action")
            return await view(*args, **kwargs)

        return wrapper

    return decorator
