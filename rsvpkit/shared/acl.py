"""Route-level access decisions based on session presence.

There are no roles: a signed-in user may reach the workspace, everybody may
reach public pages, and row ownership is checked by each workspace query.
"""

from __future__ import annotations

from urllib.parse import urlparse

ACCESS_ALLOW = "allow"
ACCESS_LOGIN = "login"
ACCESS_DASHBOARD = "dashboard"

WORKSPACE_PREFIX = "/dashboard"
AUTH_ONLY_PATHS = ("/login", "/register", "/forgot-password")


def is_workspace_path(path: str) -> bool:
    return path == WORKSPACE_PREFIX or path.startswith(WORKSPACE_PREFIX + "/")


def is_auth_only_path(path: str) -> bool:
    return any(path == p or path.startswith(p + "/") for p in AUTH_ONLY_PATHS)


def decide_access(path: str, has_session: bool) -> str:
    """Return one of allow, login or dashboard for the given request path."""
    if is_workspace_path(path) and not has_session:
        return ACCESS_LOGIN
    if is_auth_only_path(path) and has_session:
        return ACCESS_DASHBOARD
    return ACCESS_ALLOW


def safe_next(url: str | None) -> str | None:
    """Accept only same-site relative paths as post-login targets."""
    if not url:
        return None
    parsed = urlparse(url)
    if parsed.scheme or parsed.netloc or not url.startswith("/") or url.startswith("//"):
        return None
    return url


def verify_csrf() -> None:
    """Reject a form post whose token does not match the session's."""
    from flask import abort, request, session

    token = request.form.get("csrf_token")
    if not token or token != session.get("_csrf_token"):
        abort(400)
