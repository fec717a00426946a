from __future__ import annotations

from functools import wraps

from flask import redirect, render_template, session, url_for

from ..app import db
from ..models import User, Wedding


def active_wedding(user: User | None) -> Wedding | None:
    """The single wedding owned by user, if one has been set up."""
    if user is None:
        return None
    return Wedding.query.filter_by(user_id=user.id).one_or_none()


def login_required(fn):
    @wraps(fn)
    def wrapper(*args, **kwargs):
        user_id = session.get("user_id")
        user = db.session.get(User, user_id) if user_id else None
        if user is None:
            session.clear()
            return redirect(url_for("auth.login"))
        return fn(*args, **kwargs, current_user=user)

    return wrapper


def wedding_required(fn):
    """Inject the caller's wedding, or show the set-up prompt when missing."""

    @wraps(fn)
    @login_required
    def wrapper(*args, current_user, **kwargs):
        wedding = active_wedding(current_user)
        if wedding is None:
            return render_template("dashboard/no_wedding.html")
        return fn(*args, **kwargs, current_user=current_user, wedding=wedding)

    return wrapper
