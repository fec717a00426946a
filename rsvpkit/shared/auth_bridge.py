from __future__ import annotations

from flask import session

from ..app import db
from ..models import User
from .passwords import check_password

SESSION_KEYS = ("user_id", "user_email")


def lookup_user(email: str) -> User | None:
    """Return the account registered under email, ignoring case."""
    email_lc = (email or "").strip().lower()
    if not email_lc:
        return None
    return User.query.filter(db.func.lower(User.email) == email_lc).first()


def authenticate(email: str, password: str) -> User | None:
    user = lookup_user(email)
    if user is None or not check_password(password, user.password_hash):
        return None
    return user


def login_user(user: User) -> None:
    """Populate session keys for the signed-in user."""
    for key in SESSION_KEYS:
        session.pop(key, None)
    session["user_id"] = user.id
    session["user_email"] = user.email


def logout_user() -> None:
    session.clear()
