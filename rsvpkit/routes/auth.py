from __future__ import annotations

from flask import (
    Blueprint,
    current_app,
    flash,
    redirect,
    render_template,
    request,
    session as flask_session,
    url_for,
)
from itsdangerous import BadSignature, SignatureExpired, URLSafeTimedSerializer
from sqlalchemy.exc import IntegrityError

from ..app import db
from ..models import User
from ..constants import RESET_TOKEN_MAX_AGE, RESET_TOKEN_SALT
from ..forms.account_forms import PasswordResetForm, RegisterForm, normalize_email
from ..shared.acl import safe_next, verify_csrf
from ..shared.auth_bridge import authenticate, login_user, logout_user, lookup_user
from .. import emailer

bp = Blueprint("auth", __name__)


def _serializer() -> URLSafeTimedSerializer:
    return URLSafeTimedSerializer(current_app.secret_key)


def _password_stamp(user: User) -> str:
    # Ties a reset token to the current hash so it stops working once used
    return (user.password_hash or "")[-12:]


def make_reset_token(user: User) -> str:
    return _serializer().dumps(
        {"email": user.email, "stamp": _password_stamp(user)}, salt=RESET_TOKEN_SALT
    )


def load_reset_user(token: str) -> User | None:
    try:
        data = _serializer().loads(token, salt=RESET_TOKEN_SALT, max_age=RESET_TOKEN_MAX_AGE)
    except (BadSignature, SignatureExpired):
        return None
    user = lookup_user(data.get("email", ""))
    if user is None or data.get("stamp") != _password_stamp(user):
        return None
    return user


@bp.route("/login", methods=["GET", "POST"], endpoint="login")
def login():
    next_url = safe_next(request.values.get("redirect"))
    if request.method == "POST":
        email = request.form.get("email", "")
        password = request.form.get("password", "")
        user = authenticate(email, password)
        if user is None:
            current_app.logger.info(f"[AUTH-FAIL] login email={email.strip().lower()}")
            flash("Invalid email or password.", "error")
            return redirect(url_for("auth.login", redirect=next_url))
        login_user(user)
        current_app.logger.info(f"[AUTH] login user={user.id}")
        return redirect(next_url or url_for("dashboard.overview"))
    return render_template("auth/login.html", next_url=next_url)


@bp.route("/register", methods=["GET", "POST"], endpoint="register")
def register():
    form = RegisterForm()
    errors: list[str] = []
    if request.method == "POST":
        form = RegisterForm.from_form(request.form)
        errors = form.validate()
        if not errors and lookup_user(form.email) is not None:
            errors.append("Could not create an account with those details.")
        if not errors:
            user = User(email=form.email, full_name=form.full_name)
            user.set_password(form.password)
            db.session.add(user)
            try:
                db.session.commit()
            except IntegrityError:
                db.session.rollback()
                current_app.logger.info(f"[AUTH-FAIL] register email={form.email} reason=duplicate")
                errors.append("Could not create an account with those details.")
            else:
                login_user(user)
                current_app.logger.info(f"[AUTH] register user={user.id}")
                return redirect(url_for("dashboard.overview"))
    return render_template("auth/register.html", form=form, errors=errors)


def _show_dev_token(res) -> bool:
    # Only a local or test instance without SMTP may echo the token back
    if res.get("ok") or emailer.smtp_mode() != "stub":
        return False
    return bool(current_app.debug or current_app.testing)


@bp.route("/forgot-password", methods=["GET", "POST"], endpoint="forgot_password")
def forgot_password():
    if request.method == "POST":
        email = normalize_email(request.form.get("email"))
        user = lookup_user(email) if email else None
        if user is not None:
            token = make_reset_token(user)
            link = url_for("auth.reset_password", token=token, _external=True)
            res = emailer.send(
                user.email,
                "Reset your password",
                render_template("email/reset_password.txt", user=user, link=link),
            )
            if _show_dev_token(res):
                flask_session["dev_reset_token"] = token
        else:
            current_app.logger.info("[AUTH-FAIL] reset-request reason=unknown-email")
        flash("If we find an account for that email, we'll send a reset link.", "info")
        return redirect(url_for("auth.forgot_password"))
    dev_token = flask_session.pop("dev_reset_token", None)
    return render_template("auth/forgot_password.html", dev_reset_token=dev_token)


@bp.route("/reset-password", methods=["GET", "POST"], endpoint="reset_password")
def reset_password():
    token = request.values.get("token", "")
    user = load_reset_user(token)
    if user is None:
        flash("Invalid or expired token", "error")
        return redirect(url_for("auth.forgot_password"))
    errors: list[str] = []
    if request.method == "POST":
        form = PasswordResetForm.from_form(request.form)
        errors = form.validate()
        if not errors:
            user.set_password(form.password)
            db.session.commit()
            current_app.logger.info(f"[AUTH] password-reset user={user.id}")
            flash("Password updated. Please log in.", "success")
            return redirect(url_for("auth.login"))
    return render_template("auth/reset_password.html", token=token, errors=errors)


@bp.post("/api/auth/signout", endpoint="signout")
def signout():
    verify_csrf()
    logout_user()
    flash("Signed out.", "success")
    return redirect(url_for("marketing.home"))
