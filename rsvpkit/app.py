import logging
import os
import secrets

from flask import (
    Flask,
    redirect,
    render_template,
    request,
    session,
    url_for,
)
from flask_sqlalchemy import SQLAlchemy
from sqlalchemy.exc import SQLAlchemyError

db = SQLAlchemy()

from .models import User, InvitationTemplate  # noqa: E402
from .constants import DEFAULT_TEMPLATES  # noqa: E402
from .shared.acl import decide_access, ACCESS_LOGIN, ACCESS_DASHBOARD  # noqa: E402
from .shared.time import fmt_dt, fmt_date, fmt_time  # noqa: E402


def create_app():
    app = Flask(__name__, template_folder="templates")
    app.secret_key = os.getenv("SECRET_KEY", "dev")
    app.jinja_env.filters["fmt_dt"] = fmt_dt
    app.jinja_env.filters["fmt_date"] = fmt_date
    app.jinja_env.filters["fmt_time"] = fmt_time

    def generate_csrf_token():
        token = session.get("_csrf_token")
        if not token:
            token = secrets.token_hex(16)
            session["_csrf_token"] = token
        return token

    app.jinja_env.globals["csrf_token"] = generate_csrf_token

    DB_USER = os.getenv("DB_USER", "rsvpkit")
    DB_PASSWORD = os.getenv("POSTGRES_PASSWORD", "postgres")
    DB_HOST = os.getenv("DB_HOST", "db")
    DB_NAME = os.getenv("DB_NAME", "rsvpkit")
    DATABASE_URL = os.getenv(
        "DATABASE_URL",
        f"postgresql+psycopg2://{DB_USER}:{DB_PASSWORD}@{DB_HOST}/{DB_NAME}",
    )

    app.config["SQLALCHEMY_DATABASE_URI"] = DATABASE_URL
    app.config["SQLALCHEMY_TRACK_MODIFICATIONS"] = False
    app.config["PUBLIC_BASE_URL"] = os.getenv(
        "PUBLIC_BASE_URL", "http://localhost:5000"
    ).rstrip("/")
    for key in (
        "SMTP_HOST",
        "SMTP_PORT",
        "SMTP_USER",
        "SMTP_PASS",
        "SMTP_FROM_DEFAULT",
        "SMTP_FROM_NAME",
    ):
        app.config[key] = os.getenv(key)

    db.init_app(app)

    @app.before_request
    def access_gate():
        decision = decide_access(request.path, bool(session.get("user_id")))
        if decision == ACCESS_LOGIN:
            return redirect(url_for("auth.login", redirect=request.path))
        if decision == ACCESS_DASHBOARD:
            return redirect(url_for("dashboard.overview"))
        return None

    @app.context_processor
    def inject_user():
        user = None
        user_id = session.get("user_id")
        if user_id:
            user = db.session.get(User, user_id)
        return {"current_user": user}

    @app.errorhandler(404)
    def not_found(error):
        return render_template("404.html"), 404

    @app.errorhandler(SQLAlchemyError)
    def store_failure(error):
        db.session.rollback()
        app.logger.error(f"[STORE-FAIL] path={request.path} error={error}")
        return render_template("500.html"), 500

    @app.get("/health")
    def health():  # pragma: no cover - simple healthcheck
        return "OK", 200

    from .routes.marketing import bp as marketing_bp
    from .routes.auth import bp as auth_bp
    from .routes.dashboard import bp as dashboard_bp
    from .routes.settings import bp as settings_bp
    from .routes.guests import bp as guests_bp
    from .routes.events import bp as events_bp
    from .routes.invitation_design import bp as invitation_design_bp
    from .routes.analytics import bp as analytics_bp
    from .routes.invitation import bp as invitation_bp

    app.register_blueprint(marketing_bp)
    app.register_blueprint(auth_bp)
    app.register_blueprint(dashboard_bp)
    app.register_blueprint(settings_bp)
    app.register_blueprint(guests_bp)
    app.register_blueprint(events_bp)
    app.register_blueprint(invitation_design_bp)
    app.register_blueprint(analytics_bp)
    app.register_blueprint(invitation_bp)

    with app.app_context():
        if os.getenv("SEED_TEMPLATES"):
            seed_templates_safely()

    return app


def seed_templates(templates=DEFAULT_TEMPLATES) -> int:
    """Insert the default invitation template catalog when it is empty."""

    if db.session.query(InvitationTemplate).count() > 0:
        return 0
    for entry in templates:
        db.session.add(InvitationTemplate(**entry))
    db.session.commit()
    return len(templates)


def seed_templates_safely() -> None:
    try:
        from sqlalchemy import inspect

        insp = inspect(db.engine)
        if "invitation_templates" not in insp.get_table_names():
            logging.info("Template seed skipped (table missing)")
            return
        count = seed_templates()
        if count:
            logging.info("Seeded %d invitation templates.", count)
    except SQLAlchemyError as exc:  # pragma: no cover
        db.session.rollback()
        logging.error("Template seed failed: %s", exc)
