import os
import pathlib
import sys
from datetime import date

import pytest

PROJECT_ROOT = pathlib.Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from rsvpkit.app import create_app, db
from rsvpkit.models import Guest, InvitationTemplate, User, Wedding

CSRF_TOKEN = "test-csrf-token"


def pytest_collection_modifyitems(config, items):
    for item in items:
        if "slow" in item.keywords:
            continue
        item.add_marker("full")
        if "no_smoke" in item.keywords:
            continue
        item.add_marker("smoke")


@pytest.fixture
def app():
    os.environ["DATABASE_URL"] = "sqlite:///:memory:"
    os.environ.pop("SEED_TEMPLATES", None)
    application = create_app()
    application.config["TESTING"] = True
    application.config["SMTP_HOST"] = None
    with application.app_context():
        db.create_all()
        yield application
        db.session.remove()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def login(client):
    def _login(user_id):
        with client.session_transaction() as sess:
            sess["user_id"] = user_id
            sess["_csrf_token"] = CSRF_TOKEN

    return _login


@pytest.fixture
def make_user(app):
    def _make(email="couple@example.com", password="correct-horse", full_name="Sam Couple"):
        user = User(email=email, full_name=full_name)
        user.set_password(password)
        db.session.add(user)
        db.session.commit()
        return user.id

    return _make


@pytest.fixture
def make_wedding(app):
    def _make(user_id, title="Sam & Alex", when=date(2030, 6, 1), location="Lakeside Barn"):
        wedding = Wedding(user_id=user_id, title=title, date=when, location=location)
        db.session.add(wedding)
        db.session.commit()
        return wedding.id

    return _make


@pytest.fixture
def make_guest(app):
    def _make(wedding_id, name="Jamie Guest", **fields):
        guest = Guest(wedding_id=wedding_id, name=name, **fields)
        db.session.add(guest)
        db.session.commit()
        return guest.id

    return _make


@pytest.fixture
def make_template(app):
    def _make(name="Classic Elegance", is_premium=False):
        template = InvitationTemplate(name=name, is_premium=is_premium)
        db.session.add(template)
        db.session.commit()
        return template.id

    return _make


@pytest.fixture
def owner(make_user, make_wedding, login):
    """A signed-in couple with a wedding; returns (user_id, wedding_id)."""
    user_id = make_user()
    wedding_id = make_wedding(user_id)
    login(user_id)
    return user_id, wedding_id
