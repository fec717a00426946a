from urllib.parse import parse_qs, urlparse

import pytest

from rsvpkit.shared.acl import (
    ACCESS_ALLOW,
    ACCESS_DASHBOARD,
    ACCESS_LOGIN,
    decide_access,
    safe_next,
)


@pytest.mark.parametrize(
    "path,has_session,expected",
    [
        ("/dashboard", False, ACCESS_LOGIN),
        ("/dashboard/guests", False, ACCESS_LOGIN),
        ("/dashboard/guests", True, ACCESS_ALLOW),
        ("/dashboards", False, ACCESS_ALLOW),
        ("/login", True, ACCESS_DASHBOARD),
        ("/register", True, ACCESS_DASHBOARD),
        ("/forgot-password", True, ACCESS_DASHBOARD),
        ("/login", False, ACCESS_ALLOW),
        ("/reset-password", True, ACCESS_ALLOW),
        ("/invitation/abc12345", False, ACCESS_ALLOW),
        ("/", True, ACCESS_ALLOW),
    ],
)
def test_decide_access(path, has_session, expected):
    assert decide_access(path, has_session) == expected


def test_safe_next_rejects_offsite_targets():
    assert safe_next("/dashboard/events") == "/dashboard/events"
    assert safe_next("https://evil.example.com/") is None
    assert safe_next("//evil.example.com/") is None
    assert safe_next("dashboard") is None
    assert safe_next(None) is None


def test_anonymous_workspace_request_redirects_to_login(client):
    resp = client.get("/dashboard/guests")
    assert resp.status_code == 302
    location = urlparse(resp.headers["Location"])
    assert location.path == "/login"
    assert parse_qs(location.query)["redirect"] == ["/dashboard/guests"]


def test_signed_in_user_is_sent_from_login_to_dashboard(client, make_user, login):
    login(make_user())
    resp = client.get("/login")
    assert resp.status_code == 302
    assert urlparse(resp.headers["Location"]).path == "/dashboard"


def test_public_pages_need_no_session(client):
    for path in ("/", "/features", "/pricing", "/login", "/register"):
        assert client.get(path).status_code == 200


def test_login_returns_to_original_path(client, make_user, make_wedding):
    user_id = make_user(email="back@example.com", password="correct-horse")
    make_wedding(user_id)
    resp = client.post(
        "/login",
        data={
            "email": "back@example.com",
            "password": "correct-horse",
            "redirect": "/dashboard/guests",
        },
        follow_redirects=True,
    )
    assert resp.request.path == "/dashboard/guests"


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.data == b"OK"


@pytest.mark.parametrize(
    "path,data",
    [
        ("/dashboard/guests", {"name": "Pat"}),
        ("/dashboard/events", {"name": "Toast", "date": "2030-06-01", "location": "Hall"}),
        ("/dashboard/invitation", {"action": "save", "slug": "our-day"}),
        ("/dashboard/invitation", {"action": "regenerate"}),
        ("/dashboard/settings", {"form": "profile", "full_name": "Changed"}),
        ("/dashboard/settings", {"form": "wedding", "title": "T", "date": "2030-01-01", "location": "L"}),
    ],
)
def test_workspace_posts_require_csrf(client, owner, path, data):
    resp = client.post(path, data=data)
    assert resp.status_code == 400
    resp = client.post(path, data={**data, "csrf_token": "wrong"})
    assert resp.status_code == 400
