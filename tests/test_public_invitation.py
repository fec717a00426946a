from datetime import datetime

import pytest

from rsvpkit.app import db
from rsvpkit.models import Event, Guest, Invitation, RSVP

from conftest import CSRF_TOKEN


@pytest.fixture
def published(owner, make_template):
    """A wedding with a saved invitation under the slug "sam-and-alex"."""
    _, wedding_id = owner
    db.session.add(
        Invitation(
            wedding_id=wedding_id,
            template_id=make_template(),
            slug="sam-and-alex",
            accent_color="#123456",
            font_choice="Great Vibes",
        )
    )
    db.session.commit()
    return wedding_id


def _token(guest_id):
    return db.session.get(Guest, guest_id).rsvp_token


def _url(guest_id=None):
    if guest_id is None:
        return "/invitation/sam-and-alex"
    return f"/invitation/sam-and-alex?guest={_token(guest_id)}"


def test_unknown_slug_is_not_found(client):
    resp = client.get("/invitation/does-not-exist")
    assert resp.status_code == 404
    assert b"Page not found" in resp.data


def test_invitation_renders_design_and_schedule(client, published):
    db.session.add_all(
        [
            Event(wedding_id=published, name="Reception", date=datetime(2030, 6, 1, 19, 0), location="Barn"),
            Event(wedding_id=published, name="Ceremony", date=datetime(2030, 6, 1, 15, 0), location="Lake"),
        ]
    )
    db.session.commit()
    client.post("/api/auth/signout", data={"csrf_token": CSRF_TOKEN})
    resp = client.get(_url())
    assert resp.status_code == 200
    body = resp.get_data(as_text=True)
    assert "Lakeside Barn" in body
    assert "Great Vibes" in body
    assert "#123456" in body
    assert body.index("Ceremony") < body.index("Reception")
    assert 'name="attending"' not in body


def test_slug_lookup_ignores_case(client, published):
    assert client.get("/invitation/SAM-AND-ALEX").status_code == 200


def test_guest_link_shows_form(client, published, make_guest):
    guest_id = make_guest(published, name="Jamie Guest")
    resp = client.get(_url(guest_id))
    assert b"Dear Jamie Guest," in resp.data
    assert b'name="attending"' in resp.data
    assert b'name="meal_choice"' in resp.data
    assert b'name="plus_one_name"' not in resp.data


def test_plus_one_fields_for_allowed_guest(client, published, make_guest):
    guest_id = make_guest(published, plus_one_allowed=True)
    resp = client.get(_url(guest_id))
    assert b'name="plus_one_name"' in resp.data
    assert b'name="plus_one_meal_choice"' in resp.data


def test_submit_twice_keeps_one_row_with_last_answer(client, published, make_guest):
    guest_id = make_guest(published)
    resp = client.post(_url(guest_id), data={"attending": "true", "meal_choice": "fish"})
    assert b"Thank you! Your response has been recorded." in resp.data

    resp = client.post(_url(guest_id), data={"attending": "false", "meal_choice": "fish"})
    assert b"Thank you! Your response has been recorded." in resp.data

    rows = RSVP.query.filter_by(guest_id=guest_id).all()
    assert len(rows) == 1
    assert rows[0].attending is False
    assert rows[0].meal_choice is None


def test_missing_attendance_is_rejected(client, published, make_guest):
    guest_id = make_guest(published)
    resp = client.post(_url(guest_id), data={"meal_choice": "beef"})
    assert resp.status_code == 200
    assert b"Please let us know whether you will attend." in resp.data
    assert RSVP.query.count() == 0


def test_unknown_meal_is_rejected(client, published, make_guest):
    guest_id = make_guest(published)
    resp = client.post(_url(guest_id), data={"attending": "true", "meal_choice": "lobster"})
    assert b"Choose a meal from the list." in resp.data
    assert RSVP.query.count() == 0


def test_plus_one_values_dropped_when_not_allowed(client, published, make_guest):
    guest_id = make_guest(published, plus_one_allowed=False)
    client.post(
        _url(guest_id),
        data={
            "attending": "true",
            "meal_choice": "chicken",
            "plus_one_name": "Sneaky Friend",
            "plus_one_meal_choice": "beef",
        },
    )
    rsvp = RSVP.query.filter_by(guest_id=guest_id).one()
    assert rsvp.meal_choice == "chicken"
    assert rsvp.plus_one_name is None
    assert rsvp.plus_one_meal_choice is None


def test_plus_one_kept_when_allowed(client, published, make_guest):
    guest_id = make_guest(published, plus_one_allowed=True)
    client.post(
        _url(guest_id),
        data={
            "attending": "true",
            "meal_choice": "vegan",
            "plus_one_name": "Riley",
            "plus_one_meal_choice": "fish",
            "notes": "No nuts please",
        },
    )
    rsvp = RSVP.query.filter_by(guest_id=guest_id).one()
    assert (rsvp.plus_one_name, rsvp.plus_one_meal_choice) == ("Riley", "fish")
    assert rsvp.notes == "No nuts please"


def test_recorded_answer_is_prefilled(client, published, make_guest):
    guest_id = make_guest(published)
    client.post(_url(guest_id), data={"attending": "true", "meal_choice": "vegetarian"})
    resp = client.get(_url(guest_id))
    body = resp.get_data(as_text=True)
    assert "Your current response: Attending (Vegetarian)." in body
    assert 'value="true" checked' in body
    assert 'value="vegetarian" selected' in body


def test_other_weddings_guest_token_is_ignored(
    client, published, make_user, make_wedding, make_guest
):
    foreign_id = make_guest(make_wedding(make_user(email="other@example.com")))
    url = f"/invitation/sam-and-alex?guest={_token(foreign_id)}"
    resp = client.get(url)
    assert resp.status_code == 200
    assert b'name="attending"' not in resp.data
    assert client.post(url, data={"attending": "true"}).status_code == 404
    assert RSVP.query.count() == 0


def test_post_without_guest_is_not_found(client, published, make_guest):
    guest_id = make_guest(published)
    assert client.post(_url(), data={"attending": "true"}).status_code == 404
    assert client.post(f"{_url()}?guest={guest_id}", data={"attending": "true"}).status_code == 404
    assert RSVP.query.count() == 0


def test_store_failure_is_rolled_back_and_reported(client, published, make_guest, monkeypatch):
    from sqlalchemy.exc import IntegrityError

    guest_id = make_guest(published)

    def concurrent_insert():
        raise IntegrityError(
            "INSERT INTO rsvps", {}, Exception("UNIQUE constraint failed: rsvps.guest_id")
        )

    monkeypatch.setattr(db.session, "commit", concurrent_insert)
    resp = client.post(_url(guest_id), data={"attending": "true"})
    monkeypatch.undo()

    assert resp.status_code == 200
    assert b"We could not save your response. Please try again." in resp.data
    assert b"Thank you!" not in resp.data
    assert RSVP.query.count() == 0
