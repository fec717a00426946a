from datetime import datetime

from rsvpkit.app import db
from rsvpkit.models import Event

from conftest import CSRF_TOKEN


def _add(client, **overrides):
    data = {
        "name": "Ceremony",
        "date": "2030-06-01",
        "time": "15:30",
        "location": "Chapel",
        "description": "",
        "csrf_token": CSRF_TOKEN,
    }
    data.update(overrides)
    return client.post("/dashboard/events", data=data, follow_redirects=True)


def test_add_event_with_time(client, owner):
    _, wedding_id = owner
    resp = _add(client)
    assert b"Event added." in resp.data
    event = Event.query.filter_by(wedding_id=wedding_id).one()
    assert event.date == datetime(2030, 6, 1, 15, 30)
    assert event.location == "Chapel"


def test_add_event_without_time_is_midnight(client, owner):
    _add(client, time="")
    assert Event.query.one().date == datetime(2030, 6, 1, 0, 0)


def test_add_event_validation(client, owner):
    resp = _add(client, name="", date="01/06/2030", time="3pm", location="")
    assert b"Event name required." in resp.data
    assert b"Event date must be YYYY-MM-DD." in resp.data
    assert b"Event time must be HH:MM." in resp.data
    assert b"Event location required." in resp.data
    assert Event.query.count() == 0


def test_events_listed_chronologically(client, owner):
    _add(client, name="Reception", date="2030-06-01", time="19:00")
    _add(client, name="Rehearsal Dinner", date="2030-05-31", time="18:00")
    _add(client, name="Ceremony", date="2030-06-01", time="15:00")
    body = client.get("/dashboard/events").get_data(as_text=True)
    assert body.index("Rehearsal Dinner") < body.index("Ceremony") < body.index("Reception")


def test_delete_event(client, owner):
    _add(client)
    event_id = Event.query.one().id
    resp = client.post(
        f"/dashboard/events/{event_id}/delete",
        data={"csrf_token": CSRF_TOKEN},
        follow_redirects=True,
    )
    assert b"Event deleted." in resp.data
    assert Event.query.count() == 0


def test_cannot_delete_another_couples_event(client, owner, make_user, make_wedding):
    other = make_wedding(make_user(email="other@example.com"))
    event = Event(wedding_id=other, name="Party", date=datetime(2030, 1, 1), location="Hall")
    db.session.add(event)
    db.session.commit()
    resp = client.post(
        f"/dashboard/events/{event.id}/delete", data={"csrf_token": CSRF_TOKEN}
    )
    assert resp.status_code == 404
    assert db.session.get(Event, event.id) is not None
