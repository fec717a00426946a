from flask import (
    Blueprint,
    abort,
    current_app,
    flash,
    redirect,
    render_template,
    request,
    url_for,
)
from sqlalchemy.exc import SQLAlchemyError

from ..app import db
from ..forms.workspace_forms import EventForm
from ..models import Event
from ..services.rsvp import wedding_events
from ..shared.acl import verify_csrf
from ..shared.weddings import wedding_required

bp = Blueprint("events", __name__, url_prefix="/dashboard/events")


@bp.route("", methods=["GET", "POST"], endpoint="list_events")
@wedding_required
def list_events(current_user, wedding):
    form = EventForm()
    errors: list[str] = []
    if request.method == "POST":
        verify_csrf()
        form = EventForm.from_form(request.form)
        errors = form.validate()
        if not errors:
            event = Event(
                wedding_id=wedding.id,
                name=form.name,
                date=form.starts_at,
                location=form.location,
                description=form.description or None,
            )
            db.session.add(event)
            try:
                db.session.commit()
            except SQLAlchemyError as exc:
                db.session.rollback()
                current_app.logger.error(
                    f"[STORE-FAIL] event-create wedding={wedding.id} error={exc}"
                )
                flash("Error adding event. Please try again.", "error")
            else:
                flash("Event added.", "success")
                return redirect(url_for("events.list_events"))
    return render_template(
        "dashboard/events.html",
        wedding=wedding,
        events=wedding_events(wedding),
        form=form,
        errors=errors,
    )


@bp.post("/<int:event_id>/delete")
@wedding_required
def delete_event(event_id, current_user, wedding):
    verify_csrf()
    event = db.session.get(Event, event_id)
    if not event or event.wedding_id != wedding.id:
        abort(404)
    db.session.delete(event)
    try:
        db.session.commit()
    except SQLAlchemyError as exc:
        db.session.rollback()
        current_app.logger.error(f"[STORE-FAIL] event-delete event={event_id} error={exc}")
        flash("Error deleting event. Please try again.", "error")
    else:
        flash("Event deleted.", "success")
    return redirect(url_for("events.list_events"))
