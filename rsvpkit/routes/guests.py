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
from sqlalchemy import or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import joinedload

from ..app import db
from ..forms.workspace_forms import GuestForm
from ..models import Guest
from ..services.analytics import wedding_stats
from ..shared.acl import verify_csrf
from ..shared.links import invitation_url
from ..shared.weddings import wedding_required
from .. import emailer

bp = Blueprint("guests", __name__, url_prefix="/dashboard/guests")


def search_guests(wedding_id: int, query: str | None) -> list[Guest]:
    """Guests of one wedding, optionally matching query in name or email."""
    q = Guest.query.options(joinedload(Guest.rsvp)).filter(
        Guest.wedding_id == wedding_id
    )
    term = (query or "").strip()
    if term:
        q = q.filter(
            or_(
                Guest.name.icontains(term, autoescape=True),
                Guest.email.icontains(term, autoescape=True),
            )
        )
    return q.order_by(Guest.name).all()


@bp.route("", methods=["GET", "POST"], endpoint="list_guests")
@wedding_required
def list_guests(current_user, wedding):
    form = GuestForm()
    errors: list[str] = []
    if request.method == "POST":
        verify_csrf()
        form = GuestForm.from_form(request.form)
        errors = form.validate()
        if not errors:
            guest = Guest(
                wedding_id=wedding.id,
                name=form.name,
                email=form.email or None,
                phone=form.phone or None,
                plus_one_allowed=form.plus_one_allowed,
            )
            db.session.add(guest)
            try:
                db.session.commit()
            except SQLAlchemyError as exc:
                db.session.rollback()
                current_app.logger.error(
                    f"[STORE-FAIL] guest-create wedding={wedding.id} error={exc}"
                )
                flash("Could not add guest. Please try again.", "error")
            else:
                current_app.logger.info(
                    f"[GUEST] created guest={guest.id} wedding={wedding.id}"
                )
                flash("Guest added.", "success")
                return redirect(url_for("guests.list_guests"))

    query = request.args.get("q", "")
    invitation = wedding.invitation
    guests = search_guests(wedding.id, query)
    links = {}
    if invitation:
        links = {g.id: invitation_url(invitation.slug, g.rsvp_token) for g in guests}
    return render_template(
        "dashboard/guests.html",
        wedding=wedding,
        guests=guests,
        links=links,
        query=query,
        form=form,
        errors=errors,
        stats=wedding_stats(wedding),
    )


@bp.post("/<int:guest_id>/delete")
@wedding_required
def delete_guest(guest_id, current_user, wedding):
    verify_csrf()
    guest = db.session.get(Guest, guest_id)
    if not guest or guest.wedding_id != wedding.id:
        abort(404)
    db.session.delete(guest)
    try:
        db.session.commit()
    except SQLAlchemyError as exc:
        db.session.rollback()
        current_app.logger.error(f"[STORE-FAIL] guest-delete guest={guest_id} error={exc}")
        flash("Could not delete guest. Please try again.", "error")
    else:
        current_app.logger.info(f"[GUEST] deleted guest={guest_id} wedding={wedding.id}")
        flash("Guest deleted.", "success")
    return redirect(url_for("guests.list_guests"))


@bp.post("/mark-sent")
@wedding_required
def mark_sent(current_user, wedding):
    verify_csrf()
    ids = {int(x) for x in request.form.getlist("guest_ids") if x.isdigit()}
    if not ids:
        flash("Select at least one guest.", "error")
        return redirect(url_for("guests.list_guests"))
    guests = Guest.query.filter(
        Guest.wedding_id == wedding.id, Guest.id.in_(ids)
    ).all()
    for guest in guests:
        guest.invitation_sent = True
    try:
        db.session.commit()
    except SQLAlchemyError as exc:
        db.session.rollback()
        current_app.logger.error(f"[STORE-FAIL] guest-mark-sent wedding={wedding.id} error={exc}")
        flash("Could not update guests. Please try again.", "error")
        return redirect(url_for("guests.list_guests"))

    mailed = _mail_invitations(wedding, guests)
    current_app.logger.info(
        f"[GUEST] marked-sent wedding={wedding.id} count={len(guests)} mailed={mailed}"
    )
    flash(f"Marked {len(guests)} guest(s) as sent.", "success")
    return redirect(url_for("guests.list_guests"))


def _mail_invitations(wedding, guests) -> int:
    invitation = wedding.invitation
    if invitation is None:
        return 0
    mailed = 0
    for guest in guests:
        if not guest.email:
            continue
        link = invitation_url(invitation.slug, guest.rsvp_token)
        res = emailer.send(
            guest.email,
            f"You're invited: {wedding.title}",
            render_template(
                "email/invitation.txt", wedding=wedding, guest=guest, link=link
            ),
        )
        if res.get("ok"):
            mailed += 1
        else:
            current_app.logger.info(
                f"[MAIL-FAIL] invitation guest={guest.id} detail=\"{res.get('detail')}\""
            )
    return mailed
