from flask import Blueprint, abort, current_app, render_template, request
from sqlalchemy.exc import SQLAlchemyError

from ..app import db
from ..constants import MEAL_CHOICES
from ..forms.invitation_forms import RSVPForm
from ..services.rsvp import (
    RSVPValidationError,
    resolve_guest,
    resolve_invitation,
    upsert_rsvp,
    wedding_events,
)

bp = Blueprint("invitation", __name__, url_prefix="/invitation")


@bp.route("/<slug>", methods=["GET", "POST"], endpoint="show")
def show(slug):
    resolved = resolve_invitation(slug)
    if resolved is None:
        abort(404)
    invitation, wedding = resolved
    guest = resolve_guest(wedding, request.args.get("guest"))
    if request.args.get("guest") and guest is None:
        current_app.logger.info(f"[RSVP-FAIL] slug={invitation.slug} reason=unknown-guest")

    errors: list[str] = []
    saved = False
    form = RSVPForm.from_rsvp(guest.rsvp if guest else None)

    if request.method == "POST":
        if guest is None:
            abort(404)
        form = RSVPForm.from_form(request.form)
        try:
            upsert_rsvp(guest, form)
            db.session.commit()
        except RSVPValidationError as exc:
            errors = exc.errors
        except SQLAlchemyError as exc:
            db.session.rollback()
            current_app.logger.error(f"[STORE-FAIL] rsvp guest={guest.id} error={exc}")
            errors = ["We could not save your response. Please try again."]
        else:
            saved = True

    return render_template(
        "invitation/show.html",
        invitation=invitation,
        wedding=wedding,
        events=wedding_events(wedding),
        guest=guest,
        rsvp=guest.rsvp if guest else None,
        form=form,
        meals=MEAL_CHOICES,
        errors=errors,
        saved=saved,
    )
