from __future__ import annotations

import logging

from ..app import db
from ..forms.invitation_forms import RSVPForm
from ..models import Event, Guest, Invitation, RSVP, Wedding
from ..shared.time import now_utc

logger = logging.getLogger("rsvpkit.rsvp")


class RSVPValidationError(ValueError):
    """Raised when a guest's response fails validation."""

    def __init__(self, errors: list[str]):
        super().__init__("; ".join(errors))
        self.errors = errors


def resolve_invitation(slug: str) -> tuple[Invitation, Wedding] | None:
    """Look up a published invitation and its wedding by slug."""
    invitation = Invitation.query.filter_by(slug=(slug or "").lower()).one_or_none()
    if invitation is None:
        return None
    wedding = db.session.get(Wedding, invitation.wedding_id)
    if wedding is None:
        return None
    return invitation, wedding


def wedding_events(wedding: Wedding) -> list[Event]:
    return (
        Event.query.filter_by(wedding_id=wedding.id).order_by(Event.date.asc()).all()
    )


def resolve_guest(wedding: Wedding, token: str | None) -> Guest | None:
    """Find the guest addressed by an RSVP token, scoped to the wedding."""
    token = (token or "").strip()
    if not token:
        return None
    return Guest.query.filter_by(wedding_id=wedding.id, rsvp_token=token).one_or_none()


def upsert_rsvp(guest: Guest, form: RSVPForm) -> RSVP:
    """Create or overwrite the single response row for a guest.

    The last submission wins; nothing of the earlier answer is kept.
    """
    errors = form.validate(guest.plus_one_allowed)
    if errors:
        raise RSVPValidationError(errors)
    if form.dropped:
        logger.info(
            "[RSVP-DROP] guest=%s fields=%s", guest.id, ",".join(form.dropped)
        )

    record = RSVP.query.filter_by(guest_id=guest.id).one_or_none()
    if record is None:
        record = RSVP(guest_id=guest.id)
        db.session.add(record)
    else:
        record.updated_at = now_utc()
    record.attending = form.attending
    record.meal_choice = form.meal_choice or None
    record.plus_one_name = form.plus_one_name or None
    record.plus_one_meal_choice = form.plus_one_meal_choice or None
    record.notes = form.notes or None
    logger.info("[RSVP] guest=%s attending=%s", guest.id, form.attending)
    return record
