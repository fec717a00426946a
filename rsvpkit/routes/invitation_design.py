from flask import Blueprint, current_app, flash, redirect, render_template, request, url_for
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from ..app import db
from ..constants import FONT_CHOICES
from ..forms.invitation_forms import InvitationForm
from ..models import Invitation, InvitationTemplate
from ..shared.acl import verify_csrf
from ..shared.links import generate_slug, invitation_url, is_valid_slug
from ..shared.weddings import wedding_required

bp = Blueprint("invitation_design", __name__, url_prefix="/dashboard/invitation")

SLUG_TAKEN = "That link is already taken. Try another or regenerate it."


def _slug_taken(slug: str, wedding_id: int) -> bool:
    return (
        db.session.query(Invitation.id)
        .filter(Invitation.slug == slug, Invitation.wedding_id != wedding_id)
        .first()
        is not None
    )


@bp.route("", methods=["GET", "POST"], endpoint="design")
@wedding_required
def design(current_user, wedding):
    templates = InvitationTemplate.query.order_by(InvitationTemplate.name).all()
    invitation = wedding.invitation
    errors: list[str] = []

    if request.method == "GET":
        if invitation:
            form = InvitationForm.from_invitation(invitation)
        else:
            form = InvitationForm(slug=generate_slug())
    else:
        verify_csrf()
        form = InvitationForm.from_form(request.form)
        action = request.form.get("action", "save")
        if action == "regenerate":
            # Preview only; the new slug is stored on the next save
            form.slug = generate_slug()
        else:
            errors = form.validate({t.id for t in templates})
            if not errors and _slug_taken(form.slug, wedding.id):
                errors.append(SLUG_TAKEN)
            if not errors:
                created = invitation is None
                if created:
                    invitation = Invitation(wedding_id=wedding.id)
                    db.session.add(invitation)
                invitation.template_id = form.template_id
                invitation.custom_message = form.custom_message or None
                invitation.accent_color = form.accent_color
                invitation.font_choice = form.font_choice
                invitation.slug = form.slug
                try:
                    db.session.commit()
                except IntegrityError:
                    db.session.rollback()
                    invitation = wedding.invitation
                    errors.append(SLUG_TAKEN)
                except SQLAlchemyError as exc:
                    db.session.rollback()
                    invitation = wedding.invitation
                    current_app.logger.error(
                        f"[STORE-FAIL] invitation-save wedding={wedding.id} error={exc}"
                    )
                    errors.append("Error saving invitation. Please try again.")
                else:
                    current_app.logger.info(
                        f"[INVITATION] {'created' if created else 'updated'} "
                        f"wedding={wedding.id} slug={invitation.slug}"
                    )
                    flash("Invitation saved.", "success")
                    return redirect(url_for("invitation_design.design"))

    preview_url = invitation_url(form.slug) if is_valid_slug(form.slug) else None
    return render_template(
        "dashboard/invitation.html",
        wedding=wedding,
        templates=templates,
        invitation=invitation,
        form=form,
        fonts=FONT_CHOICES,
        preview_url=preview_url,
        errors=errors,
    )
