from flask import Blueprint, current_app, flash, redirect, render_template, request, url_for
from sqlalchemy.exc import SQLAlchemyError

from ..app import db
from ..forms.workspace_forms import ProfileForm, WeddingForm
from ..models import Wedding
from ..shared.acl import verify_csrf
from ..shared.weddings import active_wedding, login_required

bp = Blueprint("settings", __name__, url_prefix="/dashboard/settings")


@bp.route("", methods=["GET", "POST"], endpoint="index")
@login_required
def index(current_user):
    wedding = active_wedding(current_user)
    profile_form = ProfileForm(full_name=current_user.full_name or "")
    wedding_form = WeddingForm.from_wedding(wedding)
    profile_errors: list[str] = []
    wedding_errors: list[str] = []

    if request.method == "POST":
        verify_csrf()
        section = request.form.get("form")
        if section == "profile":
            profile_form = ProfileForm.from_form(request.form)
            profile_errors = profile_form.validate()
            if not profile_errors:
                current_user.full_name = profile_form.full_name
                if _commit("profile", current_user.id):
                    flash("Profile updated.", "success")
                    return redirect(url_for("settings.index"))
        elif section == "wedding":
            wedding_form = WeddingForm.from_form(request.form)
            wedding_errors = wedding_form.validate()
            if not wedding_errors:
                if wedding is None:
                    wedding = Wedding(user_id=current_user.id)
                    db.session.add(wedding)
                wedding.title = wedding_form.title
                wedding.date = wedding_form.wedding_date
                wedding.location = wedding_form.location
                wedding.description = wedding_form.description or None
                if _commit("wedding", current_user.id):
                    flash("Wedding details saved.", "success")
                    return redirect(url_for("settings.index"))
        else:
            flash("Unknown form.", "error")

    return render_template(
        "dashboard/settings.html",
        wedding=wedding,
        profile_form=profile_form,
        wedding_form=wedding_form,
        profile_errors=profile_errors,
        wedding_errors=wedding_errors,
    )


def _commit(section: str, user_id: int) -> bool:
    try:
        db.session.commit()
    except SQLAlchemyError as exc:
        db.session.rollback()
        current_app.logger.error(
            f"[STORE-FAIL] settings section={section} user={user_id} error={exc}"
        )
        flash("Could not save your changes. Please try again.", "error")
        return False
    return True
