from flask import Blueprint, render_template

from ..services.analytics import wedding_stats
from ..shared.links import invitation_url
from ..shared.weddings import active_wedding, login_required

bp = Blueprint("dashboard", __name__, url_prefix="/dashboard")


@bp.get("", endpoint="overview")
@login_required
def overview(current_user):
    wedding = active_wedding(current_user)
    if wedding is None:
        return render_template("dashboard/no_wedding.html")
    invitation = wedding.invitation
    share_url = invitation_url(invitation.slug) if invitation else None
    return render_template(
        "dashboard/overview.html",
        wedding=wedding,
        invitation=invitation,
        share_url=share_url,
        stats=wedding_stats(wedding),
    )
