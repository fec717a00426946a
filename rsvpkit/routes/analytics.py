from flask import Blueprint, render_template

from ..services.analytics import wedding_stats
from ..shared.weddings import wedding_required

bp = Blueprint("analytics", __name__, url_prefix="/dashboard/analytics")


@bp.get("", endpoint="index")
@wedding_required
def index(current_user, wedding):
    return render_template(
        "dashboard/analytics.html", wedding=wedding, stats=wedding_stats(wedding)
    )
