from flask import Blueprint, render_template

from ..constants import FONT_CHOICES

bp = Blueprint("marketing", __name__)


@bp.get("/")
def home():
    return render_template("marketing/home.html")


@bp.get("/features")
def features():
    return render_template("marketing/features.html", fonts=FONT_CHOICES)


@bp.get("/pricing")
def pricing():
    return render_template("marketing/pricing.html")
