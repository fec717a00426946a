"""Read-only RSVP rollups for a wedding's dashboard."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from datetime import date
from typing import Iterable

from ..app import db
from ..models import Guest, RSVP, Wedding
from ..shared.time import utc_day


def percent(part: int, whole: int) -> int:
    """Whole-number percentage, halves rounded up (1 of 8 is 13)."""
    if not whole:
        return 0
    return (part * 200 + whole) // (2 * whole)


@dataclass
class RSVPStats:
    total_guests: int = 0
    total_rsvps: int = 0
    attending: int = 0
    not_attending: int = 0
    pending: int = 0
    # RSVP rows beyond the guest count; non-zero only for inconsistent data
    rsvp_overflow: int = 0
    meal_choices: list[tuple[str, int]] = field(default_factory=list)
    timeline: list[tuple[date, int]] = field(default_factory=list)

    @property
    def response_rate(self) -> int:
        return percent(self.total_rsvps, self.total_guests)

    @property
    def attending_rate(self) -> int:
        return percent(self.attending, self.total_rsvps)

    @property
    def declined_rate(self) -> int:
        return percent(self.not_attending, self.total_rsvps)


def _meal_label(value: str) -> str:
    return value[:1].upper() + value[1:]


def compute_stats(total_guests: int, rsvps: Iterable[RSVP]) -> RSVPStats:
    rsvps = list(rsvps)
    meals: Counter[str] = Counter()
    days: Counter[date] = Counter()
    attending = not_attending = 0
    for rsvp in rsvps:
        if rsvp.attending is True:
            attending += 1
        elif rsvp.attending is False:
            not_attending += 1
        for choice in (rsvp.meal_choice, rsvp.plus_one_meal_choice):
            if choice:
                meals[choice.strip().lower()] += 1
        if rsvp.created_at is not None:
            days[utc_day(rsvp.created_at)] += 1

    total_rsvps = len(rsvps)
    gap = total_guests - total_rsvps
    return RSVPStats(
        total_guests=total_guests,
        total_rsvps=total_rsvps,
        attending=attending,
        not_attending=not_attending,
        pending=max(gap, 0),
        rsvp_overflow=max(-gap, 0),
        meal_choices=[(_meal_label(name), count) for name, count in meals.items()],
        timeline=sorted(days.items()),
    )


def wedding_stats(wedding: Wedding) -> RSVPStats:
    """Guest count plus the wedding's RSVPs, scoped by ownership in SQL."""
    total_guests = (
        db.session.query(db.func.count(Guest.id))
        .filter(Guest.wedding_id == wedding.id)
        .scalar()
    ) or 0
    rsvps = (
        db.session.query(RSVP)
        .join(Guest, RSVP.guest_id == Guest.id)
        .filter(Guest.wedding_id == wedding.id)
        .all()
    )
    return compute_stats(total_guests, rsvps)
