"""Typed form state for the couple's workspace pages.

Each form is built from the submitted fields, then ``validate()`` returns the
list of messages to show inline; an empty list means the cleaned fields are
ready to be written.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime

from ..shared.time import combine_date_time, parse_date, parse_time
from .account_forms import normalize_email

TRUTHY = {"1", "on", "true", "yes"}


def _text(data, key: str) -> str:
    return (data.get(key) or "").strip()


@dataclass
class ProfileForm:
    full_name: str = ""

    @classmethod
    def from_form(cls, data) -> "ProfileForm":
        return cls(full_name=_text(data, "full_name"))

    def validate(self) -> list[str]:
        return [] if self.full_name else ["Full name required."]


@dataclass
class WeddingForm:
    title: str = ""
    date: str = ""
    location: str = ""
    description: str = ""

    @classmethod
    def from_form(cls, data) -> "WeddingForm":
        return cls(
            title=_text(data, "title"),
            date=_text(data, "date"),
            location=_text(data, "location"),
            description=_text(data, "description"),
        )

    @classmethod
    def from_wedding(cls, wedding) -> "WeddingForm":
        if wedding is None:
            return cls()
        return cls(
            title=wedding.title,
            date=wedding.date.isoformat() if wedding.date else "",
            location=wedding.location,
            description=wedding.description or "",
        )

    @property
    def wedding_date(self) -> date | None:
        return parse_date(self.date)

    def validate(self) -> list[str]:
        errors: list[str] = []
        if not self.title:
            errors.append("Title required.")
        if self.wedding_date is None:
            errors.append("Wedding date must be YYYY-MM-DD.")
        if not self.location:
            errors.append("Location required.")
        return errors


@dataclass
class GuestForm:
    name: str = ""
    email: str = ""
    phone: str = ""
    plus_one_allowed: bool = False

    @classmethod
    def from_form(cls, data) -> "GuestForm":
        return cls(
            name=_text(data, "name"),
            email=_text(data, "email"),
            phone=_text(data, "phone"),
            plus_one_allowed=(data.get("plus_one_allowed") or "").lower() in TRUTHY,
        )

    def validate(self) -> list[str]:
        errors: list[str] = []
        if not self.name:
            errors.append("Guest name required.")
        if self.email:
            normalized = normalize_email(self.email)
            if normalized is None:
                errors.append("Guest email is not valid.")
            else:
                self.email = normalized
        return errors


@dataclass
class EventForm:
    name: str = ""
    date: str = ""
    time: str = ""
    location: str = ""
    description: str = ""

    @classmethod
    def from_form(cls, data) -> "EventForm":
        return cls(
            name=_text(data, "name"),
            date=_text(data, "date"),
            time=_text(data, "time"),
            location=_text(data, "location"),
            description=_text(data, "description"),
        )

    @property
    def starts_at(self) -> datetime | None:
        day = parse_date(self.date)
        if day is None:
            return None
        return combine_date_time(day, parse_time(self.time))

    def validate(self) -> list[str]:
        errors: list[str] = []
        if not self.name:
            errors.append("Event name required.")
        if parse_date(self.date) is None:
            errors.append("Event date must be YYYY-MM-DD.")
        if self.time and parse_time(self.time) is None:
            errors.append("Event time must be HH:MM.")
        if not self.location:
            errors.append("Event location required.")
        return errors
