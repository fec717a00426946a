from __future__ import annotations

import secrets

from sqlalchemy.orm import validates

from .app import db
from .constants import DEFAULT_ACCENT_COLOR, DEFAULT_FONT
from .shared.passwords import hash_password, check_password
from .shared.time import now_utc

RSVP_PENDING = "pending"
RSVP_ATTENDING = "attending"
RSVP_DECLINED = "declined"


def new_rsvp_token() -> str:
    return secrets.token_urlsafe(16)


class User(db.Model):
    __tablename__ = "users"

    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String(255), nullable=False)
    password_hash = db.Column(db.String(255))
    full_name = db.Column(db.String(255))
    created_at = db.Column(db.DateTime, server_default=db.func.now())
    __table_args__ = (
        db.Index("ix_users_email_lower", db.func.lower(email), unique=True),
    )

    wedding = db.relationship(
        "Wedding", back_populates="owner", uselist=False, cascade="all, delete-orphan"
    )

    @validates("email")
    def lower_email(self, key, value):
        value = (value or "").strip().lower()
        if self.email and self.email != value:
            raise ValueError("Email cannot be changed once the account exists")
        return value

    def set_password(self, plain: str) -> None:
        self.password_hash = hash_password(plain)

    def check_password(self, plain: str) -> bool:
        if not self.password_hash:
            return False
        return check_password(plain, self.password_hash)


class Wedding(db.Model):
    __tablename__ = "weddings"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(
        db.Integer,
        db.ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )
    title = db.Column(db.String(255), nullable=False)
    date = db.Column(db.Date, nullable=False)
    location = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text)
    created_at = db.Column(db.DateTime, server_default=db.func.now())

    owner = db.relationship("User", back_populates="wedding")
    guests = db.relationship(
        "Guest",
        back_populates="wedding",
        cascade="all, delete-orphan",
        order_by="Guest.name",
    )
    events = db.relationship(
        "Event",
        back_populates="wedding",
        cascade="all, delete-orphan",
        order_by="Event.date",
    )
    invitation = db.relationship(
        "Invitation",
        back_populates="wedding",
        uselist=False,
        cascade="all, delete-orphan",
    )


class Event(db.Model):
    __tablename__ = "events"

    id = db.Column(db.Integer, primary_key=True)
    wedding_id = db.Column(
        db.Integer,
        db.ForeignKey("weddings.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name = db.Column(db.String(255), nullable=False)
    date = db.Column(db.DateTime, nullable=False)
    end_date = db.Column(db.DateTime)
    location = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text)
    created_at = db.Column(db.DateTime, server_default=db.func.now())

    wedding = db.relationship("Wedding", back_populates="events")


class Guest(db.Model):
    __tablename__ = "guests"

    id = db.Column(db.Integer, primary_key=True)
    wedding_id = db.Column(
        db.Integer,
        db.ForeignKey("weddings.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name = db.Column(db.String(255), nullable=False)
    email = db.Column(db.String(255))
    phone = db.Column(db.String(64))
    plus_one_allowed = db.Column(
        db.Boolean, nullable=False, default=False, server_default=db.false()
    )
    group_id = db.Column(db.String(64))
    invitation_sent = db.Column(
        db.Boolean, nullable=False, default=False, server_default=db.false()
    )
    rsvp_token = db.Column(
        db.String(64), nullable=False, unique=True, default=new_rsvp_token
    )
    created_at = db.Column(db.DateTime, server_default=db.func.now())

    wedding = db.relationship("Wedding", back_populates="guests")
    rsvp = db.relationship(
        "RSVP",
        back_populates="guest",
        uselist=False,
        cascade="all, delete-orphan",
    )

    @validates("name")
    def strip_name(self, key, value):
        value = (value or "").strip()
        if not value:
            raise ValueError("Guest name is required")
        return value

    @property
    def rsvp_status(self) -> str:
        if self.rsvp is None or self.rsvp.attending is None:
            return RSVP_PENDING
        return RSVP_ATTENDING if self.rsvp.attending else RSVP_DECLINED


class InvitationTemplate(db.Model):
    __tablename__ = "invitation_templates"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text)
    thumbnail_url = db.Column(db.String(1024))
    is_premium = db.Column(
        db.Boolean, nullable=False, default=False, server_default=db.false()
    )
    created_at = db.Column(db.DateTime, server_default=db.func.now())


class Invitation(db.Model):
    __tablename__ = "invitations"

    id = db.Column(db.Integer, primary_key=True)
    wedding_id = db.Column(
        db.Integer,
        db.ForeignKey("weddings.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )
    template_id = db.Column(
        db.Integer, db.ForeignKey("invitation_templates.id"), nullable=False
    )
    custom_message = db.Column(db.Text)
    accent_color = db.Column(
        db.String(7),
        nullable=False,
        default=DEFAULT_ACCENT_COLOR,
        server_default=DEFAULT_ACCENT_COLOR,
    )
    font_choice = db.Column(
        db.String(64), nullable=False, default=DEFAULT_FONT, server_default=DEFAULT_FONT
    )
    slug = db.Column(db.String(64), nullable=False, unique=True)
    created_at = db.Column(db.DateTime, server_default=db.func.now())

    wedding = db.relationship("Wedding", back_populates="invitation")
    template = db.relationship("InvitationTemplate")


class RSVP(db.Model):
    __tablename__ = "rsvps"

    id = db.Column(db.Integer, primary_key=True)
    guest_id = db.Column(
        db.Integer,
        db.ForeignKey("guests.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )
    # NULL means the guest has not chosen yet
    attending = db.Column(db.Boolean, nullable=True)
    meal_choice = db.Column(db.String(64))
    plus_one_name = db.Column(db.String(255))
    plus_one_meal_choice = db.Column(db.String(64))
    notes = db.Column(db.Text)
    created_at = db.Column(db.DateTime, nullable=False, default=now_utc)
    updated_at = db.Column(
        db.DateTime, nullable=False, default=now_utc, onupdate=now_utc
    )

    guest = db.relationship("Guest", back_populates="rsvp")
