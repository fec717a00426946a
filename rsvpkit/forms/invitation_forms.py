from __future__ import annotations

import re
from dataclasses import dataclass, field

from ..constants import DEFAULT_ACCENT_COLOR, DEFAULT_FONT, FONT_CHOICES, MEAL_VALUES
from ..shared.links import is_valid_slug

HEX_COLOR_RE = re.compile(r"^#[0-9a-fA-F]{6}$")


@dataclass
class InvitationForm:
    template_id: int | None = None
    custom_message: str = ""
    accent_color: str = DEFAULT_ACCENT_COLOR
    font_choice: str = DEFAULT_FONT
    slug: str = ""

    @classmethod
    def from_form(cls, data) -> "InvitationForm":
        raw_template = (data.get("template_id") or "").strip()
        return cls(
            template_id=int(raw_template) if raw_template.isdigit() else None,
            custom_message=(data.get("custom_message") or "").strip(),
            accent_color=(data.get("accent_color") or "").strip(),
            font_choice=(data.get("font_choice") or "").strip(),
            slug=(data.get("slug") or "").strip().lower(),
        )

    @classmethod
    def from_invitation(cls, invitation) -> "InvitationForm":
        return cls(
            template_id=invitation.template_id,
            custom_message=invitation.custom_message or "",
            accent_color=invitation.accent_color,
            font_choice=invitation.font_choice,
            slug=invitation.slug,
        )

    def validate(self, template_ids: set[int]) -> list[str]:
        errors: list[str] = []
        if self.template_id is None or self.template_id not in template_ids:
            errors.append("Choose a template.")
        if not HEX_COLOR_RE.match(self.accent_color or ""):
            errors.append("Accent colour must be a hex value like #8b4513.")
        else:
            self.accent_color = self.accent_color.lower()
        if self.font_choice not in FONT_CHOICES:
            errors.append("Choose one of the listed fonts.")
        if not is_valid_slug(self.slug):
            errors.append(
                "Link must be 3-64 lowercase letters, digits or dashes."
            )
        return errors


def _parse_attending(raw: str | None) -> bool | None:
    raw = (raw or "").strip().lower()
    if raw == "true":
        return True
    if raw == "false":
        return False
    return None


@dataclass
class RSVPForm:
    attending: bool | None = None
    meal_choice: str = ""
    plus_one_name: str = ""
    plus_one_meal_choice: str = ""
    notes: str = ""
    dropped: list[str] = field(default_factory=list)

    @classmethod
    def from_form(cls, data) -> "RSVPForm":
        return cls(
            attending=_parse_attending(data.get("attending")),
            meal_choice=(data.get("meal_choice") or "").strip().lower(),
            plus_one_name=(data.get("plus_one_name") or "").strip(),
            plus_one_meal_choice=(data.get("plus_one_meal_choice") or "").strip().lower(),
            notes=(data.get("notes") or "").strip(),
        )

    @classmethod
    def from_rsvp(cls, rsvp) -> "RSVPForm":
        if rsvp is None:
            return cls()
        return cls(
            attending=rsvp.attending,
            meal_choice=rsvp.meal_choice or "",
            plus_one_name=rsvp.plus_one_name or "",
            plus_one_meal_choice=rsvp.plus_one_meal_choice or "",
            notes=rsvp.notes or "",
        )

    def _drop(self, *names: str) -> None:
        for name in names:
            if getattr(self, name):
                setattr(self, name, "")
                self.dropped.append(name)

    def validate(self, plus_one_allowed: bool) -> list[str]:
        """Check the answer and clear fields the guest may not fill in.

        Meal and plus-one details only apply to guests who are attending,
        and plus-one details only to guests invited with one.
        """
        if self.attending is None:
            return ["Please let us know whether you will attend."]
        if not self.attending:
            self._drop("meal_choice", "plus_one_name", "plus_one_meal_choice")
            return []
        if not plus_one_allowed:
            self._drop("plus_one_name", "plus_one_meal_choice")
        elif not self.plus_one_name:
            self._drop("plus_one_meal_choice")
        errors: list[str] = []
        if self.meal_choice and self.meal_choice not in MEAL_VALUES:
            errors.append("Choose a meal from the list.")
        if self.plus_one_meal_choice and self.plus_one_meal_choice not in MEAL_VALUES:
            errors.append("Choose a plus-one meal from the list.")
        return errors
