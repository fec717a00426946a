from __future__ import annotations

from dataclasses import dataclass

from email_validator import EmailNotValidError, validate_email

from ..constants import PASSWORD_MIN_LENGTH


def normalize_email(raw: str | None) -> str | None:
    """Return the lower-cased address, or None when it is not an address."""
    raw = (raw or "").strip()
    if not raw:
        return None
    try:
        return validate_email(raw, check_deliverability=False).normalized.lower()
    except EmailNotValidError:
        return None


def password_errors(password: str, confirm: str) -> list[str]:
    errors: list[str] = []
    if len(password) < PASSWORD_MIN_LENGTH:
        errors.append(f"Password must be at least {PASSWORD_MIN_LENGTH} characters.")
    if password != confirm:
        errors.append("Passwords do not match.")
    return errors


@dataclass
class RegisterForm:
    email: str = ""
    full_name: str = ""
    password: str = ""
    password_confirm: str = ""

    @classmethod
    def from_form(cls, data) -> "RegisterForm":
        return cls(
            email=(data.get("email") or "").strip(),
            full_name=(data.get("full_name") or "").strip(),
            password=data.get("password") or "",
            password_confirm=data.get("password_confirm") or "",
        )

    def validate(self) -> list[str]:
        errors: list[str] = []
        normalized = normalize_email(self.email)
        if normalized is None:
            errors.append("Enter a valid email address.")
        else:
            self.email = normalized
        if not self.full_name:
            errors.append("Full name required.")
        errors.extend(password_errors(self.password, self.password_confirm))
        return errors


@dataclass
class PasswordResetForm:
    password: str = ""
    password_confirm: str = ""

    @classmethod
    def from_form(cls, data) -> "PasswordResetForm":
        return cls(
            password=data.get("password") or "",
            password_confirm=data.get("password_confirm") or "",
        )

    def validate(self) -> list[str]:
        return password_errors(self.password, self.password_confirm)
