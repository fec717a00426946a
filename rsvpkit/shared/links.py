from __future__ import annotations

import re
import secrets
from urllib.parse import urlencode

from flask import current_app, has_request_context, url_for

from ..constants import SLUG_ALPHABET, SLUG_LENGTH

SLUG_RE = re.compile(r"^[a-z0-9][a-z0-9-]{2,63}$")


def generate_slug(length: int = SLUG_LENGTH) -> str:
    return "".join(secrets.choice(SLUG_ALPHABET) for _ in range(length))


def is_valid_slug(slug: str | None) -> bool:
    return bool(slug and SLUG_RE.match(slug))


def invitation_url(slug: str, guest_token: str | None = None) -> str:
    """Absolute shareable link for an invitation, optionally personalised.

    Inside a request the link follows the request host; elsewhere (CLI,
    mail rendered outside a request) PUBLIC_BASE_URL is used.
    """
    params = {"guest": guest_token} if guest_token else {}
    if has_request_context():
        return url_for("invitation.show", slug=slug, _external=True, **params)
    base = current_app.config.get("PUBLIC_BASE_URL", "").rstrip("/")
    url = f"{base}/invitation/{slug}"
    if params:
        url = f"{url}?{urlencode(params)}"
    return url
