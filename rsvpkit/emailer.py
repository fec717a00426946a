import logging
import re
import smtplib
import sys
from collections.abc import Iterable, Sequence
from email.message import EmailMessage

from flask import current_app

logger = logging.getLogger("rsvpkit.mailer")
if not logger.handlers:
    handler = logging.StreamHandler(sys.stdout)
    logger.addHandler(handler)
logger.setLevel(logging.INFO)

_SPLIT_RE = re.compile(r"[;,]")


def _iter_tokens(recipients: Sequence[str] | str | None) -> Iterable[str]:
    if recipients is None:
        return []
    if isinstance(recipients, str):
        return _SPLIT_RE.split(recipients)
    return (str(value) for value in recipients)


def normalize_recipients(recipients: Sequence[str] | str | None) -> list[str]:
    """Split, trim and de-duplicate addresses, dropping obviously invalid ones."""
    seen: set[str] = set()
    kept: list[str] = []
    for raw in _iter_tokens(recipients):
        candidate = (raw or "").strip()
        if not candidate:
            continue
        lowered = candidate.lower()
        if "@" not in lowered or "." not in lowered.rsplit("@", 1)[-1]:
            logger.warning("[MAIL-INVALID-RECIPIENT] token=%s", candidate)
            continue
        if lowered not in seen:
            seen.add(lowered)
            kept.append(candidate)
    return kept


def smtp_mode() -> str:
    cfg = current_app.config
    if cfg.get("SMTP_HOST") and cfg.get("SMTP_PORT") and cfg.get("SMTP_FROM_DEFAULT"):
        return "real"
    return "stub"


def send(
    recipients: Sequence[str] | str | None,
    subject: str,
    body: str,
    html: str | None = None,
):
    """Send one message; returns {"ok": bool, "detail": str} and never raises."""
    cfg = current_app.config
    host = cfg.get("SMTP_HOST")
    envelope = normalize_recipients(recipients)
    header = ", ".join(envelope)

    if smtp_mode() == "stub":
        logger.info(
            "[MAIL-OUT] mode=stub to=%s subject=\"%s\" result=stub",
            header,
            subject,
        )
        return {"ok": False, "detail": "stub: missing config"}

    if not envelope:
        logger.warning("[MAIL-NO-RECIPIENTS] subject=\"%s\" host=%s", subject, host)
        return {"ok": False, "detail": "no valid recipients"}

    from_addr = cfg.get("SMTP_FROM_DEFAULT")
    from_name = cfg.get("SMTP_FROM_NAME") or ""
    user = cfg.get("SMTP_USER")
    password = cfg.get("SMTP_PASS")
    try:
        port = int(cfg.get("SMTP_PORT"))
        if port == 465:
            server = smtplib.SMTP_SSL(host, port)
        else:
            server = smtplib.SMTP(host, port)
            if port == 587:
                server.starttls()
        if user and password:
            server.login(user, password)
        msg = EmailMessage()
        msg["Subject"] = subject
        msg["To"] = header
        msg["From"] = f"{from_name} <{from_addr}>" if from_name else from_addr
        msg.set_content(body)
        if html:
            msg.add_alternative(html, subtype="html")
        server.sendmail(from_addr, envelope, msg.as_string())
        server.quit()
    except (OSError, smtplib.SMTPException, ValueError) as e:
        logger.info(
            "[MAIL-OUT] mode=real to=%s subject=\"%s\" host=%s result=%s",
            header,
            subject,
            host,
            e,
        )
        return {"ok": False, "detail": str(e)}
    logger.info(
        "[MAIL-OUT] mode=real to=%s subject=\"%s\" host=%s result=sent",
        header,
        subject,
        host,
    )
    return {"ok": True, "detail": "sent"}
