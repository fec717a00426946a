import logging

from rsvpkit import emailer
from rsvpkit.emailer import normalize_recipients


def test_normalize_recipients_splits_and_dedupes():
    assert normalize_recipients("a@example.com; B@example.com, a@EXAMPLE.com") == [
        "a@example.com",
        "B@example.com",
    ]
    assert normalize_recipients(["x@example.com", " ", "x@example.com"]) == ["x@example.com"]
    assert normalize_recipients(None) == []


def test_normalize_recipients_logs_invalid(caplog):
    with caplog.at_level(logging.WARNING, logger="rsvpkit.mailer"):
        assert normalize_recipients("ok@example.com, broken, nodot@local") == ["ok@example.com"]
    assert "[MAIL-INVALID-RECIPIENT] token=broken" in caplog.text
    assert "token=nodot@local" in caplog.text


def test_stub_mode_when_unconfigured(app, caplog):
    assert emailer.smtp_mode() == "stub"
    with caplog.at_level(logging.INFO, logger="rsvpkit.mailer"):
        res = emailer.send("guest@example.com", "Hello", "Body")
    assert res == {"ok": False, "detail": "stub: missing config"}
    assert "[MAIL-OUT] mode=stub" in caplog.text


def test_real_mode_reports_connection_errors(app, monkeypatch):
    app.config.update(SMTP_HOST="smtp.invalid", SMTP_PORT="2525", SMTP_FROM_DEFAULT="noreply@example.com")

    def refuse(host, port):
        raise ConnectionRefusedError("refused")

    monkeypatch.setattr(emailer.smtplib, "SMTP", refuse)
    assert emailer.smtp_mode() == "real"
    res = emailer.send("guest@example.com", "Hello", "Body")
    assert res["ok"] is False
    assert "refused" in res["detail"]


def test_real_mode_sends(app, monkeypatch):
    app.config.update(SMTP_HOST="smtp.example.com", SMTP_PORT="25", SMTP_FROM_DEFAULT="noreply@example.com")
    sent = []

    class FakeSMTP:
        def __init__(self, host, port):
            self.host, self.port = host, port

        def sendmail(self, from_addr, to_addrs, msg):
            sent.append((from_addr, to_addrs, msg))

        def quit(self):
            pass

    monkeypatch.setattr(emailer.smtplib, "SMTP", FakeSMTP)
    res = emailer.send("Guest@Example.com, guest@example.com", "Hello", "Body")
    assert res == {"ok": True, "detail": "sent"}
    assert sent[0][0] == "noreply@example.com"
    assert sent[0][1] == ["Guest@Example.com"]
    assert "Subject: Hello" in sent[0][2]
