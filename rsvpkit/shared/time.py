from datetime import datetime, date, time, timezone


def now_utc() -> datetime:
    """Return the current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def fmt_dt(value: datetime | date | None) -> str:
    """Format datetimes without seconds; dates use D MMM YYYY."""
    if not value:
        return ""
    if isinstance(value, datetime):
        return value.strftime("%-d %b %Y %H:%M")
    if isinstance(value, date):
        return value.strftime("%-d %b %Y")
    return str(value)


def fmt_date(value: datetime | date | None) -> str:
    if not value:
        return ""
    if isinstance(value, datetime):
        value = value.date()
    return value.strftime("%A, %-d %B %Y")


def fmt_time(value: datetime | time | str | None) -> str:
    """Render times as HH:MM, accepting strings, datetimes or time objects."""
    if not value:
        return ""
    if isinstance(value, datetime):
        value = value.time()
    if isinstance(value, str):
        try:
            value = time.fromisoformat(value)
        except ValueError:
            return value
    return value.strftime("%H:%M")


def parse_date(value: str | None) -> date | None:
    """Parse YYYY-MM-DD, returning None for blank or malformed input."""
    value = (value or "").strip()
    if not value:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        return None


def parse_time(value: str | None) -> time | None:
    value = (value or "").strip()
    if not value:
        return None
    try:
        return time.fromisoformat(value)
    except ValueError:
        return None


def combine_date_time(day: date, at: time | None) -> datetime:
    """Merge a date with an optional time of day; midnight when omitted."""
    return datetime.combine(day, at or time(0, 0))


def utc_day(value: datetime) -> date:
    """Calendar day of a timestamp in UTC; naive values are taken as UTC."""
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    return value.date()
