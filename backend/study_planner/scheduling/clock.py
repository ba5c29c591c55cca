"""Parsing and formatting helpers for timestamps, dates, and HH:MM clock times."""
from __future__ import annotations

import re
from datetime import date, datetime, timezone

from study_planner.scheduling.errors import InputValidationError

MINUTES_PER_DAY = 24 * 60
SECONDS_PER_DAY = 86400

_HHMM_RE = re.compile(r"^(\d{1,2}):(\d{2})$")


def parse_timestamp(value: datetime | str, field: str) -> datetime:
    """Return a timezone-aware datetime; naive values are treated as UTC."""
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str):
        text = value.strip()
        if text.endswith(("Z", "z")):
            text = f"{text[:-1]}+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            raise InputValidationError(field, f"invalid ISO-8601 timestamp {value!r}") from None
    else:
        raise InputValidationError(field, f"expected an ISO-8601 timestamp, got {type(value).__name__}")

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def parse_date(value: date | datetime | str, field: str) -> date:
    """Accept an ISO date, or a full timestamp whose calendar date is used."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        if "T" in text or " " in text:
            return parse_timestamp(text, field).date()
        try:
            return date.fromisoformat(text)
        except ValueError:
            raise InputValidationError(field, f"invalid ISO date {value!r}") from None
    raise InputValidationError(field, f"expected an ISO date, got {type(value).__name__}")


def parse_hhmm(value: str, field: str) -> int:
    """Convert ``HH:MM`` (24h) to minutes since midnight. ``24:00`` is end of day."""
    match = _HHMM_RE.match(value.strip()) if isinstance(value, str) else None
    if not match:
        raise InputValidationError(field, f"expected HH:MM, got {value!r}")
    hours, minutes = int(match.group(1)), int(match.group(2))
    if minutes > 59 or hours > 24 or (hours == 24 and minutes != 0):
        raise InputValidationError(field, f"{value!r} is not a valid 24h time")
    return hours * 60 + minutes


def format_minutes(minutes: int) -> str:
    hours, mins = divmod(int(minutes), 60)
    return f"{hours:02d}:{mins:02d}"


def days_between(start: datetime, end: datetime) -> float:
    """Fractional days from ``start`` to ``end`` (negative when ``end`` is earlier)."""
    return (end - start).total_seconds() / SECONDS_PER_DAY
