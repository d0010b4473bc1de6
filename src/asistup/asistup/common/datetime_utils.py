from __future__ import annotations

from datetime import date, datetime, time
from typing import Optional


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_hhmm(value: str) -> time:
    """Parse HH:MM string into time."""
    return datetime.strptime(value.strip(), "%H:%M").time()


def format_hhmm(value: time) -> str:
    return value.strftime("%H:%M")


def optional_date(value: Optional[str]) -> Optional[date]:
    if not value:
        return None
    return date.fromisoformat(value[:10])


def to_local_naive(moment: datetime) -> datetime:
    """Offset-aware instants are converted to local wall time; naive values pass through."""
    if moment.tzinfo is None:
        return moment
    return moment.astimezone().replace(tzinfo=None)


def parse_instant(value: str) -> datetime:
    """Parse an ISO-8601 instant (a trailing ``Z`` included) into naive local time."""
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    return to_local_naive(datetime.fromisoformat(text))


def optional_datetime(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    return parse_instant(value)


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def whole_years_between(start: Optional[date], end: date) -> int:
    """Whole calendar years elapsed from ``start`` to ``end`` (0 when unknown or in the future)."""
    if start is None or start > end:
        return 0
    years = end.year - start.year
    if (end.month, end.day) < (start.month, start.day):
        years -= 1
    return max(years, 0)


def is_anniversary(born: Optional[date], today: date) -> bool:
    """True when ``today`` falls on the month/day of ``born``.

    Feb 29 anniversaries are celebrated on Feb 28 in common years.
    """
    if born is None:
        return False
    if (born.month, born.day) == (today.month, today.day):
        return True
    if (born.month, born.day) == (2, 29) and (today.month, today.day) == (2, 28):
        try:
            date(today.year, 2, 29)
        except ValueError:
            return True
    return False
