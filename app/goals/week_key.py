"""ISO week keys: pure functions, no I/O."""

from __future__ import annotations

import re
from datetime import date, datetime, timedelta
from zoneinfo import ZoneInfo

_WEEK_KEY_RE = re.compile(r"^(\d{4})-W(\d{2})$")


def week_key(when: date) -> str:
    """Return the ``<weekYear>-W<ww>`` key for the ISO week containing `when`.

    Uses the ISO week-numbering year (the year that owns the week's Thursday),
    so 2024-12-30 is ``2025-W01`` and 2027-01-01 is ``2026-W53``.
    Accepts dates and datetimes.
    """
    iso = when.isocalendar()
    return f"{iso[0]}-W{iso[1]:02d}"


def previous_week(when: date) -> date:
    return when - timedelta(weeks=1)


def parse_week_key(key: str) -> date:
    """Return the Monday of the week named by `key`.

    Raises ValueError for malformed keys and weeks that do not exist
    (e.g. ``2021-W53``).
    """
    m = _WEEK_KEY_RE.match(key)
    if m is None:
        raise ValueError(f"Invalid week key: {key!r}")
    year, week = int(m.group(1)), int(m.group(2))
    try:
        return date.fromisocalendar(year, week, 1)
    except ValueError:
        raise ValueError(f"Week does not exist: {key!r}") from None


def current_week_date(tz_name: str) -> date:
    """Today's date in `tz_name`; any day of the current week will do."""
    return datetime.now(ZoneInfo(tz_name)).date()
