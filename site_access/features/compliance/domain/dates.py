"""
Calendar-date coercion for compliance inputs.

Storage hands the engine dates as ISO strings, ``date`` or ``datetime``
values, and sometimes empty strings. Everything funnels through
``coerce_date`` so that a missing or garbled value becomes ``None`` and is
treated as "never valid" rather than raising.
"""

from datetime import date, datetime

DateLike = date | datetime | str | None


def coerce_date(value: DateLike) -> date | None:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None

    text = value.strip()
    if len(text) < 10:
        return None
    # Timestamps like 2025-01-15T00:00:00Z keep only the calendar day
    try:
        return date.fromisoformat(text[:10])
    except ValueError:
        return None


def is_after(value: DateLike, as_of: DateLike) -> bool:
    """Strict expiry rule: valid only while the expiry date is after ``as_of``."""
    parsed = coerce_date(value)
    as_of = coerce_date(as_of)
    return parsed is not None and as_of is not None and parsed > as_of
