"""
Shared date utilities for cycle-related services.

All arithmetic works on whole calendar days: datetimes are reduced to their
date before any comparison, so time of day never shifts a result.

Typical usage:
    >>> day_in_cycle(date(2024, 1, 15), date(2024, 1, 1), 28)
    14
    >>> format_log_key(date(2024, 1, 5))
    '2024-01-05'
"""
from typing import Optional, Union
from datetime import date, datetime, timedelta, tzinfo

DateLike = Union[date, datetime]

def to_day(value: DateLike) -> date:
    """
    Strip the time component from a date or datetime.

    Args:
        value: Date or datetime to normalize

    Returns:
        Plain date for the same calendar day
    """
    if isinstance(value, datetime):
        return value.date()
    return value

def days_between(start: DateLike, end: DateLike) -> int:
    """
    Count whole days from start to end (negative when end is earlier).

    Example:
        >>> days_between(date(2024, 1, 1), date(2024, 1, 29))
        28
    """
    return (to_day(end) - to_day(start)).days

def add_days(value: DateLike, days: int) -> date:
    """Shift a calendar day by a number of days."""
    return to_day(value) + timedelta(days=days)

def day_in_cycle(target_date: DateLike, reference_date: DateLike, cycle_length: int) -> int:
    """
    Calculate the zero-based offset of a date within its cycle.

    Dates before the reference wrap forward into the previous cycle, so the
    result is always within [0, cycle_length).

    Args:
        target_date: Date to locate
        reference_date: First day of a known period
        cycle_length: Cycle length in days, must be positive

    Returns:
        Day in cycle, 0 being the first day of the period

    Example:
        >>> day_in_cycle(date(2023, 12, 31), date(2024, 1, 1), 28)
        27
    """
    return days_between(reference_date, target_date) % cycle_length

def is_same_day(first: DateLike, second: DateLike) -> bool:
    """Check if two values fall on the same calendar day."""
    return to_day(first) == to_day(second)

def format_log_key(value: DateLike) -> str:
    """Format a day as the YYYY-MM-DD key used for daily logs."""
    return to_day(value).isoformat()

def parse_date(value, fallback: DateLike, tz: Optional[tzinfo] = None) -> date:
    """
    Parse a stored or user-entered date, falling back when it is unusable.

    Accepts dates, datetimes, "YYYY-MM-DD" strings and full ISO timestamps.
    Timestamps with an offset (such as the "Z" suffix written by older
    releases) are converted to the local calendar day before the time is
    dropped.

    Args:
        value: Raw value to parse
        fallback: Day to use when the value cannot be parsed, usually today
        tz: Zone the calendar day is read in, the system zone by default

    Returns:
        Parsed calendar day, or the fallback day

    Example:
        >>> parse_date("2023-12-31T22:00:00.000Z", date.today(), timezone(timedelta(hours=2)))
        datetime.date(2024, 1, 1)
    """
    if isinstance(value, (date, datetime)):
        return to_day(value)
    if not isinstance(value, str):
        return to_day(fallback)

    value = value.strip()
    if len(value) > 10:
        try:
            parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return to_day(fallback)
        if parsed.tzinfo is not None:
            parsed = parsed.astimezone(tz)
        return parsed.date()

    try:
        return date.fromisoformat(value)
    except ValueError:
        return to_day(fallback)
