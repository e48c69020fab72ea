"""
Service module for pregnancy projections.

Gestational age is counted from the first day of the last menstrual period
(LMP), with the due date 280 days (40 weeks) later.

Typical usage:
    stats = calculate_pregnancy_stats(settings.pregnancy_start_date, today=date.today())
    if stats:
        print(f"Week {stats.weeks_pregnant}, trimester {stats.trimester}")
"""
from typing import Optional

from safedays.models.pregnancy import PregnancyStats
from safedays.services.constants import (
    GESTATION_DAYS,
    FULL_TERM_WEEKS,
    SECOND_TRIMESTER_WEEK,
    THIRD_TRIMESTER_WEEK,
    BABY_SIZES,
    FULL_TERM_BABY_SIZE
)
from safedays.services.utils import DateLike, add_days, days_between, to_day

def get_trimester(weeks_pregnant: int) -> int:
    """
    Map completed gestational weeks to a trimester.

    Example:
        >>> get_trimester(12), get_trimester(13), get_trimester(27)
        (1, 2, 3)
    """
    if weeks_pregnant >= THIRD_TRIMESTER_WEEK:
        return 3
    if weeks_pregnant >= SECOND_TRIMESTER_WEEK:
        return 2
    return 1

def get_baby_size(weeks_pregnant: int) -> str:
    """Fruit-size comparison for a gestational week."""
    for upper_week, size in BABY_SIZES:
        if weeks_pregnant < upper_week:
            return size
    return FULL_TERM_BABY_SIZE

def calculate_pregnancy_stats(start_date: Optional[DateLike], today: DateLike) -> Optional[PregnancyStats]:
    """
    Project gestational progress from the LMP date.

    Args:
        start_date: First day of the last menstrual period, if known
        today: Caller's notion of the current day

    Returns:
        PregnancyStats, or None when no start date is set. days_left goes
        negative past the due date and is not clamped.

    Example:
        >>> stats = calculate_pregnancy_stats(date(2024, 1, 1), date(2024, 4, 1))
        >>> stats.weeks_pregnant, stats.trimester, stats.due_date
        (13, 2, datetime.date(2024, 10, 7))
    """
    if start_date is None:
        return None

    start = to_day(start_date)
    due_date = add_days(start, GESTATION_DAYS)
    days_pregnant = days_between(start, today)
    weeks_pregnant = days_pregnant // 7

    return PregnancyStats(
        start_date=start,
        due_date=due_date,
        weeks_pregnant=weeks_pregnant,
        days_pregnant=days_pregnant,
        days_left=days_between(today, due_date),
        trimester=get_trimester(weeks_pregnant),
        baby_size=get_baby_size(weeks_pregnant),
        progress_percent=max(0.0, min(100.0, weeks_pregnant / FULL_TERM_WEEKS * 100))
    )
