"""
Service module for building calendar month grids.

Each visible day is classified on demand from the current settings; nothing
is cached between calls.
"""
from calendar import monthrange
from typing import List
from datetime import date, timedelta

from safedays.models.phase import CycleDayData, CyclePhaseType
from safedays.models.settings import AppMode, CycleSettings
from safedays.services.phase import calculate_phase, get_log_for_date
from safedays.services.utils import DateLike, is_same_day, to_day

SATURDAY = 5

def get_grid_bounds(year: int, month: int) -> tuple[date, date]:
    """
    Get the first and last day of the Sunday-to-Saturday weeks covering a month.

    Example:
        >>> get_grid_bounds(2024, 2)
        (datetime.date(2024, 1, 28), datetime.date(2024, 3, 2))
    """
    first = date(year, month, 1)
    last = date(year, month, monthrange(year, month)[1])
    grid_start = first - timedelta(days=(first.weekday() + 1) % 7)
    grid_end = last + timedelta(days=(SATURDAY - last.weekday()) % 7)
    return grid_start, grid_end

def build_calendar_month(settings: CycleSettings, year: int, month: int, today: DateLike) -> List[CycleDayData]:
    """
    Build the day cells for one calendar month.

    Args:
        settings: Current tracker settings
        year: Calendar year
        month: Calendar month (1-12)
        today: Caller's notion of the current day

    Returns:
        One CycleDayData per day of the covering weeks, in order. In pregnancy
        mode no cycle phases are predicted and every day reports LUTEAL.
    """
    is_pregnancy_mode = settings.mode == AppMode.PREGNANCY
    grid_start, grid_end = get_grid_bounds(year, month)

    days = []
    day = grid_start
    while day <= grid_end:
        if is_pregnancy_mode:
            phase = CyclePhaseType.LUTEAL
        else:
            phase = calculate_phase(
                day,
                settings.last_period_date,
                settings.average_cycle_length,
                settings.period_duration,
                settings.logs
            )

        log = get_log_for_date(day, settings.logs)
        has_flow = bool(log and log.flow)
        is_period_start = not is_pregnancy_mode and is_same_day(day, settings.last_period_date)

        days.append(CycleDayData(
            date=day,
            phase=phase,
            is_today=is_same_day(day, to_day(today)),
            is_period_start=is_period_start,
            is_current_month=day.month == month,
            has_flow=has_flow,
            has_spotting=bool(log and log.spotting),
            is_predicted_period=phase == CyclePhaseType.PERIOD and not (has_flow or is_period_start)
        ))
        day += timedelta(days=1)

    return days
