"""
Service module for tracker workflows over the settings value.

Every function takes the current CycleSettings and returns an updated copy;
the caller persists the result. The usual write path is:

    settings = store.load_or_default(today)
    settings = mark_period_start(settings, date(2024, 1, 29))
    store.save(settings)
"""
from typing import Optional, Union
from datetime import date

from safedays.models.log import DailyLog, FlowIntensity
from safedays.models.phase import CycleSummary
from safedays.models.pregnancy import PregnancyStats
from safedays.models.settings import AppMode, CycleSettings
from safedays.services.cycle import get_cycle_summary
from safedays.services.history import reconcile_cycle_start
from safedays.services.phase import get_log_for_date
from safedays.services.pregnancy import calculate_pregnancy_stats
from safedays.services.statistics import calculate_recalibrated_average
from safedays.services.utils import DateLike, format_log_key, parse_date, to_day
from safedays.utils.logging import logger

def update_cycle_start(settings: CycleSettings, reported_start: DateLike) -> CycleSettings:
    """
    Record a reported period start and recalibrate the average cycle length.

    Args:
        settings: Current tracker settings
        reported_start: Day the user reported as a period start

    Returns:
        Settings with the reconciled cycle history, the recalibrated average
        and last_period_date set to the latest recorded cycle start. When no
        completed cycle qualifies the current average is kept.
    """
    cycles = reconcile_cycle_start(settings.cycles, reported_start)
    average = calculate_recalibrated_average(cycles, default=settings.average_cycle_length)

    logger.info("Updated cycle start", extra={
        "reported_start": str(to_day(reported_start)),
        "last_period_date": str(cycles[-1].start_date),
        "previous_average": settings.average_cycle_length,
        "average_cycle_length": average
    })

    return settings.model_copy(update={
        "cycles": cycles,
        "last_period_date": cycles[-1].start_date,
        "average_cycle_length": average
    })

def save_daily_log(settings: CycleSettings, day: DateLike, **updates) -> CycleSettings:
    """
    Merge partial updates into the log for a day.

    Args:
        settings: Current tracker settings
        day: Day being logged
        **updates: DailyLog fields to set, e.g. flow="HEAVY" or spotting=False.
            Passing flow=None clears the flow.

    Returns:
        Settings with the updated logs. A log left with no flow and no
        spotting is removed.

    Example:
        >>> settings = save_daily_log(settings, date(2024, 1, 2), flow=FlowIntensity.LIGHT)
        >>> settings = save_daily_log(settings, date(2024, 1, 2), flow=None)
        >>> "2024-01-02" in settings.logs
        False
    """
    key = format_log_key(day)
    existing = get_log_for_date(day, settings.logs) or DailyLog()
    merged = DailyLog(**{**existing.model_dump(), **updates})

    logs = dict(settings.logs)
    if merged.is_empty:
        logs.pop(key, None)
    else:
        logs[key] = merged

    return settings.model_copy(update={"logs": logs})

def mark_period_start(
    settings: CycleSettings,
    day: DateLike,
    flow: Optional[FlowIntensity] = None,
    spotting: Optional[bool] = None
) -> CycleSettings:
    """
    Log a day as the first day of a period.

    Records the flow (MEDIUM when none was given) and reconciles the day as a
    cycle start.
    """
    updates = {"flow": flow or FlowIntensity.MEDIUM}
    if spotting is not None:
        updates["spotting"] = spotting

    settings = save_daily_log(settings, day, **updates)
    return update_cycle_start(settings, day)

def complete_onboarding(
    settings: CycleSettings,
    last_period_date: Union[DateLike, str],
    cycle_length: int,
    today: DateLike
) -> CycleSettings:
    """
    Apply the answers of the welcome flow.

    Args:
        settings: Current (usually default) settings
        last_period_date: When the last period started; unparsable input
            falls back to today
        cycle_length: Typical cycle length chosen by the user
        today: Caller's notion of the current day

    Returns:
        Onboarded settings with the ledger seeded by the last period start
    """
    start = parse_date(last_period_date, fallback=today)
    cycles = reconcile_cycle_start(settings.cycles, start)

    return settings.model_copy(update={
        "is_onboarded": True,
        "last_period_date": cycles[-1].start_date,
        "average_cycle_length": cycle_length,
        "cycles": cycles
    })

def change_mode(settings: CycleSettings, mode: AppMode, today: DateLike) -> CycleSettings:
    """
    Switch between cycle tracking and pregnancy mode.

    Entering pregnancy mode without an LMP date sets it to today.
    """
    if mode == settings.mode:
        return settings

    updates = {"mode": mode}
    if mode == AppMode.PREGNANCY and settings.pregnancy_start_date is None:
        updates["pregnancy_start_date"] = to_day(today)

    logger.info("Changed tracking mode", extra={"mode": mode.value})
    return settings.model_copy(update=updates)

def set_pregnancy_start(settings: CycleSettings, value: Union[DateLike, str], today: DateLike) -> CycleSettings:
    """Set the LMP date; unparsable input falls back to today."""
    return settings.model_copy(update={"pregnancy_start_date": parse_date(value, fallback=today)})

def get_dashboard(settings: CycleSettings, today: date) -> Union[CycleSummary, PregnancyStats]:
    """
    Get the data shown on the home screen.

    Returns:
        PregnancyStats in pregnancy mode with an LMP date set, otherwise the
        CycleSummary for today
    """
    if settings.mode == AppMode.PREGNANCY and settings.pregnancy_start_date is not None:
        return calculate_pregnancy_stats(settings.pregnancy_start_date, today)
    return get_cycle_summary(settings, today)
