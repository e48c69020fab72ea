"""
Service module for cycle milestone calculations.

This module derives the upcoming milestones of a cycle (next period,
ovulation and fertile window) from the reference period start, and combines
them with the phase classifier into a dashboard summary. Nothing here reads
the clock; "today" is always passed in by the caller.

Typical usage:
    markers = get_cycle_markers(settings.last_period_date, settings.average_cycle_length)
    summary = get_cycle_summary(settings, today=date.today())
    print(f"{summary.days_until_period} days until next period")
"""
from datetime import date

from safedays.models.phase import CycleMarkers, CycleSummary, OvulationStatus
from safedays.models.settings import CycleSettings
from safedays.services.constants import (
    LUTEAL_PHASE_DAYS,
    FERTILE_DAYS_BEFORE_OVULATION,
    FERTILE_DAYS_AFTER_OVULATION
)
from safedays.services.phase import calculate_phase, get_phase_badge
from safedays.services.utils import DateLike, add_days, days_between, to_day

def get_cycle_markers(last_period_date: DateLike, cycle_length: int) -> CycleMarkers:
    """
    Calculate milestone dates for the cycle starting at last_period_date.

    Args:
        last_period_date: First day of the reference period
        cycle_length: Average cycle length in days

    Returns:
        CycleMarkers with the next period start, ovulation date and the
        fertile window bounds

    Example:
        >>> markers = get_cycle_markers(date(2024, 1, 1), 28)
        >>> markers.next_period_start
        datetime.date(2024, 1, 29)
        >>> markers.ovulation_date
        datetime.date(2024, 1, 15)
    """
    period_start = to_day(last_period_date)
    next_period_start = add_days(period_start, cycle_length)
    ovulation_date = add_days(next_period_start, -LUTEAL_PHASE_DAYS)

    return CycleMarkers(
        period_start=period_start,
        next_period_start=next_period_start,
        ovulation_date=ovulation_date,
        fertile_start=add_days(ovulation_date, -FERTILE_DAYS_BEFORE_OVULATION),
        fertile_end=add_days(ovulation_date, FERTILE_DAYS_AFTER_OVULATION)
    )

def days_until(target: DateLike, today: DateLike) -> int:
    """Days from today to target, negative once target has passed."""
    return days_between(today, target)

def get_ovulation_status(ovulation_date: DateLike, today: DateLike) -> OvulationStatus:
    remaining = days_until(ovulation_date, today)
    if remaining < 0:
        return OvulationStatus.PAST
    if remaining == 0:
        return OvulationStatus.TODAY
    return OvulationStatus.UPCOMING

def get_cycle_summary(settings: CycleSettings, today: date) -> CycleSummary:
    """
    Build the tracking dashboard summary for a given day.

    Args:
        settings: Current tracker settings
        today: Caller's notion of the current day

    Returns:
        CycleSummary with the phase of today, the cycle markers and the
        countdowns to the next period and ovulation
    """
    current_phase = calculate_phase(
        today,
        settings.last_period_date,
        settings.average_cycle_length,
        settings.period_duration,
        settings.logs
    )
    markers = get_cycle_markers(settings.last_period_date, settings.average_cycle_length)
    days_until_period = days_until(markers.next_period_start, today)

    return CycleSummary(
        today=to_day(today),
        current_phase=current_phase,
        phase_label=get_phase_badge(current_phase),
        markers=markers,
        days_until_period=days_until_period,
        days_until_ovulation=days_until(markers.ovulation_date, today),
        is_period_late=days_until_period < 0,
        ovulation_status=get_ovulation_status(markers.ovulation_date, today)
    )
