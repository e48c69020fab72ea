"""
Service module for classifying calendar days into cycle phases.

Predictions come from the reference period start and the average cycle
length; an observed flow log for the day always wins over the prediction.

Typical usage:
    >>> phase = calculate_phase(date(2024, 1, 15), date(2024, 1, 1), 28)
    >>> phase == CyclePhaseType.OVULATION
    True
    >>> get_phase_label(phase)
    'Ovulation Day'
"""
from typing import Dict, Optional

from safedays.models.log import DailyLog
from safedays.models.phase import CyclePhaseType
from safedays.services.constants import (
    DEFAULT_PERIOD_DURATION,
    LUTEAL_PHASE_DAYS,
    FERTILE_DAYS_BEFORE_OVULATION,
    FERTILE_DAYS_AFTER_OVULATION,
    PHASE_LABELS,
    PHASE_BADGES,
    PHASE_EMOJIS
)
from safedays.services.utils import DateLike, day_in_cycle, format_log_key

def get_log_for_date(target_date: DateLike, logs: Optional[Dict[str, DailyLog]]) -> Optional[DailyLog]:
    """
    Look up the daily log recorded for a calendar day.

    Args:
        target_date: Day to look up
        logs: Logs keyed by YYYY-MM-DD

    Returns:
        The day's log, or None when nothing was observed
    """
    if not logs:
        return None
    return logs.get(format_log_key(target_date))

def calculate_phase(
    target_date: DateLike,
    last_period_date: DateLike,
    cycle_length: int,
    period_duration: int = DEFAULT_PERIOD_DURATION,
    logs: Optional[Dict[str, DailyLog]] = None
) -> CyclePhaseType:
    """
    Determine the cycle phase for a given date.

    Args:
        target_date: Date to classify
        last_period_date: First day of the reference period
        cycle_length: Average cycle length in days, must be positive
        period_duration: Number of predicted bleeding days
        logs: Observed daily logs keyed by YYYY-MM-DD

    Returns:
        Phase the date falls into. FOLLICULAR is never predicted; days
        between the period and the fertile window count as LUTEAL.

    Example:
        >>> calculate_phase(date(2024, 1, 10), date(2024, 1, 1), 28)
        <CyclePhaseType.FERTILE: 'FERTILE'>
    """
    log = get_log_for_date(target_date, logs)
    if log is not None and log.flow:
        return CyclePhaseType.PERIOD

    day = day_in_cycle(target_date, last_period_date, cycle_length)

    if day < period_duration:
        return CyclePhaseType.PERIOD

    ovulation_index = cycle_length - LUTEAL_PHASE_DAYS
    fertile_start = ovulation_index - FERTILE_DAYS_BEFORE_OVULATION
    fertile_end = ovulation_index + FERTILE_DAYS_AFTER_OVULATION

    if day == ovulation_index:
        return CyclePhaseType.OVULATION

    if fertile_start <= day <= fertile_end:
        return CyclePhaseType.FERTILE

    return CyclePhaseType.LUTEAL

def get_phase_label(phase: CyclePhaseType) -> str:
    """Short calendar label for a phase."""
    return PHASE_LABELS[phase]

def get_phase_badge(phase: CyclePhaseType) -> str:
    """Dashboard badge text for a phase."""
    return PHASE_BADGES[phase]

def get_phase_emoji(phase: CyclePhaseType) -> str:
    return PHASE_EMOJIS[phase]
