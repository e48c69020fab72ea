"""
Statistics calculation service for cycle history.

This module recalibrates the average cycle length from recently completed
cycles and summarizes the history for display.
"""
import math
from typing import Dict, List
from statistics import mean

from safedays.models.cycle import CycleRecord
from safedays.services.constants import (
    DEFAULT_CYCLE_LENGTH,
    MIN_PLAUSIBLE_CYCLE_LENGTH,
    MAX_PLAUSIBLE_CYCLE_LENGTH,
    RECALIBRATION_WINDOW
)
from safedays.utils.logging import logger

def get_completed_cycles(cycles: List[CycleRecord]) -> List[CycleRecord]:
    """
    Filter to closed cycles with a plausible length, oldest first.

    The open cycle has no length and is always excluded, as are lengths of
    10 days or less and 50 days or more.
    """
    return [
        c for c in sorted(cycles, key=lambda c: c.start_date)
        if c.length is not None
        and MIN_PLAUSIBLE_CYCLE_LENGTH < c.length < MAX_PLAUSIBLE_CYCLE_LENGTH
    ]

def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves going up."""
    return math.floor(value + 0.5)

def calculate_recalibrated_average(cycles: List[CycleRecord], default: int = DEFAULT_CYCLE_LENGTH) -> int:
    """
    Recompute the average cycle length from the most recent completed cycles.

    Args:
        cycles: Cycle history
        default: Length to use when no completed cycle qualifies

    Returns:
        Rounded mean length of the last 6 qualifying cycles

    Example:
        >>> calculate_recalibrated_average([])
        28
    """
    completed = get_completed_cycles(cycles)
    if not completed:
        logger.info("No completed cycles, using default cycle length", extra={"default": default})
        return default

    recent = completed[-RECALIBRATION_WINDOW:]
    average = round_half_up(mean(c.length for c in recent))

    logger.info("Recalibrated average cycle length", extra={
        "cycles_used": len(recent),
        "average_cycle_length": average
    })
    return average

def get_cycle_history_stats(cycles: List[CycleRecord]) -> Dict:
    """
    Summarize the cycle history.

    Args:
        cycles: Cycle history

    Returns:
        Dictionary containing:
        - total_cycles: Number of recorded cycles, open one included
        - completed_cycles: Number of closed cycles with a plausible length
        - average_length: Mean of all completed lengths, or None
        - shortest: Shortest completed length, or None
        - longest: Longest completed length, or None
        - current_cycle_start: Start of the open cycle, or None
    """
    completed = get_completed_cycles(cycles)
    lengths = [c.length for c in completed]
    open_cycles = [c for c in sorted(cycles, key=lambda c: c.start_date) if c.is_open]

    return {
        "total_cycles": len(cycles),
        "completed_cycles": len(completed),
        "average_length": round(mean(lengths), 1) if lengths else None,
        "shortest": min(lengths) if lengths else None,
        "longest": max(lengths) if lengths else None,
        "current_cycle_start": open_cycles[-1].start_date if open_cycles else None
    }
