"""
Service module for maintaining the cycle history ledger.

A reported period start is reconciled against the ordered list of cycle
records: a date close to the last recorded start is taken as a correction of
that start, a date well after it opens a new cycle and closes out the
previous one with its observed length.

Typical usage:
    cycles = reconcile_cycle_start(settings.cycles, date(2024, 1, 29))
    cycles[-2].length  # 28, the cycle that just ended
    cycles[-1].is_open  # True
"""
from enum import Enum
from typing import List
from datetime import date

from safedays.models.cycle import CycleRecord
from safedays.services.constants import CORRECTION_WINDOW_DAYS, MIN_NEW_CYCLE_GAP_DAYS
from safedays.services.utils import DateLike, add_days, days_between, to_day
from safedays.utils.logging import logger

class ReconcileAction(str, Enum):
    """
    How a reported period start is applied to the ledger.
    """
    START = "start"            # first record of an empty ledger
    CORRECTION = "correction"  # amends the last recorded start
    NEW_CYCLE = "new_cycle"    # closes the last cycle and opens a new one
    MERGED = "merged"          # too close to a neighbor to be its own cycle
    BACKFILL = "backfill"      # an older cycle inserted into the history

def sort_cycles(cycles: List[CycleRecord]) -> List[CycleRecord]:
    """Return a new list of cycles in chronological order."""
    return sorted(cycles, key=lambda c: c.start_date)

def close_cycle(cycle: CycleRecord, next_start: DateLike) -> CycleRecord:
    """
    Close a cycle against the start of the one that follows it.

    Args:
        cycle: Cycle to close
        next_start: First day of the following cycle

    Returns:
        Copy of the cycle with its end date and length filled in
    """
    return cycle.model_copy(update={
        "end_date": add_days(next_start, -1),
        "length": days_between(cycle.start_date, next_start)
    })

def close_stranded_cycles(cycles: List[CycleRecord]) -> List[CycleRecord]:
    """
    Repair a history that holds open cycles before its last record.

    Older releases appended a second open cycle for starts 5 to 10 days apart.
    Each open record that is not the last is closed against the record that
    follows it, or dropped in favor of that record when they are 10 days or
    less apart.

    Args:
        cycles: Cycle history in any order; never modified

    Returns:
        New chronologically ordered list with at most one open record, last
    """
    ordered = sort_cycles(cycles)
    repaired = []
    for cycle, following in zip(ordered, ordered[1:]):
        if not cycle.is_open:
            repaired.append(cycle)
        elif days_between(cycle.start_date, following.start_date) > MIN_NEW_CYCLE_GAP_DAYS:
            repaired.append(close_cycle(cycle, following.start_date))
        else:
            logger.warning("Dropping open cycle too close to the next recorded cycle", extra={
                "start_date": str(cycle.start_date),
                "next_start": str(following.start_date)
            })
    repaired.extend(ordered[-1:])
    return repaired

def classify_cycle_start(cycles: List[CycleRecord], reported_start: DateLike) -> ReconcileAction:
    """
    Decide how a reported period start relates to the latest recorded cycle.

    Args:
        cycles: Cycle history in any order
        reported_start: Day the user reported as a period start

    Returns:
        ReconcileAction for the report. BACKFILL reports may still be merged
        by reconcile_cycle_start when they land too close to an older record.

    Example:
        >>> cycles = [CycleRecord(start_date=date(2024, 1, 1))]
        >>> classify_cycle_start(cycles, date(2024, 1, 4))
        <ReconcileAction.CORRECTION: 'correction'>
    """
    if not cycles:
        return ReconcileAction.START

    last = sort_cycles(cycles)[-1]
    gap = days_between(last.start_date, reported_start)

    if abs(gap) < CORRECTION_WINDOW_DAYS:
        return ReconcileAction.CORRECTION
    if gap > MIN_NEW_CYCLE_GAP_DAYS:
        return ReconcileAction.NEW_CYCLE
    if gap > 0:
        return ReconcileAction.MERGED
    return ReconcileAction.BACKFILL

def _backfill_cycle(ordered: List[CycleRecord], reported_start: date) -> List[CycleRecord]:
    """Insert an older cycle start between its chronological neighbors."""
    index = sum(1 for c in ordered if c.start_date < reported_start)
    successor = ordered[index]
    predecessor = ordered[index - 1] if index > 0 else None

    too_close = days_between(reported_start, successor.start_date) <= MIN_NEW_CYCLE_GAP_DAYS
    if predecessor is not None:
        too_close = too_close or days_between(predecessor.start_date, reported_start) <= MIN_NEW_CYCLE_GAP_DAYS

    if too_close:
        logger.warning("Backfilled cycle start too close to a recorded cycle, merging", extra={
            "reported_start": str(reported_start),
            "successor_start": str(successor.start_date),
            "predecessor_start": str(predecessor.start_date) if predecessor else None
        })
        return ordered

    if predecessor is not None:
        ordered[index - 1] = close_cycle(predecessor, reported_start)
    ordered.insert(index, close_cycle(CycleRecord(start_date=reported_start), successor.start_date))
    return ordered

def reconcile_cycle_start(cycles: List[CycleRecord], reported_start: DateLike) -> List[CycleRecord]:
    """
    Apply a reported period start to the cycle history.

    Rules, measured against the chronologically last record:
      - fewer than 5 days away: correction, the last start date is replaced
        and its length/end date are left as they were
      - more than 10 days later: the last cycle is closed with the gap as its
        length and a new open cycle is appended
      - 5 to 10 days later: merged into the open cycle, history unchanged
      - 5 or more days earlier: inserted as a historical cycle

    Args:
        cycles: Current cycle history; never modified
        reported_start: Day the user reported as a period start

    Returns:
        New chronologically ordered list of cycle records

    Example:
        >>> cycles = [CycleRecord(start_date=date(2024, 1, 1))]
        >>> updated = reconcile_cycle_start(cycles, date(2024, 1, 29))
        >>> updated[0].length, updated[0].end_date
        (28, datetime.date(2024, 1, 28))
        >>> updated[1].is_open
        True
    """
    reported_start = to_day(reported_start)
    ordered = sort_cycles(cycles)
    action = classify_cycle_start(ordered, reported_start)

    if action == ReconcileAction.START:
        ordered.append(CycleRecord(start_date=reported_start))
    elif action == ReconcileAction.CORRECTION:
        ordered[-1] = ordered[-1].model_copy(update={"start_date": reported_start})
    elif action == ReconcileAction.NEW_CYCLE:
        ordered[-1] = close_cycle(ordered[-1], reported_start)
        ordered.append(CycleRecord(start_date=reported_start))
    elif action == ReconcileAction.MERGED:
        logger.warning("Cycle start too close to the open cycle, merging", extra={
            "reported_start": str(reported_start),
            "last_start": str(ordered[-1].start_date)
        })
    else:
        ordered = _backfill_cycle(ordered, reported_start)

    logger.info("Reconciled cycle start", extra={
        "reported_start": str(reported_start),
        "action": action.value,
        "total_cycles": len(ordered)
    })
    return ordered
