"""
Tests for cycle history reconciliation.
"""
from datetime import date

import pytest

from safedays.models.cycle import CycleRecord
from safedays.services.history import (
    ReconcileAction,
    classify_cycle_start,
    close_cycle,
    close_stranded_cycles,
    reconcile_cycle_start
)
from tests.conftest import make_cycle

def test_first_report_starts_ledger():
    cycles = reconcile_cycle_start([], date(2024, 1, 1))
    assert cycles == [CycleRecord(start_date=date(2024, 1, 1))]
    assert cycles[0].is_open

def test_report_near_last_start_is_correction():
    """A start 4 days later amends the record and keeps its length untouched."""
    cycles = [CycleRecord(start_date=date(2024, 1, 1), length=30)]

    updated = reconcile_cycle_start(cycles, date(2024, 1, 5))

    assert len(updated) == 1
    assert updated[0].start_date == date(2024, 1, 5)
    assert updated[0].length == 30
    assert updated[0].end_date is None

def test_correction_to_an_earlier_date():
    cycles = [make_cycle(date(2024, 1, 10))]
    updated = reconcile_cycle_start(cycles, date(2024, 1, 7))
    assert updated == [make_cycle(date(2024, 1, 7))]

def test_new_cycle_closes_previous_one():
    """A 28-day gap closes the open record and appends a new open one."""
    cycles = [make_cycle(date(2024, 1, 1))]

    updated = reconcile_cycle_start(cycles, date(2024, 1, 29))

    assert len(updated) == 2
    assert updated[0].length == 28
    assert updated[0].end_date == date(2024, 1, 28)
    assert updated[1] == CycleRecord(start_date=date(2024, 1, 29))
    assert updated[1].is_open

def test_same_report_twice_is_a_correction():
    """Reconciling the same start again never duplicates the cycle."""
    cycles = reconcile_cycle_start([make_cycle(date(2024, 1, 1))], date(2024, 1, 29))

    again = reconcile_cycle_start(cycles, date(2024, 1, 29))

    assert again == cycles
    assert classify_cycle_start(cycles, date(2024, 1, 29)) == ReconcileAction.CORRECTION

@pytest.mark.parametrize("gap", [5, 7, 10])
def test_ambiguous_gap_is_merged(gap):
    """Reports 5-10 days after the open cycle never create a second open record."""
    cycles = [make_cycle(date(2024, 1, 1))]
    reported = date(2024, 1, 1 + gap)

    updated = reconcile_cycle_start(cycles, reported)

    assert classify_cycle_start(cycles, reported) == ReconcileAction.MERGED
    assert updated == cycles
    assert sum(1 for c in updated if c.is_open) == 1

def test_shortest_new_cycle_gap():
    updated = reconcile_cycle_start([make_cycle(date(2024, 1, 1))], date(2024, 1, 12))
    assert updated[0].length == 11
    assert updated[-1].is_open

def test_input_is_not_modified():
    cycles = [make_cycle(date(2024, 1, 1))]
    snapshot = list(cycles)

    updated = reconcile_cycle_start(cycles, date(2024, 1, 29))

    assert updated is not cycles
    assert cycles == snapshot
    assert cycles[0].is_open

def test_unsorted_history_is_ordered_first():
    cycles = [make_cycle(date(2024, 2, 1)), make_cycle(date(2024, 1, 1), 31)]

    updated = reconcile_cycle_start(cycles, date(2024, 3, 1))

    assert [c.start_date for c in updated] == [date(2024, 1, 1), date(2024, 2, 1), date(2024, 3, 1)]
    assert updated[1].length == 29
    assert updated[1].end_date == date(2024, 2, 29)

def test_backfill_inserts_historical_cycle():
    """An older start is inserted and closed against the cycle after it."""
    cycles = [make_cycle(date(2024, 3, 1))]

    updated = reconcile_cycle_start(cycles, date(2024, 1, 31))

    assert classify_cycle_start(cycles, date(2024, 1, 31)) == ReconcileAction.BACKFILL
    assert updated[0] == CycleRecord(start_date=date(2024, 1, 31), end_date=date(2024, 2, 29), length=30)
    assert updated[1] == make_cycle(date(2024, 3, 1))

def test_backfill_shortens_predecessor():
    cycles = [make_cycle(date(2024, 1, 1), 60), make_cycle(date(2024, 3, 1))]

    updated = reconcile_cycle_start(cycles, date(2024, 1, 31))

    assert [c.length for c in updated] == [30, 30, None]
    assert updated[0].end_date == date(2024, 1, 30)

def test_backfill_too_close_to_neighbor_is_merged():
    cycles = [make_cycle(date(2024, 3, 1))]
    assert reconcile_cycle_start(cycles, date(2024, 2, 20)) == cycles

def test_close_cycle():
    closed = close_cycle(make_cycle(date(2024, 1, 1)), date(2024, 1, 31))
    assert closed.length == 30
    assert closed.end_date == date(2024, 1, 30)
    assert not closed.is_open

def test_classify_cycle_start():
    cycles = [make_cycle(date(2024, 1, 1))]
    assert classify_cycle_start([], date(2024, 1, 1)) == ReconcileAction.START
    assert classify_cycle_start(cycles, date(2023, 12, 28)) == ReconcileAction.CORRECTION
    assert classify_cycle_start(cycles, date(2024, 1, 29)) == ReconcileAction.NEW_CYCLE
    assert classify_cycle_start(cycles, date(2023, 12, 1)) == ReconcileAction.BACKFILL

def test_close_stranded_cycles_closes_distant_open_records():
    cycles = [
        make_cycle(date(2024, 2, 12)),
        make_cycle(date(2024, 1, 1)),
        make_cycle(date(2024, 1, 15))
    ]

    repaired = close_stranded_cycles(cycles)

    assert repaired == [
        make_cycle(date(2024, 1, 1), 14),
        make_cycle(date(2024, 1, 15), 28),
        make_cycle(date(2024, 2, 12))
    ]
    assert repaired[0].end_date == date(2024, 1, 14)

def test_close_stranded_cycles_drops_open_records_close_to_the_next():
    """Starts 10 days or less apart fold into the later record."""
    cycles = [make_cycle(date(2024, 1, 1)), make_cycle(date(2024, 1, 8))]
    assert close_stranded_cycles(cycles) == [make_cycle(date(2024, 1, 8))]

def test_close_stranded_cycles_keeps_valid_history():
    cycles = [make_cycle(date(2023, 12, 4), 28), make_cycle(date(2024, 1, 1))]
    assert close_stranded_cycles(cycles) == cycles
    assert close_stranded_cycles([]) == []
