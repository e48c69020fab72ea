"""
Tests for cycle markers and the dashboard summary.
"""
from datetime import date

import pytest

from safedays.models.log import DailyLog, FlowIntensity
from safedays.models.phase import CyclePhaseType, OvulationStatus
from safedays.services.cycle import days_until, get_cycle_markers, get_cycle_summary

def test_cycle_markers_for_28_day_cycle():
    markers = get_cycle_markers(date(2024, 1, 1), 28)

    assert markers.period_start == date(2024, 1, 1)
    assert markers.next_period_start == date(2024, 1, 29)
    assert markers.ovulation_date == date(2024, 1, 15)
    assert markers.fertile_start == date(2024, 1, 10)
    assert markers.fertile_end == date(2024, 1, 16)

@pytest.mark.parametrize("cycle_length", [1, 14, 21, 28, 35, 60])
def test_next_period_is_exactly_one_cycle_later(cycle_length):
    start = date(2024, 2, 20)
    markers = get_cycle_markers(start, cycle_length)
    assert (markers.next_period_start - start).days == cycle_length

def test_days_until():
    assert days_until(date(2024, 1, 29), date(2024, 1, 10)) == 19
    assert days_until(date(2024, 1, 10), date(2024, 1, 10)) == 0
    assert days_until(date(2024, 1, 8), date(2024, 1, 10)) == -2

def test_summary_during_fertile_window(tracking_settings):
    summary = get_cycle_summary(tracking_settings, date(2024, 1, 10))

    assert summary.current_phase == CyclePhaseType.FERTILE
    assert summary.phase_label == "Fertile Window"
    assert summary.days_until_period == 19
    assert summary.days_until_ovulation == 5
    assert summary.ovulation_status == OvulationStatus.UPCOMING
    assert not summary.is_period_late

def test_summary_on_ovulation_day(tracking_settings):
    summary = get_cycle_summary(tracking_settings, date(2024, 1, 15))
    assert summary.current_phase == CyclePhaseType.OVULATION
    assert summary.ovulation_status == OvulationStatus.TODAY

def test_summary_when_period_is_late(tracking_settings):
    """Past the predicted start with no new period reported."""
    summary = get_cycle_summary(tracking_settings, date(2024, 2, 2))

    assert summary.is_period_late
    assert summary.days_until_period == -4
    assert summary.ovulation_status == OvulationStatus.PAST
    # Prediction wraps into the next cycle
    assert summary.current_phase == CyclePhaseType.PERIOD

def test_summary_uses_logged_flow(tracking_settings):
    settings = tracking_settings.model_copy(update={
        "logs": {"2024-01-20": DailyLog(flow=FlowIntensity.MEDIUM)}
    })
    summary = get_cycle_summary(settings, date(2024, 1, 20))
    assert summary.current_phase == CyclePhaseType.PERIOD
    assert summary.phase_label == "Period Phase"
