"""Tests for calendar month grids."""
from datetime import date

from safedays.models.log import DailyLog, FlowIntensity
from safedays.models.phase import CyclePhaseType
from safedays.models.settings import AppMode
from safedays.services.calendar_view import build_calendar_month, get_grid_bounds

def test_grid_bounds_cover_whole_weeks():
    assert get_grid_bounds(2024, 2) == (date(2024, 1, 28), date(2024, 3, 2))
    # September 2024 starts on a Sunday
    assert get_grid_bounds(2024, 9) == (date(2024, 9, 1), date(2024, 10, 5))

def test_build_calendar_month(tracking_settings, today):
    days = build_calendar_month(tracking_settings, 2024, 1, today)
    by_date = {d.date: d for d in days}

    assert len(days) == 35
    assert days[0].date == date(2023, 12, 31)
    assert not days[0].is_current_month
    assert days[-1].date == date(2024, 2, 3)

    period_start = by_date[date(2024, 1, 1)]
    assert period_start.is_period_start
    assert period_start.phase == CyclePhaseType.PERIOD
    assert not period_start.is_predicted_period

    assert by_date[date(2024, 1, 2)].is_predicted_period
    assert by_date[date(2024, 1, 15)].phase == CyclePhaseType.OVULATION
    assert [d.date for d in days if d.is_today] == [today]

def test_calendar_shows_logged_flow(tracking_settings, today):
    settings = tracking_settings.model_copy(update={
        "logs": {
            "2024-01-20": DailyLog(flow=FlowIntensity.HEAVY),
            "2024-01-21": DailyLog(spotting=True)
        }
    })
    by_date = {d.date: d for d in build_calendar_month(settings, 2024, 1, today)}

    logged = by_date[date(2024, 1, 20)]
    assert logged.has_flow
    assert logged.phase == CyclePhaseType.PERIOD
    assert not logged.is_predicted_period

    spotted = by_date[date(2024, 1, 21)]
    assert spotted.has_spotting
    assert not spotted.has_flow
    assert spotted.phase == CyclePhaseType.LUTEAL

def test_pregnancy_mode_has_no_cycle_predictions(tracking_settings, today):
    settings = tracking_settings.model_copy(update={"mode": AppMode.PREGNANCY})

    days = build_calendar_month(settings, 2024, 1, today)

    assert all(d.phase == CyclePhaseType.LUTEAL for d in days)
    assert not any(d.is_period_start for d in days)
