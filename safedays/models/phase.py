"""
Phase model definitions for cycle phases and derived dashboard data.
"""
from enum import Enum
from datetime import date
from pydantic import BaseModel

class CyclePhaseType(str, Enum):
    """
    Phase of the menstrual cycle a calendar day falls into.
    """
    PERIOD = "PERIOD"
    FOLLICULAR = "FOLLICULAR"
    FERTILE = "FERTILE"
    OVULATION = "OVULATION"
    LUTEAL = "LUTEAL"

class OvulationStatus(str, Enum):
    """
    Where the predicted ovulation day sits relative to today.
    """
    PAST = "past"
    TODAY = "today"
    UPCOMING = "upcoming"

class CycleMarkers(BaseModel):
    """
    Milestone dates derived from a reference period start.
    """
    period_start: date
    next_period_start: date
    ovulation_date: date
    fertile_start: date
    fertile_end: date

class CycleSummary(BaseModel):
    """
    Snapshot of the current cycle as seen on a given day.
    """
    today: date
    current_phase: CyclePhaseType
    phase_label: str
    markers: CycleMarkers
    days_until_period: int
    days_until_ovulation: int
    is_period_late: bool
    ovulation_status: OvulationStatus

class CycleDayData(BaseModel):
    """
    One cell of a calendar month grid.
    """
    date: date
    phase: CyclePhaseType
    is_today: bool
    is_period_start: bool
    is_current_month: bool = True
    has_flow: bool = False
    has_spotting: bool = False
    is_predicted_period: bool = False
