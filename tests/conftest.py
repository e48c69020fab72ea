"""
Pytest configuration and shared fixtures.
"""
import pytest
from datetime import date, timedelta
from typing import List

from safedays.models.cycle import CycleRecord
from safedays.models.settings import CycleSettings

# Fixed "today" so nothing depends on the wall clock
TODAY = date(2024, 1, 10)

def make_cycle(start_date: date, length: int = None) -> CycleRecord:
    """Build a cycle record, closed when a length is given."""
    if length is None:
        return CycleRecord(start_date=start_date)
    return CycleRecord(
        start_date=start_date,
        end_date=start_date + timedelta(days=length - 1),
        length=length
    )

@pytest.fixture
def today() -> date:
    return TODAY

@pytest.fixture
def tracking_settings() -> CycleSettings:
    """Onboarded settings with a single open cycle starting 2024-01-01."""
    return CycleSettings(
        is_onboarded=True,
        last_period_date=date(2024, 1, 1),
        average_cycle_length=28,
        period_duration=5,
        cycles=[make_cycle(date(2024, 1, 1))]
    )

@pytest.fixture
def regular_cycles() -> List[CycleRecord]:
    """Four closed 28-day cycles followed by an open one."""
    start = date(2023, 9, 11)
    cycles = [make_cycle(start + timedelta(days=i * 28), 28) for i in range(4)]
    cycles.append(make_cycle(start + timedelta(days=4 * 28)))
    return cycles
