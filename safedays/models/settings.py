"""
Settings model definition for the persisted tracker state.
"""
from enum import Enum
from datetime import date
from typing import Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from safedays.models.cycle import CycleRecord
from safedays.models.log import DailyLog

class AppMode(str, Enum):
    """
    Whether the user is tracking cycles or a pregnancy.
    """
    TRACKING = "TRACKING"
    PREGNANCY = "PREGNANCY"

class Theme(str, Enum):
    """
    Display theme stored alongside the tracker state.
    """
    LIGHT = "LIGHT"
    DARK = "DARK"
    AUTO = "AUTO"

class CycleSettings(BaseModel):
    """
    The aggregate persisted state of a single user.

    Serialized with camelCase keys. Instances are immutable; every engine
    operation returns an updated copy.
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    is_onboarded: bool = False
    last_period_date: date
    average_cycle_length: int = 28
    period_duration: int = 5
    cycles: List[CycleRecord] = Field(default_factory=list)
    logs: Dict[str, DailyLog] = Field(default_factory=dict)  # keyed by YYYY-MM-DD
    mode: AppMode = AppMode.TRACKING
    theme: Theme = Theme.AUTO
    pregnancy_start_date: Optional[date] = None

    def to_blob(self) -> dict:
        """Serialize to the JSON-compatible persisted shape."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
