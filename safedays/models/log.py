"""
Daily log model definition for observed symptoms.
"""
from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict

class FlowIntensity(str, Enum):
    """
    Observed menstrual flow.
    """
    LIGHT = "LIGHT"
    MEDIUM = "MEDIUM"
    HEAVY = "HEAVY"

class DailyLog(BaseModel):
    """
    Symptoms observed on a single calendar day.

    Absence of a log means "no observation"; an empty log is never stored.
    """
    model_config = ConfigDict(frozen=True)

    flow: Optional[FlowIntensity] = None
    spotting: Optional[bool] = None

    @property
    def is_empty(self) -> bool:
        """Check if the log records nothing worth keeping."""
        return not self.flow and not self.spotting
