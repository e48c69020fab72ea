"""
Pregnancy projection model definition.
"""
from datetime import date
from pydantic import BaseModel, Field

class PregnancyStats(BaseModel):
    """
    Gestational progress counted from the last menstrual period (LMP).
    """
    start_date: date
    due_date: date
    weeks_pregnant: int
    days_pregnant: int
    days_left: int  # negative once the due date has passed
    trimester: int = Field(..., ge=1, le=3)
    baby_size: str
    progress_percent: float
