"""
Cycle record model definition.
"""
from datetime import date
from typing import Optional
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

class CycleRecord(BaseModel):
    """
    One menstrual cycle, from its first period day to the day before the next.

    `length` and `end_date` stay empty while the cycle is ongoing; the record
    is closed when the next distinct cycle start is reconciled.
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    start_date: date
    end_date: Optional[date] = None
    length: Optional[int] = None

    @property
    def is_open(self) -> bool:
        """Check if this cycle has not been closed out yet."""
        return self.length is None
