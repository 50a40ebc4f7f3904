"""Exercise log entry schemas."""

from datetime import datetime
from typing import Union
from pydantic import BaseModel, Field


class LogEntry(BaseModel):
    """Exercise entry embedded in a user document."""
    description: str = Field(..., description="What was done")
    duration: Union[int, float] = Field(..., description="Duration in minutes")
    date: datetime = Field(..., description="When it was done (naive UTC)")


class ExerciseOut(BaseModel):
    """Exercise entry as returned to clients."""
    description: str
    duration: Union[int, float]
    date: str = Field(..., description="Calendar date, e.g. 'Tue Jun 01 2021'")
