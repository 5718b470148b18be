import datetime as dt
from datetime import date
from typing import Optional
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class RunType(str, Enum):
    easy = "easy"
    tempo = "tempo"
    long = "long"
    intervals = "intervals"
    recovery = "recovery"
    race = "race"
    other = "other"


class RunBase(BaseModel):
    date: date
    type: RunType = RunType.easy
    notes: Optional[str] = None

    distance_miles: float = Field(0, ge=0)  # what the user types, e.g. 7.35
    duration: str = "00:00:00"  # "HH:MM:SS" as seen in the UI, e.g. "00:45:32"

    perceived_effort: int = Field(5, ge=1, le=10)


class RunCreate(RunBase):
    """Schema for logging a new run."""
    pass


class RunUpdate(BaseModel):
    """Schema for updating an existing run (all fields optional)."""

    date: Optional[dt.date] = None
    type: Optional[RunType] = None
    notes: Optional[str] = None
    distance_miles: Optional[float] = Field(None, ge=0)
    duration: Optional[str] = None  # still "HH:MM:SS"
    perceived_effort: Optional[int] = Field(None, ge=1, le=10)

    # Be lenient with extra fields from clients (id, pace, ...)
    model_config = ConfigDict(extra="ignore")


class RunRead(RunBase):
    """Schema returned to the frontend when reading a run."""

    id: int
    pace: str  # e.g. "6:30/mi"
    duration_seconds: int
    ai_feedback: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class WeeklyMileagePoint(BaseModel):
    week_start: date
    total_mileage: float


class RunStats(BaseModel):
    total_miles: float
    runs: int
    by_type: dict[str, float]
