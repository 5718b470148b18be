from datetime import date
from typing import Optional
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class LiftIntensity(str, Enum):
    light = "light"
    moderate = "moderate"
    heavy = "heavy"


class LiftCreate(BaseModel):
    date: date
    muscle_groups: list[str] = []
    intensity: LiftIntensity = LiftIntensity.moderate
    duration_seconds: int = Field(0, ge=0)
    notes: Optional[str] = None


class LiftRead(LiftCreate):
    id: int

    model_config = ConfigDict(from_attributes=True)
