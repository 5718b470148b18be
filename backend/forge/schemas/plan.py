from datetime import date
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class PlanDay(BaseModel):
    """One day slot of a plan week.

    `type` is kept as a free string: unknown values from an AI-generated plan
    must survive a save/load cycle and are tracked as runs.
    """

    day: str
    type: str = "rest"
    distance_miles: float = 0
    duration_min: float = 0
    description: str = ""
    rest: bool = False

    # Keep whatever else the generator put on the day
    model_config = ConfigDict(extra="allow")


class PlanWeek(BaseModel):
    week: int = 1
    theme: str = ""
    total_miles: float = 0
    # Not length-checked here; the tracker decides what a malformed week means
    days: Optional[list[PlanDay]] = None

    model_config = ConfigDict(extra="allow")


class PlanDocument(BaseModel):
    weeks: list[PlanWeek] = Field(default_factory=list)

    model_config = ConfigDict(extra="allow")


class TrainingPlanRead(BaseModel):
    id: int
    user_id: str
    week_start: date
    plan_json: PlanDocument


class CurrentPlanResponse(BaseModel):
    plan: Optional[TrainingPlanRead] = None


class PlanGenerateRequest(BaseModel):
    # Current weekly mileage; drives the fallback plan's volume
    weekly_miles: Optional[float] = None
    goal: Optional[str] = None
    run_days_per_week: Optional[int] = None
    lift_days_per_week: Optional[int] = None
    injury_notes: Optional[str] = None


class RescheduleRequest(BaseModel):
    # Day label ("Wed") or 0-based day index ("2")
    session_id: str


class RescheduleResult(BaseModel):
    moved_from: str
    moved_to: str
    plan: TrainingPlanRead
