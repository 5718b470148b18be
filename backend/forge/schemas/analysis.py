from datetime import date
from typing import Optional

from pydantic import BaseModel, Field


class SessionStatus(BaseModel):
    id: str  # day label, accepted by /plans/reschedule
    day: str
    date: date
    type: str
    distance_miles: float
    kind: str  # run or lift
    completed: bool
    matched_activity_id: Optional[int] = None


class MissedSession(BaseModel):
    id: str
    day: str
    date: date
    type: str
    distance_miles: float


class Streak(BaseModel):
    current: int = 0
    best: int = 0


class ComplianceSnapshot(BaseModel):
    planned: int = 0
    completed: int = 0
    score: int = 0
    missed: list[MissedSession] = Field(default_factory=list)
    streak: Streak = Field(default_factory=Streak)
    sessions: list[SessionStatus] = Field(default_factory=list)
    week_start: Optional[date] = None
    week_end: Optional[date] = None


class LoadSnapshot(BaseModel):
    this_week_miles: float = 0.0
    last_week_miles: float = 0.0
    increase_percent: float = 0.0
    max_hard_streak: int = 0
    load_status: str = "optimal"  # optimal, elevated, high, danger
    recommendation: str = ""
    # Personalized advisory text, when the generator produced one
    warning: Optional[str] = None
