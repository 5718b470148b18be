from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass(frozen=True)
class ActivityRecord:
    """A logged session as the engine sees it, detached from the ORM."""
    id: int
    user_id: str
    date: date
    kind: str  # "run" or "lift"
    distance_miles: float = 0.0
    duration_seconds: int = 0
    perceived_effort: Optional[int] = None  # runs only
