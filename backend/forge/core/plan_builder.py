"""Deterministic 4-week plan used when AI generation is off or fails."""
import math
from typing import Optional

from forge.core.constants import DAY_LABELS
from forge.core.errors import InvalidPlanShape
from forge.core.plan_model import check_week, parse_plan
from forge.schemas.plan import PlanDocument

DEFAULT_WEEKLY_MILES = 10

REST_DAYS = {"Tue", "Thu", "Sun"}
LONG_RUN_DAY = "Sat"
WEEK_THEMES = {1: "Foundation", 2: "Build", 3: "Peak", 4: "Recovery Week"}


def _round_half_up(x: float, places: int = 0) -> float:
    factor = 10 ** places
    return math.floor(x * factor + 0.5) / factor


def fallback_plan(weekly_miles: Optional[float] = None) -> dict:
    """Three run days plus a Saturday long run, weeks 1-3 building 10%, week 4 easing off."""
    base = weekly_miles or DEFAULT_WEEKLY_MILES
    weeks = []
    for w in (1, 2, 3, 4):
        recovery = w == 4
        scale = 0.8 if recovery else 1.0
        total = base * 0.8 if recovery else base * (1 + (w - 1) * 0.1)
        days = []
        for label in DAY_LABELS:
            if label in REST_DAYS:
                days.append({"day": label, "type": "rest", "distance_miles": 0, "duration_min": 0,
                             "description": "Rest and recovery", "rest": True})
            elif label == LONG_RUN_DAY:
                days.append({"day": label, "type": "long",
                             "distance_miles": _round_half_up(base * 0.35 * scale, 1), "duration_min": 0,
                             "description": "Long easy run at conversational pace", "rest": False})
            else:
                days.append({"day": label, "type": "easy",
                             "distance_miles": _round_half_up(base * 0.2 * scale, 1), "duration_min": 0,
                             "description": "Easy effort run", "rest": False})
        weeks.append({
            "week": w,
            "theme": WEEK_THEMES[w],
            "total_miles": int(_round_half_up(total)),
            "days": days,
        })
    return {"weeks": weeks}


def accept_generated_plan(raw) -> Optional[PlanDocument]:
    """Validate an AI plan; None unless every week has 7 day entries."""
    if not isinstance(raw, dict):
        return None
    try:
        document = parse_plan(raw)
        if not document.weeks:
            return None
        for week in document.weeks:
            check_week(week)
    except InvalidPlanShape:
        return None
    return document
