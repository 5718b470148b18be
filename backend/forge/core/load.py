"""Training load monitor.

Stateless: a snapshot is a pure function of two weekly mileage totals and
this week's perceived-effort sequence. History comes from re-querying the
activity log on every call.
"""
import logging
from typing import Callable, Optional, Sequence

from forge.core.constants import (
    DANGER_INCREASE_PCT,
    ELEVATED_INCREASE_PCT,
    HARD_EFFORT,
    HIGH_INCREASE_PCT,
    LOAD_RECOMMENDATIONS,
)
from forge.schemas.analysis import LoadSnapshot

logger = logging.getLogger(__name__)

DEFAULT_HARD_STREAK_DANGER = 3


def increase_percent(this_week: float, last_week: float) -> float:
    """Week-over-week mileage change in percent.

    Coming back from a zero week counts as a full 100% jump.
    """
    this_week = float(this_week or 0)
    last_week = float(last_week or 0)
    if last_week > 0:
        return (this_week - last_week) * 100 / last_week
    return 100.0 if this_week > 0 else 0.0


def max_hard_streak(efforts: Sequence[Optional[int]], hard_effort: int = HARD_EFFORT) -> int:
    """Longest run of consecutive efforts >= hard_effort, in the given order."""
    best = current = 0
    for effort in efforts:
        if effort is not None and effort >= hard_effort:
            current += 1
            best = max(best, current)
        else:
            current = 0
    return best


def classify_load(pct: float, hard_streak: int, hard_streak_danger: int = DEFAULT_HARD_STREAK_DANGER) -> str:
    """Most severe tier whose condition holds."""
    if pct > DANGER_INCREASE_PCT or hard_streak >= hard_streak_danger:
        return "danger"
    if pct > HIGH_INCREASE_PCT:
        return "high"
    if pct > ELEVATED_INCREASE_PCT:
        return "elevated"
    return "optimal"


def analyze_load(
    this_week_miles: float,
    last_week_miles: float,
    efforts: Sequence[Optional[int]],
    hard_streak_danger: int = DEFAULT_HARD_STREAK_DANGER,
    advisor: Optional[Callable[[dict], Optional[str]]] = None,
) -> LoadSnapshot:
    """Build a load snapshot; `advisor` may personalize non-optimal tiers.

    The advisor is best-effort. Whatever it raises or returns, the
    deterministic recommendation stays in place.
    """
    pct = increase_percent(this_week_miles, last_week_miles)
    streak = max_hard_streak(efforts)
    status = classify_load(pct, streak, hard_streak_danger)

    snapshot = LoadSnapshot(
        this_week_miles=round(float(this_week_miles or 0), 2),
        last_week_miles=round(float(last_week_miles or 0), 2),
        increase_percent=round(pct, 1),
        max_hard_streak=streak,
        load_status=status,
        recommendation=LOAD_RECOMMENDATIONS[status],
    )

    if status != "optimal" and advisor is not None:
        try:
            snapshot.warning = advisor(snapshot.model_dump())
        except Exception as exc:
            logger.warning("Load advisory failed, using baseline recommendation: %s", exc)
            snapshot.warning = None
    return snapshot
