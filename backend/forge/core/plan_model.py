"""Plan document helpers: day classification, date mapping, week selection.

Everything here is a pure function of its arguments; the reference date is
always passed in by the caller.
"""
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Optional

from pydantic import ValidationError

from forge.core.constants import DAY_LABELS, LIFT_SESSION_TYPES
from forge.core.errors import InvalidPlanShape
from forge.core.time_utils import monday_of
from forge.schemas.plan import PlanDay, PlanDocument, PlanWeek


@dataclass(frozen=True)
class PlannedSession:
    """A non-rest day of the tracked week, pinned to a calendar date."""
    index: int  # 0 = Mon .. 6 = Sun
    day: str
    date: date
    type: str
    kind: str  # "run" or "lift"
    distance_miles: float


def classify(day: PlanDay) -> str:
    """Return 'rest', 'lift' or 'run' for a plan day.

    Unknown session types count as runs so tracking fails open.
    """
    session_type = (day.type or "").strip().lower()
    if session_type == "rest":
        return "rest"
    if session_type in LIFT_SESSION_TYPES:
        return "lift"
    return "run"


def day_offset(day_label: str) -> Optional[int]:
    label = (day_label or "").strip()[:3].title()
    if label in DAY_LABELS:
        return DAY_LABELS.index(label)
    return None


def date_for(week_start: date, day_label: str) -> Optional[date]:
    """Map Mon..Sun onto week_start + 0..6. Unknown labels map to None."""
    offset = day_offset(day_label)
    if offset is None:
        return None
    return week_start + timedelta(days=offset)


def parse_plan(plan_json) -> PlanDocument:
    """Validate a stored plan document; raises InvalidPlanShape on garbage."""
    if isinstance(plan_json, PlanDocument):
        return plan_json
    try:
        return PlanDocument.model_validate(plan_json or {})
    except ValidationError as exc:
        raise InvalidPlanShape(str(exc)) from exc


def check_week(week: Optional[PlanWeek]) -> PlanWeek:
    """A week holds exactly one entry per day label, ordered Mon->Sun."""
    if week is None or week.days is None or len(week.days) != len(DAY_LABELS):
        raise InvalidPlanShape("tracked week must have exactly 7 day entries")
    if [day_offset(d.day) for d in week.days] != list(range(len(DAY_LABELS))):
        raise InvalidPlanShape("tracked week days must be Mon..Sun in order")
    return week


def tracked_week_index(document: PlanDocument, plan_week_start: date, today: date, mode: str = "first") -> int:
    """Pick which week of a multi-week plan is the current one.

    "first" always tracks week index 0. "elapsed" tracks the week whose
    date range contains `today`, clamped to the plan's bounds.
    """
    if mode != "elapsed" or not document.weeks:
        return 0
    elapsed = (monday_of(today) - monday_of(plan_week_start)).days // 7
    return max(0, min(elapsed, len(document.weeks) - 1))


def tracked_week(document: PlanDocument, plan_week_start: date, today: date, mode: str = "first") -> tuple[PlanWeek, date]:
    """Return the tracked week and the Monday its days are anchored to.

    In "first" mode the week is anchored to the current calendar week
    regardless of when the plan started.
    """
    if not document.weeks:
        raise InvalidPlanShape("plan has no weeks")
    idx = tracked_week_index(document, plan_week_start, today, mode)
    week = check_week(document.weeks[idx])
    if mode == "elapsed":
        anchor = monday_of(plan_week_start) + timedelta(weeks=idx)
    else:
        anchor = monday_of(today)
    return week, anchor


def planned_sessions(week: PlanWeek, anchor: date, start: date, end: date) -> list[PlannedSession]:
    """Non-rest days of `week` whose date falls in [start, end), Mon->Sun."""
    sessions: list[PlannedSession] = []
    for day in week.days or []:
        kind = classify(day)
        if kind == "rest":
            continue
        offset = day_offset(day.day)
        if offset is None:
            continue
        when = anchor + timedelta(days=offset)
        if not (start <= when < end):
            continue
        sessions.append(
            PlannedSession(
                index=offset,
                day=DAY_LABELS[offset],
                date=when,
                type=day.type,
                kind=kind,
                distance_miles=float(day.distance_miles or 0),
            )
        )
    sessions.sort(key=lambda s: s.index)
    return sessions
