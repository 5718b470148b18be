"""Move a missed session onto a later rest day of the same week.

The plan is treated as a value: the input document is never mutated, a new
document is returned and the caller persists it as one replace.
"""
from dataclasses import dataclass
from datetime import date
from typing import Optional

from forge.core.constants import DAY_LABELS, RESCHEDULED_MARKER, RESCHEDULED_REST_DESCRIPTION
from forge.core.errors import InvalidPlanShape, NotFound
from forge.core.plan_model import classify, day_offset, parse_plan, tracked_week_index, check_week
from forge.schemas.plan import PlanDocument


@dataclass
class RescheduleOutcome:
    moved_from: str
    moved_to: str
    document: PlanDocument


def resolve_session_index(session_id) -> Optional[int]:
    """Accept a day label ("Wed", "wednesday") or a 0-based index (2 or "2")."""
    if isinstance(session_id, int):
        return session_id if 0 <= session_id < len(DAY_LABELS) else None
    text = str(session_id or "").strip()
    if text.isdigit():
        idx = int(text)
        return idx if 0 <= idx < len(DAY_LABELS) else None
    return day_offset(text)


def reschedule_session(
    plan_json,
    session_id,
    plan_week_start: Optional[date] = None,
    today: Optional[date] = None,
    mode: str = "first",
) -> RescheduleOutcome:
    """Move the session `session_id` to the next rest day after it.

    Falls back to overwriting the last day of the week when no later rest
    day exists, so the move always succeeds once the session is found.
    Raises NotFound when the plan or the session does not exist.
    """
    if plan_json is None:
        raise NotFound("no plan")
    try:
        document = parse_plan(plan_json)
    except InvalidPlanShape as exc:
        raise NotFound("plan is unreadable") from exc
    if not document.weeks:
        raise NotFound("plan has no weeks")

    week_idx = 0
    if plan_week_start is not None and today is not None:
        week_idx = tracked_week_index(document, plan_week_start, today, mode)
    updated = document.model_copy(deep=True)
    try:
        week = check_week(updated.weeks[week_idx])
    except InvalidPlanShape as exc:
        raise NotFound("tracked week is malformed") from exc

    days = week.days
    # check_week guarantees list position == weekday offset
    src_pos = resolve_session_index(session_id)
    if src_pos is None or classify(days[src_pos]) == "rest":
        raise NotFound(f"session {session_id!r} not found in plan week")

    source = days[src_pos]
    dst_pos = next(
        (i for i in range(src_pos + 1, len(days)) if classify(days[i]) == "rest"),
        len(days) - 1,
    )
    target = days[dst_pos]

    moved = source.model_copy(deep=True)
    moved.day = target.day
    moved.rest = False
    if not moved.description.endswith(RESCHEDULED_MARKER):
        moved.description = f"{moved.description}{RESCHEDULED_MARKER}"
    days[dst_pos] = moved

    if dst_pos != src_pos:
        days[src_pos] = source.model_copy(
            update={
                "type": "rest",
                "distance_miles": 0,
                "duration_min": 0,
                "description": RESCHEDULED_REST_DESCRIPTION,
                "rest": True,
            }
        )

    return RescheduleOutcome(moved_from=source.day, moved_to=target.day, document=updated)
