"""Plan compliance: which planned sessions were actually done this week.

Matching is greedy first-fit. Planned sessions are visited Mon->Sun and
each takes the first unused logged session of the same kind within the
date tolerance, in the order the log returned them (date ascending). That
is not an optimal assignment: an early session can take a record a later
session needed. Weekly volumes are a handful of sessions, so determinism
wins over minimizing total date drift.
"""
import logging
from datetime import date
from typing import Iterable, Optional, Sequence

from forge.core.activity import ActivityRecord
from forge.core.constants import MATCH_TOLERANCE_DAYS
from forge.core.errors import InvalidPlanShape
from forge.core.plan_model import PlannedSession, parse_plan, planned_sessions, tracked_week
from forge.core.time_utils import iso_week_bounds
from forge.schemas.analysis import ComplianceSnapshot, MissedSession, SessionStatus, Streak

logger = logging.getLogger(__name__)


def match_sessions(
    sessions: Sequence[PlannedSession],
    runs: Sequence[ActivityRecord],
    lifts: Sequence[ActivityRecord],
    tolerance_days: int = MATCH_TOLERANCE_DAYS,
) -> list[Optional[ActivityRecord]]:
    """Pair each planned session with at most one logged record.

    Returns a list aligned with `sessions`; None marks an unmatched session.
    A record is never used twice.
    """
    used: set[tuple[str, int]] = set()
    matches: list[Optional[ActivityRecord]] = []
    for session in sessions:
        candidates = lifts if session.kind == "lift" else runs
        found = None
        for record in candidates:
            key = (session.kind, record.id)
            if key in used:
                continue
            if abs((record.date - session.date).days) <= tolerance_days:
                found = record
                used.add(key)
                break
        matches.append(found)
    return matches


def completion_score(completed: int, planned: int) -> int:
    """round(completed / planned * 100), half up; 0 when nothing is planned."""
    if planned <= 0:
        return 0
    # Integer arithmetic keeps 7/8 -> 88 instead of banker's rounding
    return min(100, max(0, (completed * 200 + planned) // (2 * planned)))


def streak_of(hits: Iterable[bool]) -> Streak:
    current = best = 0
    for hit in hits:
        current = current + 1 if hit else 0
        best = max(best, current)
    return Streak(current=current, best=best)


def empty_snapshot(week_start: Optional[date] = None, week_end: Optional[date] = None) -> ComplianceSnapshot:
    return ComplianceSnapshot(week_start=week_start, week_end=week_end)


def compute_compliance(
    plan_json,
    plan_week_start: Optional[date],
    runs: Sequence[ActivityRecord],
    lifts: Sequence[ActivityRecord],
    today: date,
    mode: str = "first",
    plan_id=None,
) -> ComplianceSnapshot:
    """Compliance snapshot for the ISO week containing `today`.

    `runs` and `lifts` are the user's records dated inside that week, in
    storage order. No plan, or a plan whose tracked week is malformed,
    yields an empty snapshot instead of an error.
    """
    start, end = iso_week_bounds(today)
    if plan_json is None:
        return empty_snapshot(start, end)

    try:
        document = parse_plan(plan_json)
        week, anchor = tracked_week(document, plan_week_start or start, today, mode)
    except InvalidPlanShape as exc:
        logger.warning("Plan %s has an invalid shape, compliance skipped: %s", plan_id, exc)
        return empty_snapshot(start, end)

    sessions = planned_sessions(week, anchor, start, end)
    matches = match_sessions(sessions, runs, lifts)

    statuses = []
    missed = []
    for session, record in zip(sessions, matches):
        statuses.append(
            SessionStatus(
                id=session.day,
                day=session.day,
                date=session.date,
                type=session.type,
                distance_miles=session.distance_miles,
                kind=session.kind,
                completed=record is not None,
                matched_activity_id=record.id if record is not None else None,
            )
        )
        # Unmet sessions later this week are not due yet
        if record is None and session.date < today:
            missed.append(
                MissedSession(
                    id=session.day,
                    day=session.day,
                    date=session.date,
                    type=session.type,
                    distance_miles=session.distance_miles,
                )
            )

    planned = len(sessions)
    completed = sum(1 for m in matches if m is not None)
    return ComplianceSnapshot(
        planned=planned,
        completed=completed,
        score=completion_score(completed, planned),
        missed=missed,
        streak=streak_of(m is not None for m in matches),
        sessions=statuses,
        week_start=start,
        week_end=end,
    )
