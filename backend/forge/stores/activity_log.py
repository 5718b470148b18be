"""Activity log reads used by the compliance and load engine."""
from datetime import date

from sqlalchemy import func
from sqlalchemy.orm import Session

from forge.core.activity import ActivityRecord
from forge.models.lift import Lift
from forge.models.run import Run


def _run_record(run: Run) -> ActivityRecord:
    return ActivityRecord(
        id=run.id,
        user_id=run.user_id,
        date=run.date,
        kind="run",
        distance_miles=float(run.distance_miles or 0),
        duration_seconds=int(run.duration_seconds or 0),
        perceived_effort=run.perceived_effort,
    )


def _lift_record(lift: Lift) -> ActivityRecord:
    return ActivityRecord(
        id=lift.id,
        user_id=lift.user_id,
        date=lift.date,
        kind="lift",
        duration_seconds=int(lift.duration_seconds or 0),
    )


def list_activities(db: Session, user_id: str, kind: str, start: date, end: date) -> list[ActivityRecord]:
    """Records of `kind` dated in [start, end), date ascending then insertion order."""
    if kind == "run":
        rows = (
            db.query(Run)
            .filter(Run.user_id == user_id)
            .filter(Run.date >= start)
            .filter(Run.date < end)
            .order_by(Run.date.asc(), Run.id.asc())
            .all()
        )
        return [_run_record(r) for r in rows]
    if kind == "lift":
        rows = (
            db.query(Lift)
            .filter(Lift.user_id == user_id)
            .filter(Lift.date >= start)
            .filter(Lift.date < end)
            .order_by(Lift.date.asc(), Lift.id.asc())
            .all()
        )
        return [_lift_record(r) for r in rows]
    raise ValueError(f"unknown activity kind: {kind}")


def sum_distance(db: Session, user_id: str, kind: str, start: date, end: date) -> float:
    """Total miles of `kind` in [start, end); lifts carry no distance."""
    if kind != "run":
        return 0.0
    total = (
        db.query(func.sum(Run.distance_miles))
        .filter(Run.user_id == user_id)
        .filter(Run.date >= start)
        .filter(Run.date < end)
        .scalar()
    )
    return float(total or 0.0)
