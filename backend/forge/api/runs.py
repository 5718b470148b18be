import logging
from datetime import date, timedelta
from typing import Optional

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Query
from sqlalchemy import func
from sqlalchemy.orm import Session

from forge.api.deps import ai_calls_today, get_current_user_id, record_ai_call
from forge.core.advisory import AdvisoryTextGenerator, get_advisor
from forge.core.config import settings
from forge.core.load import analyze_load
from forge.core.time_utils import (
    compute_pace,
    hhmmss_to_seconds,
    iso_week_bounds,
    monday_of,
    seconds_to_hhmmss,
)
from forge.db import SessionLocal, get_db
from forge.models.run import Run
from forge.schemas.analysis import LoadSnapshot
from forge.schemas.run import RunCreate, RunRead, RunStats, RunType, RunUpdate, WeeklyMileagePoint
from forge.stores.activity_log import list_activities, sum_distance

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/runs", tags=["runs"])

RUN_LIST_LIMIT = 50


def _to_read(run: Run) -> RunRead:
    distance = float(run.distance_miles or 0)
    return RunRead(
        id=run.id,
        date=run.date,
        type=run.type,
        notes=run.notes,
        distance_miles=distance,
        duration=seconds_to_hhmmss(run.duration_seconds),
        duration_seconds=run.duration_seconds or 0,
        perceived_effort=run.perceived_effort,
        pace=compute_pace(run.duration_seconds, distance),
        ai_feedback=run.ai_feedback,
    )


def _parse_duration(value: str) -> int:
    try:
        return hhmmss_to_seconds(value)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))


def _own_run(db: Session, run_id: int, user_id: str) -> Run:
    run = db.query(Run).filter(Run.id == run_id, Run.user_id == user_id).first()
    if not run:
        raise HTTPException(status_code=404, detail="Run not found")
    return run


def attach_run_feedback(run_id: int, advisor: AdvisoryTextGenerator):
    """Background task: ask the advisor about a run and store the answer.

    Runs after the response is sent, so it opens its own session.
    """
    db = SessionLocal()
    try:
        run = db.query(Run).filter(Run.id == run_id).first()
        if not run:
            return
        feedback = advisor.generate_run_feedback(_to_read(run).model_dump(mode="json"))
        if feedback:
            run.ai_feedback = feedback
            db.commit()
    finally:
        db.close()


@router.post("/", response_model=RunRead, status_code=201)
def create_run(
    payload: RunCreate,
    background_tasks: BackgroundTasks,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
    advisor: AdvisoryTextGenerator = Depends(get_advisor),
):
    run = Run(
        user_id=user_id,
        date=payload.date,
        type=payload.type.value,
        notes=payload.notes,
        distance_miles=payload.distance_miles,
        duration_seconds=_parse_duration(payload.duration),
        perceived_effort=payload.perceived_effort,
    )

    db.add(run)
    db.commit()
    db.refresh(run)

    if advisor.available:
        background_tasks.add_task(attach_run_feedback, run.id, advisor)

    return _to_read(run)


@router.get("/", response_model=list[RunRead])
def list_runs(
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
    run_type: Optional[RunType] = Query(None),
    limit: int = Query(RUN_LIST_LIMIT, ge=1, le=500),
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """
    List the caller's runs, optionally filtered by [start_date, end_date].

      GET /runs?start_date=2025-01-06&end_date=2025-01-12
    """
    query = db.query(Run).filter(Run.user_id == user_id)

    if start_date is not None:
        query = query.filter(Run.date >= start_date)
    if end_date is not None:
        query = query.filter(Run.date <= end_date)
    if run_type is not None:
        query = query.filter(Run.type == run_type.value)

    # Most recent first
    runs = query.order_by(Run.date.desc(), Run.id.desc()).limit(limit).all()
    return [_to_read(run) for run in runs]


@router.get("/stats", response_model=RunStats)
def get_run_stats(
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    query = db.query(Run).filter(Run.user_id == user_id)
    if start_date is not None:
        query = query.filter(Run.date >= start_date)
    if end_date is not None:
        query = query.filter(Run.date <= end_date)

    total = query.with_entities(func.sum(Run.distance_miles)).scalar() or 0
    count = query.with_entities(func.count(Run.id)).scalar() or 0

    rows = (
        query.with_entities(Run.type, func.sum(Run.distance_miles))
        .group_by(Run.type)
        .all()
    )

    by_type: dict[str, float] = {t: 0.0 for t in [e.value for e in RunType]}
    for t, s in rows:
        by_type[str(t)] = float(s or 0.0)

    return RunStats(total_miles=float(total), runs=int(count), by_type=by_type)


@router.get("/weekly_mileage", response_model=list[WeeklyMileagePoint])
def get_weekly_mileage(
    weeks: int = Query(12, ge=1, le=104),
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """
    Return weekly mileage totals for the last `weeks` weeks (including the current week).

    - Weeks are Monday–Sunday.
    - Even if there are no runs in a given week, it appears with 0.0 mileage.
    """
    start_of_this_week = monday_of(date.today())
    start_date = start_of_this_week - timedelta(weeks=weeks - 1)

    # Bucket per-day totals by Monday in Python; date_trunc is Postgres-only
    rows = (
        db.query(Run.date, func.sum(Run.distance_miles))
        .filter(Run.user_id == user_id)
        .filter(Run.date >= start_date)
        .group_by(Run.date)
        .all()
    )
    mileage_by_week: dict[date, float] = {}
    for day, total in rows:
        wk = monday_of(day)
        mileage_by_week[wk] = mileage_by_week.get(wk, 0.0) + float(total or 0.0)

    return [
        WeeklyMileagePoint(
            week_start=start_date + timedelta(weeks=i),
            total_mileage=round(mileage_by_week.get(start_date + timedelta(weeks=i), 0.0), 2),
        )
        for i in range(weeks)
    ]


@router.get("/load-analysis", response_model=LoadSnapshot)
def get_load_analysis(
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
    advisor: AdvisoryTextGenerator = Depends(get_advisor),
):
    """Week-over-week load and hard-effort streak for the current ISO week."""
    this_start, this_end = iso_week_bounds(date.today())
    last_start = this_start - timedelta(days=7)

    this_week = sum_distance(db, user_id, "run", this_start, this_end)
    last_week = sum_distance(db, user_id, "run", last_start, this_start)
    efforts = [r.perceived_effort for r in list_activities(db, user_id, "run", this_start, this_end)]

    personalize = None
    if advisor.available and ai_calls_today(db, user_id) < settings.ai_daily_cap:
        def personalize(context: dict):
            record_ai_call(db, user_id, "load_advisory")
            return advisor.generate(context)

    return analyze_load(
        this_week,
        last_week,
        efforts,
        hard_streak_danger=settings.hard_streak_danger,
        advisor=personalize,
    )


@router.put("/{run_id}", response_model=RunRead)
def update_run(
    run_id: int,
    payload: RunUpdate,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    db_run = _own_run(db, run_id, user_id)

    update_data = payload.model_dump(exclude_unset=True)

    if update_data.get("duration") is not None:
        db_run.duration_seconds = _parse_duration(update_data.pop("duration"))
    update_data.pop("duration", None)

    if update_data.get("type") is not None:
        update_data["type"] = RunType(update_data["type"]).value

    # Set other fields directly; nulls only where the column allows them
    for key, value in update_data.items():
        if value is None and key != "notes":
            continue
        setattr(db_run, key, value)

    db.commit()
    db.refresh(db_run)
    return _to_read(db_run)


@router.delete("/{run_id}")
def delete_run(
    run_id: int,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    db_run = _own_run(db, run_id, user_id)
    db.delete(db_run)
    db.commit()
    return {"ok": True}
