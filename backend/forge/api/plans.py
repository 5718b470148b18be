import logging
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from forge.api.deps import ai_limit, get_current_user_id
from forge.core.advisory import AdvisoryTextGenerator, get_advisor
from forge.core.compliance import compute_compliance
from forge.core.config import settings
from forge.core.errors import InvalidPlanShape, NotFound
from forge.core.plan_builder import accept_generated_plan, fallback_plan
from forge.core.plan_model import parse_plan
from forge.core.reschedule import reschedule_session
from forge.core.time_utils import iso_week_bounds, monday_of
from forge.db import get_db
from forge.models.training_plan import TrainingPlan
from forge.schemas.analysis import ComplianceSnapshot
from forge.schemas.plan import (
    CurrentPlanResponse,
    PlanDocument,
    PlanGenerateRequest,
    RescheduleRequest,
    RescheduleResult,
    TrainingPlanRead,
)
from forge.stores.activity_log import list_activities
from forge.stores.plan_store import create_plan, get_latest_plan, plan_lock, save_plan

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/plans", tags=["plans"])


def _to_read(row: TrainingPlan) -> TrainingPlanRead:
    try:
        document = parse_plan(row.plan_json)
    except InvalidPlanShape as exc:
        logger.warning("Stored plan %s does not parse: %s", row.id, exc)
        document = PlanDocument()
    return TrainingPlanRead(id=row.id, user_id=row.user_id, week_start=row.week_start, plan_json=document)


@router.get("/current", response_model=CurrentPlanResponse)
def get_current_plan(
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    row = get_latest_plan(db, user_id)
    if not row:
        return CurrentPlanResponse(plan=None)
    return CurrentPlanResponse(plan=_to_read(row))


@router.post(
    "/generate",
    response_model=CurrentPlanResponse,
    dependencies=[Depends(ai_limit("plan_generate"))],
)
def generate_plan(
    payload: Optional[PlanGenerateRequest] = None,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
    advisor: AdvisoryTextGenerator = Depends(get_advisor),
):
    """Create a new plan; it becomes the user's current plan immediately."""
    profile = (payload or PlanGenerateRequest()).model_dump()

    document = accept_generated_plan(advisor.generate_training_plan(profile))
    if document is None:
        # AI off, failed or returned a malformed plan
        document = parse_plan(fallback_plan(profile.get("weekly_miles")))

    row = create_plan(db, user_id, monday_of(date.today()), document)
    return CurrentPlanResponse(plan=_to_read(row))


@router.get("/compliance", response_model=ComplianceSnapshot)
def get_compliance(
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """How much of this week's plan the user has done so far."""
    today = date.today()
    start, end = iso_week_bounds(today)

    row = get_latest_plan(db, user_id)
    if not row:
        return compute_compliance(None, None, [], [], today)

    runs = list_activities(db, user_id, "run", start, end)
    lifts = list_activities(db, user_id, "lift", start, end)
    return compute_compliance(
        row.plan_json,
        row.week_start,
        runs,
        lifts,
        today,
        mode=settings.plan_week_tracking,
        plan_id=row.id,
    )


@router.post("/reschedule", response_model=RescheduleResult)
def reschedule(
    payload: RescheduleRequest,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Move a missed session to the next rest day of the week."""
    current = get_latest_plan(db, user_id)
    if not current:
        raise HTTPException(status_code=404, detail="No training plan")

    with plan_lock(current.id):
        # Re-read under the lock so concurrent moves see each other's writes
        db.expire_all()
        row = get_latest_plan(db, user_id, for_update=True)
        if row is None:
            raise HTTPException(status_code=404, detail="No training plan")
        try:
            outcome = reschedule_session(
                row.plan_json,
                payload.session_id,
                plan_week_start=row.week_start,
                today=date.today(),
                mode=settings.plan_week_tracking,
            )
        except NotFound as exc:
            db.rollback()
            raise HTTPException(status_code=404, detail=f"Session not found: {exc}")
        row = save_plan(db, row.id, outcome.document)

    logger.info(
        "Plan %s: moved %s session to %s for user %s",
        row.id, outcome.moved_from, outcome.moved_to, user_id,
    )
    return RescheduleResult(moved_from=outcome.moved_from, moved_to=outcome.moved_to, plan=_to_read(row))
