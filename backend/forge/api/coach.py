from datetime import datetime, timedelta

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from forge.api.deps import get_current_user_id
from forge.core.constants import HEAVY_LEGS_WARNING, HEAVY_LEGS_WINDOW_HOURS
from forge.db import get_db
from forge.models.lift import Lift
from forge.models.run import Run


router = APIRouter(prefix="/coach", tags=["coach"])


@router.get("/warning")
def get_warning(
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Warn against hard running right after a heavy leg day."""
    cutoff = (datetime.now() - timedelta(hours=HEAVY_LEGS_WINDOW_HOURS)).date()
    heavy = (
        db.query(Lift)
        .filter(Lift.user_id == user_id)
        .filter(Lift.date >= cutoff)
        .filter(Lift.intensity == "heavy")
        .all()
    )
    if not any("legs" in (lift.muscle_groups or []) for lift in heavy):
        return {"warning": False}
    return {"warning": True, "message": HEAVY_LEGS_WARNING}


@router.get("/feedback/{run_id}")
def get_run_feedback(
    run_id: int,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    run = db.query(Run).filter(Run.id == run_id, Run.user_id == user_id).first()
    if not run:
        raise HTTPException(status_code=404, detail="Run not found")

    if run.ai_feedback:
        return {"feedback": run.ai_feedback}

    # Not generated yet; the frontend polls
    return {"feedback": None, "pending": True}
