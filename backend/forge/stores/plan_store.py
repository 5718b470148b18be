"""Plan document persistence.

Plans are written as whole documents. Writers for the same plan are
serialized in-process by `plan_lock`, a fixed set of striped locks, and by
a row lock where the database supports SELECT ... FOR UPDATE.
"""
import threading
from typing import Optional

from sqlalchemy.orm import Session

from forge.core.errors import NotFound
from forge.models.training_plan import TrainingPlan
from forge.schemas.plan import PlanDocument

PLAN_LOCK_STRIPES = 64
_plan_locks = [threading.Lock() for _ in range(PLAN_LOCK_STRIPES)]


def plan_lock(plan_id) -> threading.Lock:
    # Two plans may share a stripe; that only costs some extra waiting
    return _plan_locks[hash(plan_id) % PLAN_LOCK_STRIPES]


def get_latest_plan(db: Session, user_id: str, for_update: bool = False) -> Optional[TrainingPlan]:
    query = db.query(TrainingPlan).filter(TrainingPlan.user_id == user_id)
    if for_update:
        query = query.with_for_update()
    return query.order_by(TrainingPlan.created_at.desc(), TrainingPlan.id.desc()).first()


def create_plan(db: Session, user_id: str, week_start, document: PlanDocument) -> TrainingPlan:
    row = TrainingPlan(
        user_id=user_id,
        week_start=week_start,
        plan_json=document.model_dump(mode="json"),
    )
    db.add(row)
    db.commit()
    db.refresh(row)
    return row


def save_plan(db: Session, plan_id: int, document: PlanDocument) -> TrainingPlan:
    """Replace the stored document for `plan_id`."""
    row = db.query(TrainingPlan).filter(TrainingPlan.id == plan_id).first()
    if row is None:
        raise NotFound(f"plan {plan_id} does not exist")
    # New object so the JSON column is flagged dirty
    row.plan_json = document.model_dump(mode="json")
    db.commit()
    db.refresh(row)
    return row
