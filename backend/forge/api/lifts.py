from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from forge.api.deps import get_current_user_id
from forge.db import get_db
from forge.models.lift import Lift
from forge.schemas.lift import LiftCreate, LiftRead


router = APIRouter(prefix="/lifts", tags=["lifts"])

LIFT_LIST_LIMIT = 30


@router.get("/", response_model=list[LiftRead])
def list_lifts(
    limit: int = Query(LIFT_LIST_LIMIT, ge=1, le=500),
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    return (
        db.query(Lift)
        .filter(Lift.user_id == user_id)
        .order_by(Lift.date.desc(), Lift.id.desc())
        .limit(limit)
        .all()
    )


@router.post("/", response_model=LiftRead, status_code=201)
def create_lift(
    payload: LiftCreate,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    lift = Lift(
        user_id=user_id,
        date=payload.date,
        muscle_groups=[g.strip().lower() for g in payload.muscle_groups if g.strip()],
        intensity=payload.intensity.value,
        duration_seconds=payload.duration_seconds,
        notes=payload.notes,
    )
    db.add(lift)
    db.commit()
    db.refresh(lift)
    return lift


@router.delete("/{lift_id}")
def delete_lift(
    lift_id: int,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    lift = db.query(Lift).filter(Lift.id == lift_id, Lift.user_id == user_id).first()
    if not lift:
        raise HTTPException(status_code=404, detail="Not found")
    db.delete(lift)
    db.commit()
    return {"ok": True}
