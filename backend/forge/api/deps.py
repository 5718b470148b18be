"""
Request dependencies shared by the routers.

- `get_current_user_id`: bearer JWT -> user id (the `sub` claim)
- `ai_limit`: per-user daily cap on AI-backed calls
"""
import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from sqlalchemy import func
from sqlalchemy.orm import Session

from forge.core.config import settings
from forge.db import get_db
from forge.models.ai_usage import AIUsage

logger = logging.getLogger(__name__)

# auto_error=False so a missing header is a 401, not a 403
security = HTTPBearer(auto_error=False)


def create_access_token(user_id: str, expires_delta: Optional[timedelta] = None) -> str:
    """Issue a token for `user_id`. Login lives elsewhere; tests and scripts use this."""
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(days=30))
    return jwt.encode({"sub": user_id, "exp": expire}, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def get_current_user_id(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> str:
    if not credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    try:
        payload = jwt.decode(credentials.credentials, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except JWTError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token",
            headers={"WWW-Authenticate": "Bearer"},
        )
    user_id = payload.get("sub")
    if not user_id:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token payload")
    return str(user_id)


def ai_calls_today(db: Session, user_id: str) -> int:
    day_start = datetime.now(timezone.utc).replace(hour=0, minute=0, second=0, microsecond=0)
    return (
        db.query(func.count(AIUsage.id))
        .filter(AIUsage.user_id == user_id)
        .filter(AIUsage.created_at >= day_start)
        .scalar()
    ) or 0


def record_ai_call(db: Session, user_id: str, call_type: str) -> None:
    """Count one AI call against `user_id`, or raise 429 when today's cap is used up."""
    used = ai_calls_today(db, user_id)
    if used >= settings.ai_daily_cap:
        logger.info("AI daily cap reached for user %s (%s)", user_id, call_type)
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail=f"You've hit today's AI limit ({settings.ai_daily_cap}/day). Come back tomorrow.",
        )
    db.add(AIUsage(user_id=user_id, call_type=call_type))
    db.commit()


def ai_limit(call_type: str):
    """Dependency factory: `Depends(ai_limit("plan_generate"))`."""

    def _check(
        user_id: str = Depends(get_current_user_id),
        db: Session = Depends(get_db),
    ) -> None:
        record_ai_call(db, user_id, call_type)

    return _check
