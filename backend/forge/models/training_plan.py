from sqlalchemy import Column, Integer, String, Date, DateTime, JSON
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.sql import func
from forge.db import Base


class TrainingPlan(Base):
    __tablename__ = "training_plans"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String, nullable=False, index=True)

    # Monday the plan's first week begins
    week_start = Column(Date, nullable=False)

    # {"weeks": [{"week", "theme", "total_miles", "days": [7 x day entry]}]}
    # Replaced wholesale on every write, never patched.
    plan_json = Column(JSON().with_variant(JSONB(), "postgresql"), nullable=False)

    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )
