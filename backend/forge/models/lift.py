from sqlalchemy import Column, Integer, String, Date, DateTime, JSON
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.sql import func
from forge.db import Base


class Lift(Base):
    __tablename__ = "lifts"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String, nullable=False, index=True)

    date = Column(Date, nullable=False, index=True)

    # e.g. ["legs", "core"]
    muscle_groups = Column(JSON().with_variant(JSONB(), "postgresql"), nullable=False, default=list)
    intensity = Column(String(20), nullable=False, server_default="moderate")  # light, moderate, heavy
    duration_seconds = Column(Integer, nullable=False, server_default="0")
    notes = Column(String, nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
