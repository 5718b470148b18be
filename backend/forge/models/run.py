from sqlalchemy import Column, Integer, String, Date, DateTime, Numeric, Text
from sqlalchemy.sql import func
from forge.db import Base

class Run(Base):
    __tablename__ = "runs"

    id = Column(Integer, primary_key=True, index=True)

    # Owner, taken from the bearer token's `sub` claim
    user_id = Column(String, nullable=False, index=True)

    # Local calendar date, no timezone
    date = Column(Date, nullable=False, index=True)

    # Run categorization: easy, tempo, long, intervals, recovery, race, other
    type = Column(
        String(20),
        nullable=False,
        server_default="easy",
    )

    distance_miles = Column(Numeric(6, 2), nullable=False, server_default="0")

    # Duration stored as **total seconds** (int)
    # Frontend will convert HH:MM:SS ↔ seconds
    duration_seconds = Column(Integer, nullable=False, server_default="0")

    # 1-10, what the athlete felt
    perceived_effort = Column(Integer, nullable=False, server_default="5")

    notes = Column(String, nullable=True)

    # Filled in by a background task after the run is logged
    ai_feedback = Column(Text, nullable=True)

    # Timestamps
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )

    # Pace is NOT stored; it is computed on the fly
