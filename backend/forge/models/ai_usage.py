from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.sql import func
from forge.db import Base


class AIUsage(Base):
    __tablename__ = "ai_usage"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String, nullable=False, index=True)
    call_type = Column(String(40), nullable=False)  # plan_generate, run_feedback, load_advisory

    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
