import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from forge.api.runs import router as runs_router
from forge.api.lifts import router as lifts_router
from forge.api.plans import router as plans_router
from forge.api.coach import router as coach_router
from forge.core.logging import setup_logging
from forge.db import Base, engine
from forge.models.run import Run  # noqa: F401  (import ensures table is registered)
from forge.models.lift import Lift  # noqa: F401
from forge.models.training_plan import TrainingPlan  # noqa: F401
from forge.models.ai_usage import AIUsage  # noqa: F401

setup_logging()
logger = logging.getLogger(__name__)

app = FastAPI(title="FORGE Coach")

# Allow CORS for local frontend
origins = ["*"]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Create DB tables on startup (embedded mode); Postgres deployments run alembic
Base.metadata.create_all(bind=engine)
logger.info("Database ready at %s", engine.url.render_as_string(hide_password=True))

app.include_router(runs_router)
app.include_router(lifts_router)
app.include_router(plans_router)
app.include_router(coach_router)


@app.get("/")
def root():
    return {"message": "FORGE backend is running"}


@app.get("/health")
def health():
    return {"status": "ok"}
