"""FastAPI application entry point."""
from contextlib import asynccontextmanager

from fastapi import FastAPI

from workout_creator.config import get_settings
from workout_creator.database import SessionLocal
from workout_creator.logging_config import configure_logging
from workout_creator.routers import exercises, health
from workout_creator.services.exercise_library import seed_default_exercises


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Configure logging and seed the default exercise library once at startup."""
    configure_logging()
    settings = get_settings()
    if settings.seed_default_exercises:
        seed_default_exercises(SessionLocal, settings.default_exercises_path)
    yield


app = FastAPI(title="Custom Workout Creator API", lifespan=lifespan)


@app.get("/health", tags=["system"])
async def health_check() -> dict[str, str]:
    """Simple health probe for liveness checks."""
    return {"status": "ok"}


# Include routers
app.include_router(health.router)
app.include_router(exercises.router)
