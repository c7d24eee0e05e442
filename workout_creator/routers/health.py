"""Router exposing basic system endpoints."""
from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from workout_creator.database import get_db
from workout_creator.models.database_models import Exercise, Workout


logger = logging.getLogger(__name__)


router = APIRouter(prefix="/api/health", tags=["health"])


@router.get("/status")
async def get_status() -> dict[str, str]:
    """Return a minimal status payload."""
    return {"status": "online"}


@router.get("/library-status")
async def get_library_status(db: Annotated[Session, Depends(get_db)]) -> dict:
    """
    Report whether the exercise library has been populated.

    Returns:
        dict: {
            "default_exercises": int,
            "custom_exercises": int,
            "workouts": int,
            "seeded": bool
        }
    """
    try:
        default_count = db.query(Exercise).filter(Exercise.is_custom.is_(False)).count()
        custom_count = db.query(Exercise).filter(Exercise.is_custom.is_(True)).count()
        workout_count = db.query(Workout).count()
    except SQLAlchemyError:
        logger.exception("Failed to read library status")
        raise HTTPException(status_code=503, detail="Database unavailable")

    return {
        "default_exercises": default_count,
        "custom_exercises": custom_count,
        "workouts": workout_count,
        "seeded": default_count > 0,
    }
