"""Food preference routes"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
import logging
from typing import List

from api.dependencies import get_db
from api.responses import MessageResponse, deleted_response, error_responses
from domain.schemas.user_schemas import (
    PreferenceCreate,
    PreferenceUpdate,
    PreferenceResponse,
)
from services.preference_service import PreferenceService

router = APIRouter(prefix="/preferences", tags=["Preferences"])
logger = logging.getLogger("nutrilife.api.preferences")


@router.post(
    "",
    response_model=PreferenceResponse,
    status_code=status.HTTP_201_CREATED,
    responses=error_responses(400, 404),
)
def create_preference(preference: PreferenceCreate, db: Session = Depends(get_db)):
    """Add a preference; the body carries the owning `userId`."""
    return PreferenceService.create_preference(db, preference)


@router.get("", response_model=List[PreferenceResponse])
def get_all_preferences(db: Session = Depends(get_db)):
    return PreferenceService.list_preferences(db)


@router.get("/{user_id}", response_model=List[PreferenceResponse])
def get_user_preferences(user_id: str, db: Session = Depends(get_db)):
    """List the preferences of one user."""
    return PreferenceService.list_user_preferences(db, user_id)


@router.put(
    "/{preference_id}",
    response_model=PreferenceResponse,
    responses=error_responses(400, 404),
)
def update_preference(
    preference_id: int, changes: PreferenceUpdate, db: Session = Depends(get_db)
):
    """Replace the supplied fields of a preference."""
    return PreferenceService.update_preference(db, preference_id, changes)


@router.delete(
    "/{preference_id}", response_model=MessageResponse, responses=error_responses(404)
)
def delete_preference(preference_id: int, db: Session = Depends(get_db)):
    PreferenceService.delete_preference(db, preference_id)
    return deleted_response("Preference", preference_id)
