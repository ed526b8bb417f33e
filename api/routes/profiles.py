"""Profile routes (one biography per user)"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
import logging
from typing import Optional

from api.dependencies import get_db
from api.responses import MessageResponse, deleted_response, error_responses
from domain.schemas.user_schemas import ProfileCreate, ProfileUpdate, ProfileResponse
from services.profile_service import ProfileService

router = APIRouter(prefix="/profile", tags=["Profiles"])
logger = logging.getLogger("nutrilife.api.profiles")


@router.post(
    "/{user_id}",
    response_model=ProfileResponse,
    status_code=status.HTTP_201_CREATED,
    responses=error_responses(400, 404, 409),
)
def create_profile(
    user_id: str,
    profile: Optional[ProfileCreate] = None,
    db: Session = Depends(get_db),
):
    """Create the profile of a user; a user can only have one."""
    bio = profile.bio if profile else None
    return ProfileService.create_profile(db, user_id, bio)


@router.get(
    "/{user_id}", response_model=ProfileResponse, responses=error_responses(404)
)
def get_profile(user_id: str, db: Session = Depends(get_db)):
    return ProfileService.get_profile(db, user_id)


@router.put(
    "/{user_id}", response_model=ProfileResponse, responses=error_responses(400, 404)
)
def update_profile(user_id: str, profile: ProfileUpdate, db: Session = Depends(get_db)):
    """Replace the biography of a user's profile."""
    return ProfileService.update_profile(db, user_id, profile.bio)


@router.delete(
    "/{user_id}", response_model=MessageResponse, responses=error_responses(404)
)
def delete_profile(user_id: str, db: Session = Depends(get_db)):
    ProfileService.delete_profile(db, user_id)
    return deleted_response("Profile", user_id)
