"""User management routes"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
import logging
from typing import List

from api.dependencies import get_db
from api.responses import MessageResponse, deleted_response, error_responses
from domain.schemas.user_schemas import (
    UserCreate,
    UserResponse,
    UserSummaryResponse,
)
from services.user_service import UserService

router = APIRouter(prefix="/users", tags=["Users"])
logger = logging.getLogger("nutrilife.api.users")


@router.post(
    "",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    responses=error_responses(400, 409),
)
def create_user(user: UserCreate, db: Session = Depends(get_db)):
    """Create a new user; include `bio` to create its profile at the same time"""
    return UserService.create_user(db, user)


@router.get("", response_model=List[UserSummaryResponse])
def get_all_users(db: Session = Depends(get_db)):
    """Return all users (no pagination)."""
    return UserService.list_users(db)


@router.get("/{user_id}", response_model=UserResponse, responses=error_responses(404))
def get_user(user_id: str, db: Session = Depends(get_db)):
    """Get a user including its profile."""
    return UserService.get_user(db, user_id)


@router.delete(
    "/{user_id}", response_model=MessageResponse, responses=error_responses(404)
)
def delete_user(user_id: str, db: Session = Depends(get_db)):
    """Delete a user with its posts, profile, preferences and meals."""
    UserService.delete_user(db, user_id)
    return deleted_response("User", user_id)
