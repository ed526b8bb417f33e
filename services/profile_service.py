from typing import Optional
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
import logging

from domain.models import Profile
from repositories import unit_of_work, UserRepository, ProfileRepository
from app.exceptions import ServiceValidationError, NotFoundError, ConflictError

logger = logging.getLogger("nutrilife.profile")


class ProfileService:
    """Business logic for the one-per-user profile"""

    @staticmethod
    def create_profile(db: Session, user_id: Optional[str], bio: Optional[str]) -> Profile:
        """
        Create the profile of a user.

        The lookup for an existing profile only short-cuts the common case;
        the unique constraint on profile.user_id is what guarantees a single
        profile, and its violation is reported as ConflictError.
        """
        if not user_id:
            raise ServiceValidationError("User id is required")
        if not UserRepository(db).exists(user_id):
            raise NotFoundError(f"User {user_id} not found")

        profile_repo = ProfileRepository(db)
        if profile_repo.get_by_user_id(user_id):
            raise ConflictError(f"User {user_id} already has a profile")

        profile = Profile(user_id=user_id, bio=bio)
        try:
            with unit_of_work(db):
                profile_repo.add(profile)
        except IntegrityError:
            logger.warning(f"profile_create_conflict user_id={user_id}")
            raise ConflictError(f"User {user_id} already has a profile")

        db.refresh(profile)
        logger.info(f"profile_created user_id={user_id}")
        return profile

    @staticmethod
    def get_profile(db: Session, user_id: str) -> Profile:
        profile = ProfileRepository(db).get_by_user_id(user_id)
        if not profile:
            raise NotFoundError(f"Profile not found for user {user_id}")
        return profile

    @staticmethod
    def update_profile(db: Session, user_id: str, bio: Optional[str]) -> Profile:
        """Replace the bio of an existing profile"""
        profile = ProfileService.get_profile(db, user_id)
        with unit_of_work(db):
            profile.bio = bio
        db.refresh(profile)
        logger.info(f"profile_updated user_id={user_id}")
        return profile

    @staticmethod
    def delete_profile(db: Session, user_id: str) -> None:
        profile = ProfileService.get_profile(db, user_id)
        with unit_of_work(db):
            ProfileRepository(db).delete(profile)
        logger.info(f"profile_deleted user_id={user_id}")
