from typing import List, Optional
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
import logging

from adapters import attachment_store
from domain.models import User, Profile
from domain.schemas.user_schemas import UserCreate
from repositories import (
    unit_of_work,
    UserRepository,
    ProfileRepository,
    PreferenceRepository,
    MealRepository,
    PostRepository,
)
from app.exceptions import ServiceValidationError, NotFoundError, ConflictError

logger = logging.getLogger("nutrilife.users")


class UserService:
    """Business logic for user accounts"""

    @staticmethod
    def create_user(db: Session, user_data: Optional[UserCreate]) -> User:
        """Create a user; a supplied bio creates the profile in the same transaction."""
        if user_data is None:
            raise ServiceValidationError("Request body is required")

        user = User(name=user_data.name, email=user_data.email, role=user_data.role)
        try:
            with unit_of_work(db):
                UserRepository(db).add(user)
                if user_data.bio:
                    ProfileRepository(db).add(Profile(user_id=user.id, bio=user_data.bio))
        except IntegrityError:
            logger.warning(f"user_create_conflict email={user_data.email}")
            raise ConflictError(f"User with email {user_data.email} already exists")

        db.refresh(user)
        logger.info(
            f"user_created user_id={user.id} role={user.role.value} "
            f"with_profile={bool(user_data.bio)}"
        )
        return user

    @staticmethod
    def list_users(db: Session) -> List[User]:
        """Return all users (no pagination)."""
        return UserRepository(db).get_all()

    @staticmethod
    def get_user(db: Session, user_id: str) -> User:
        """Return a user with its profile loaded"""
        user = UserRepository(db).get_with_profile(user_id)
        if not user:
            logger.warning(f"user_not_found user_id={user_id}")
            raise NotFoundError(f"User {user_id} not found")
        return user

    @staticmethod
    def delete_user(db: Session, user_id: str) -> dict:
        """
        Delete a user and everything it owns, all or nothing.

        Order: posts authored, profile, preferences, meals, then the user.
        Image files of the removed meals and posts are released only after
        the transaction committed.

        Returns:
            Number of removed rows per entity kind
        """
        user_repo = UserRepository(db)
        if not user_repo.exists(user_id):
            raise NotFoundError(f"User {user_id} not found")

        meal_repo = MealRepository(db)
        post_repo = PostRepository(db)

        with unit_of_work(db):
            images = post_repo.get_images_by_author_id(
                user_id
            ) + meal_repo.get_images_by_user_id(user_id)
            removed = {
                "posts": post_repo.delete_by_author_id(user_id),
                "profiles": ProfileRepository(db).delete_by_user_id(user_id),
                "preferences": PreferenceRepository(db).delete_by_user_id(user_id),
                "meals": meal_repo.delete_by_user_id(user_id),
            }
            user_repo.delete_by_id(user_id)

        for reference in images:
            attachment_store.release(reference)

        logger.info(
            f"user_deleted user_id={user_id} "
            + " ".join(f"{k}={v}" for k, v in removed.items())
            + f" images={len(images)}"
        )
        return removed
