"""
User Repository - Data access layer for users, profiles and preferences
"""

from typing import Optional, List
from sqlalchemy.orm import Session, joinedload

from repositories.base import BaseRepository
from domain.models import User, Profile, Preference


class UserRepository(BaseRepository[User]):
    """Repository for user data access"""

    def __init__(self, db: Session):
        super().__init__(db, User)

    def get_with_profile(self, user_id: str) -> Optional[User]:
        """Get user by ID with the profile relation loaded"""
        return (
            self.db.query(User)
            .options(joinedload(User.profile))
            .filter(User.id == user_id)
            .first()
        )

    def get_all(self) -> List[User]:
        return self.db.query(User).order_by(User.created_at, User.id).all()

    def delete_by_id(self, user_id: str) -> int:
        """Delete the user row itself; dependents must already be gone"""
        count = (
            self.db.query(User)
            .filter(User.id == user_id)
            .delete(synchronize_session=False)
        )
        self.db.flush()
        return count


class ProfileRepository(BaseRepository[Profile]):
    """Repository for profile data access"""

    def __init__(self, db: Session):
        super().__init__(db, Profile)

    def get_by_user_id(self, user_id: str) -> Optional[Profile]:
        """Get the profile of a user"""
        return self.db.query(Profile).filter(Profile.user_id == user_id).first()

    def delete_by_user_id(self, user_id: str) -> int:
        """Delete every profile owned by a user"""
        count = (
            self.db.query(Profile)
            .filter(Profile.user_id == user_id)
            .delete(synchronize_session=False)
        )
        self.db.flush()
        return count


class PreferenceRepository(BaseRepository[Preference]):
    """Repository for preference data access"""

    def __init__(self, db: Session):
        super().__init__(db, Preference)

    def get_by_user_id(self, user_id: str) -> List[Preference]:
        """Get all preferences for a user"""
        return (
            self.db.query(Preference)
            .filter(Preference.user_id == user_id)
            .order_by(Preference.id)
            .all()
        )

    def delete_by_user_id(self, user_id: str) -> int:
        """Delete all preferences for a user"""
        count = (
            self.db.query(Preference)
            .filter(Preference.user_id == user_id)
            .delete(synchronize_session=False)
        )
        self.db.flush()
        return count
