"""
Meal Repository - Data access layer for meal logs
"""

from typing import List, Optional
from sqlalchemy.orm import Session

from repositories.base import BaseRepository
from domain.models import Meal


class MealRepository(BaseRepository[Meal]):
    """Repository for meal data access"""

    def __init__(self, db: Session):
        super().__init__(db, Meal)

    def get_by_user_id(self, user_id: str) -> List[Meal]:
        return (
            self.db.query(Meal)
            .filter(Meal.user_id == user_id)
            .order_by(Meal.id)
            .all()
        )

    def get_images_by_user_id(self, user_id: str) -> List[str]:
        """Stored image references of every meal a user owns"""
        rows = (
            self.db.query(Meal.image)
            .filter(Meal.user_id == user_id, Meal.image.isnot(None))
            .all()
        )
        return [row.image for row in rows]

    def delete_by_user_id(self, user_id: str) -> int:
        count = (
            self.db.query(Meal)
            .filter(Meal.user_id == user_id)
            .delete(synchronize_session=False)
        )
        self.db.flush()
        return count

    def filter_all(self, user_id: Optional[str] = None) -> List[Meal]:
        """All meals, optionally restricted to one user"""
        if user_id:
            return self.get_by_user_id(user_id)
        return self.get_all()
