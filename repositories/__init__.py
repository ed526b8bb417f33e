"""
Repositories package - Data access layer.
"""

from repositories.base import BaseRepository
from repositories.unit_of_work import unit_of_work
from repositories.user_repository import (
    UserRepository,
    ProfileRepository,
    PreferenceRepository,
)
from repositories.meal_repository import MealRepository
from repositories.post_repository import PostRepository, CategoryRepository

__all__ = [
    "BaseRepository",
    "unit_of_work",
    "UserRepository",
    "ProfileRepository",
    "PreferenceRepository",
    "MealRepository",
    "PostRepository",
    "CategoryRepository",
]
