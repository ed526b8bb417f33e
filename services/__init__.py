"""Services package - Business logic layer"""

from services.user_service import UserService
from services.profile_service import ProfileService
from services.preference_service import PreferenceService
from services.meal_service import MealService
from services.post_service import PostService, CategoryService

__all__ = [
    "UserService",
    "ProfileService",
    "PreferenceService",
    "MealService",
    "PostService",
    "CategoryService",
]
