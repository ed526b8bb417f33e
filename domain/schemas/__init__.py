"""
Domain schemas package - Pydantic models for validation.
"""

from domain.schemas.user_schemas import (
    UserCreate,
    UserSummaryResponse,
    UserResponse,
    ProfileCreate,
    ProfileUpdate,
    ProfileResponse,
    PreferenceCreate,
    PreferenceUpdate,
    PreferenceResponse,
)
from domain.schemas.meal_schemas import MealCreate, MealUpdate, MealResponse
from domain.schemas.post_schemas import (
    CategoryCreate,
    CategoryResponse,
    PostCreate,
    PostUpdate,
    AuthorResponse,
    PostResponse,
    PostDetailResponse,
)

__all__ = [
    # User schemas
    "UserCreate",
    "UserSummaryResponse",
    "UserResponse",
    "ProfileCreate",
    "ProfileUpdate",
    "ProfileResponse",
    "PreferenceCreate",
    "PreferenceUpdate",
    "PreferenceResponse",
    # Meal schemas
    "MealCreate",
    "MealUpdate",
    "MealResponse",
    # Post schemas
    "CategoryCreate",
    "CategoryResponse",
    "PostCreate",
    "PostUpdate",
    "AuthorResponse",
    "PostResponse",
    "PostDetailResponse",
]
