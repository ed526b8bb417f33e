"""
Domain models package - SQLAlchemy ORM models.
"""

from domain.models.database import (
    Base,
    engine,
    SessionLocal,
    init_database,
    get_db_session,
)
from domain.models.user import User, Profile, Preference
from domain.models.meal import Meal
from domain.models.post import Post, Category, post_categories

__all__ = [
    # Database
    "Base",
    "engine",
    "SessionLocal",
    "init_database",
    "get_db_session",
    # User models
    "User",
    "Profile",
    "Preference",
    # Meal models
    "Meal",
    # Post models
    "Post",
    "Category",
    "post_categories",
]
