"""API routes package"""

from . import users, profiles, preferences, meals, posts, health

__all__ = ["users", "profiles", "preferences", "meals", "posts", "health"]
