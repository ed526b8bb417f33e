"""
Domain enums for NutriLife application.
"""

import enum


class UserRole(str, enum.Enum):
    """Account roles"""

    ADMIN = "admin"
    USER = "user"


class AttachmentKind(str, enum.Enum):
    """Record kinds that own image attachments; values are the store subdirectories"""

    MEAL = "meals"
    POST = "posts"
