"""
User-related database models.
"""

from sqlalchemy import (
    Column,
    String,
    Text,
    TIMESTAMP,
    ForeignKey,
    Enum as SQLEnum,
    Integer,
    JSON,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import uuid
from datetime import datetime, timezone

from domain.models.database import Base
from domain.enums import UserRole


def _new_id() -> str:
    return str(uuid.uuid4())


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class User(Base):
    """User account model"""

    __tablename__ = "app_user"

    id = Column(String(36), primary_key=True, default=_new_id)
    name = Column(Text)
    email = Column(String(320), unique=True, nullable=False)
    role = Column(SQLEnum(UserRole, name="user_role"), nullable=False, default=UserRole.USER)
    # microsecond precision set client-side; listings order by it
    created_at = Column(
        TIMESTAMP(timezone=True), default=_utc_now, server_default=func.now(), nullable=False
    )

    # Dependents are removed by UserService.delete_user, not by the database
    profile = relationship(
        "Profile", back_populates="user", uselist=False, passive_deletes=True
    )
    preferences = relationship(
        "Preference",
        back_populates="user",
        passive_deletes=True,
        order_by="Preference.id",
    )
    meals = relationship(
        "Meal", back_populates="user", passive_deletes=True, order_by="Meal.id"
    )
    posts = relationship("Post", back_populates="author", passive_deletes=True)


class Profile(Base):
    """One-to-one biography for a user"""

    __tablename__ = "profile"

    id = Column(Integer, primary_key=True, autoincrement=True)
    # unique: at most one profile per user, enforced by the database
    user_id = Column(
        String(36), ForeignKey("app_user.id"), unique=True, nullable=False
    )
    bio = Column(Text)

    user = relationship("User", back_populates="profile")


class Preference(Base):
    """Arbitrary key/value food preference, many per user"""

    __tablename__ = "preference"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String(36), ForeignKey("app_user.id"), nullable=False, index=True)
    key = Column(String(100), nullable=False)
    value = Column(JSON)

    user = relationship("User", back_populates="preferences")
