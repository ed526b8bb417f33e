"""
Post and category models.
"""

from sqlalchemy import (
    Boolean,
    Column,
    ForeignKey,
    String,
    Table,
    Text,
    TIMESTAMP,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import uuid
from datetime import datetime, timezone

from domain.models.database import Base


def _new_id() -> str:
    return str(uuid.uuid4())


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


post_categories = Table(
    "post_category",
    Base.metadata,
    Column("post_id", String(36), ForeignKey("post.id"), primary_key=True),
    Column("category_id", String(36), ForeignKey("category.id"), primary_key=True),
)


class Category(Base):
    """Topic a post can be filed under"""

    __tablename__ = "category"

    id = Column(String(36), primary_key=True, default=_new_id)
    name = Column(String(100), unique=True, nullable=False)

    posts = relationship("Post", secondary=post_categories, back_populates="categories")


class Post(Base):
    """Community post written by a user"""

    __tablename__ = "post"

    id = Column(String(36), primary_key=True, default=_new_id)
    author_id = Column(String(36), ForeignKey("app_user.id"), nullable=False, index=True)
    title = Column(Text)
    description = Column(Text)
    published = Column(Boolean, nullable=False, default=False)
    image = Column(Text)
    # microsecond precision set client-side; listings order by it
    created_at = Column(
        TIMESTAMP(timezone=True), default=_utc_now, server_default=func.now(), nullable=False
    )

    author = relationship("User", back_populates="posts")
    categories = relationship(
        "Category",
        secondary=post_categories,
        back_populates="posts",
        order_by="Category.name",
    )
