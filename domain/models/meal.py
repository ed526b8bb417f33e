"""
Meal log model.
"""

from sqlalchemy import (
    CheckConstraint,
    Column,
    ForeignKey,
    Integer,
    String,
    Text,
    TIMESTAMP,
)
from sqlalchemy.orm import relationship

from domain.models.database import Base


class Meal(Base):
    """A meal consumed by a user, optionally with a photo"""

    __tablename__ = "meal"
    __table_args__ = (
        CheckConstraint("calories IS NULL OR calories >= 0", name="ck_meal_calories"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String(36), ForeignKey("app_user.id"), nullable=False, index=True)
    title = Column(Text)
    description = Column(Text)
    calories = Column(Integer)
    datetime = Column(TIMESTAMP(timezone=True), nullable=False)
    image = Column(Text)  # stored attachment reference, e.g. /uploads/meals/x.jpg

    user = relationship("User", back_populates="meals")
