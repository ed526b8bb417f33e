from pydantic import BaseModel, Field
from typing import Optional
import datetime as dt


class MealCreate(BaseModel):
    """Meal fields as received from the multipart form.

    calories and datetime stay raw strings here; MealService parses them so a
    malformed value is reported as a service validation error.
    """

    user_id: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    calories: Optional[str] = None
    datetime: Optional[str] = Field(None, description="ISO-8601 time of consumption")


class MealUpdate(BaseModel):
    """Fields left unset keep their stored value"""

    title: Optional[str] = None
    description: Optional[str] = None
    calories: Optional[str] = None
    datetime: Optional[str] = None


class MealResponse(BaseModel):
    id: int
    user_id: str
    title: Optional[str]
    description: Optional[str]
    calories: Optional[int]
    datetime: dt.datetime
    image: Optional[str]

    model_config = {"from_attributes": True}
