"""Meal log routes (multipart, optional `image` upload)"""

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile, status
from sqlalchemy.orm import Session
import logging
from typing import List, Optional

from api.dependencies import get_db, staged_image
from api.responses import MessageResponse, deleted_response, error_responses
from domain.schemas.meal_schemas import MealCreate, MealUpdate, MealResponse
from services.meal_service import MealService

router = APIRouter(prefix="/meals", tags=["Meals"])
logger = logging.getLogger("nutrilife.api.meals")


@router.post(
    "",
    response_model=MealResponse,
    status_code=status.HTTP_201_CREATED,
    responses=error_responses(400, 404),
)
def create_meal(
    user_id: Optional[str] = Form(None, alias="userId"),
    title: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    calories: Optional[str] = Form(None),
    consumed_at: Optional[str] = Form(None, alias="datetime"),
    image: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db),
):
    """Log a meal. `calories` must be a non-negative integer; `datetime` defaults to now."""
    meal_data = MealCreate(
        user_id=user_id,
        title=title,
        description=description,
        calories=calories,
        datetime=consumed_at,
    )
    return MealService.create_meal(db, meal_data, staged_image(image))


@router.get("", response_model=List[MealResponse])
def get_all_meals(
    user_id: Optional[str] = Query(None, alias="userId"),
    db: Session = Depends(get_db),
):
    """List meals, optionally only those of one user."""
    return MealService.list_meals(db, user_id)


@router.get("/{meal_id}", response_model=MealResponse, responses=error_responses(404))
def get_meal(meal_id: int, db: Session = Depends(get_db)):
    return MealService.get_meal(db, meal_id)


@router.put(
    "/{meal_id}", response_model=MealResponse, responses=error_responses(400, 404)
)
def update_meal(
    meal_id: int,
    title: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    calories: Optional[str] = Form(None),
    consumed_at: Optional[str] = Form(None, alias="datetime"),
    image: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db),
):
    """
    Update a meal. Omitted fields keep their value.

    A new `image` replaces the previous file, which is deleted; without one
    the current image is kept.
    """
    submitted = {
        "title": title,
        "description": description,
        "calories": calories,
        "datetime": consumed_at,
    }
    changes = MealUpdate(**{k: v for k, v in submitted.items() if v is not None})
    return MealService.update_meal(db, meal_id, changes, staged_image(image))


@router.delete(
    "/{meal_id}", response_model=MessageResponse, responses=error_responses(404)
)
def delete_meal(meal_id: int, db: Session = Depends(get_db)):
    """Delete a meal together with its image file."""
    MealService.delete_meal(db, meal_id)
    return deleted_response("Meal", meal_id)
