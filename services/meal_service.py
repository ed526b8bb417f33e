import re
from typing import Any, List, Optional
from datetime import datetime, timezone
from pydantic import TypeAdapter, ValidationError
from sqlalchemy.orm import Session
import logging

from adapters.attachment_store import StagedFile
from domain.enums import AttachmentKind
from domain.models import Meal
from domain.schemas.meal_schemas import MealCreate, MealUpdate
from repositories import unit_of_work, UserRepository, MealRepository
from services.attachment_lifecycle import (
    store_upload,
    discard_on_failure,
    replace_image,
    release_image,
)
from app.exceptions import ServiceValidationError, NotFoundError

logger = logging.getLogger("nutrilife.meals")

_INTEGER = re.compile(r"-?[0-9]+")
_DATETIME = TypeAdapter(datetime)


def _blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


class MealService:
    """Meal log CRUD with photo attachments"""

    @staticmethod
    def parse_calories(value: Any) -> Optional[int]:
        """
        Parse a calories form value.

        Returns None for an absent/blank value. Non-integers and negative
        numbers are rejected instead of being coerced.

        Raises:
            ServiceValidationError: value is not a non-negative integer
        """
        if _blank(value):
            return None
        if isinstance(value, bool):
            raise ServiceValidationError(
                "calories must be an integer", details={"calories": value}
            )
        if isinstance(value, int):
            calories = value
        else:
            text = str(value).strip()
            # plain ASCII digits only: no "+5", "1_000" or non-ASCII numerals
            if not _INTEGER.fullmatch(text):
                raise ServiceValidationError(
                    "calories must be an integer", details={"calories": value}
                )
            calories = int(text)
        if calories < 0:
            raise ServiceValidationError(
                "calories must not be negative", details={"calories": calories}
            )
        return calories

    @staticmethod
    def parse_datetime(value: Any) -> Optional[datetime]:
        """Parse an ISO-8601 timestamp (a trailing "Z" means UTC) with pydantic's datetime rules."""
        if _blank(value):
            return None
        if isinstance(value, datetime):
            return value
        try:
            return _DATETIME.validate_python(str(value).strip())
        except ValidationError:
            raise ServiceValidationError(
                "datetime must be an ISO-8601 timestamp", details={"datetime": value}
            )

    @staticmethod
    def create_meal(
        db: Session, meal_data: MealCreate, image: Optional[StagedFile] = None
    ) -> Meal:
        """
        Log a meal for a user.

        A staged image is written to the attachment store and its reference
        saved on the meal; if the insert fails the file is removed again.
        datetime defaults to now (UTC).
        """
        if not meal_data.user_id:
            raise ServiceValidationError("User id is required")
        calories = MealService.parse_calories(meal_data.calories)
        consumed_at = MealService.parse_datetime(meal_data.datetime) or datetime.now(
            timezone.utc
        )
        if not UserRepository(db).exists(meal_data.user_id):
            raise NotFoundError(f"User {meal_data.user_id} not found")

        image_ref = store_upload(AttachmentKind.MEAL, image, meal_data.title)
        meal = Meal(
            user_id=meal_data.user_id,
            title=meal_data.title,
            description=meal_data.description,
            calories=calories,
            datetime=consumed_at,
            image=image_ref,
        )
        with discard_on_failure(image_ref):
            with unit_of_work(db):
                MealRepository(db).add(meal)

        db.refresh(meal)
        logger.info(
            f"meal_created meal_id={meal.id} user_id={meal.user_id} "
            f"has_image={image_ref is not None}"
        )
        return meal

    @staticmethod
    def list_meals(db: Session, user_id: Optional[str] = None) -> List[Meal]:
        return MealRepository(db).filter_all(user_id)

    @staticmethod
    def get_meal(db: Session, meal_id: int) -> Meal:
        meal = MealRepository(db).get_by_id(meal_id)
        if not meal:
            raise NotFoundError(f"Meal {meal_id} not found")
        return meal

    @staticmethod
    def update_meal(
        db: Session,
        meal_id: int,
        changes: MealUpdate,
        image: Optional[StagedFile] = None,
    ) -> Meal:
        """
        Update the supplied fields of a meal.

        With a new image the previous file is deleted before the meal is
        pointed at the new one; without one the stored reference is kept.
        """
        meal = MealService.get_meal(db, meal_id)

        fields = changes.model_dump(exclude_unset=True)
        if "calories" in fields:
            fields["calories"] = MealService.parse_calories(fields["calories"])
        if "datetime" in fields:
            fields["datetime"] = MealService.parse_datetime(fields["datetime"])
        fields = {name: value for name, value in fields.items() if value is not None}

        image_ref = store_upload(
            AttachmentKind.MEAL, image, fields.get("title") or meal.title
        )
        with discard_on_failure(image_ref):
            with unit_of_work(db):
                replace_image(meal, image_ref)
                for name, value in fields.items():
                    setattr(meal, name, value)

        db.refresh(meal)
        logger.info(
            f"meal_updated meal_id={meal_id} fields={','.join(fields) or '-'} "
            f"new_image={image_ref is not None}"
        )
        return meal

    @staticmethod
    def delete_meal(db: Session, meal_id: int) -> None:
        """Delete a meal and its image file (a missing file is skipped)."""
        meal = MealService.get_meal(db, meal_id)
        release_image(meal)
        with unit_of_work(db):
            MealRepository(db).delete(meal)
        logger.info(f"meal_deleted meal_id={meal_id}")
