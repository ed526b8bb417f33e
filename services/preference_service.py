import logging
from typing import List
from sqlalchemy.orm import Session

from domain.models import Preference
from domain.schemas.user_schemas import PreferenceCreate, PreferenceUpdate
from repositories import unit_of_work, UserRepository, PreferenceRepository
from app.exceptions import ServiceValidationError, NotFoundError

logger = logging.getLogger("nutrilife.user_prefs")


class PreferenceService:
    """Handles adding, listing and updating user preferences."""

    @staticmethod
    def create_preference(db: Session, preference_data: PreferenceCreate) -> Preference:
        if not preference_data.user_id:
            raise ServiceValidationError("User id is required")
        if not UserRepository(db).exists(preference_data.user_id):
            raise NotFoundError(f"User {preference_data.user_id} not found")

        preference = Preference(
            user_id=preference_data.user_id,
            key=preference_data.key,
            value=preference_data.value,
        )
        with unit_of_work(db):
            PreferenceRepository(db).add(preference)
        db.refresh(preference)
        logger.info(
            f"Added preference: {preference.key} user_id={preference.user_id}"
        )
        return preference

    @staticmethod
    def list_preferences(db: Session) -> List[Preference]:
        return PreferenceRepository(db).get_all()

    @staticmethod
    def list_user_preferences(db: Session, user_id: str) -> List[Preference]:
        return PreferenceRepository(db).get_by_user_id(user_id)

    @staticmethod
    def get_preference(db: Session, preference_id: int) -> Preference:
        preference = PreferenceRepository(db).get_by_id(preference_id)
        if not preference:
            raise NotFoundError(f"Preference {preference_id} not found")
        return preference

    @staticmethod
    def update_preference(
        db: Session, preference_id: int, changes: PreferenceUpdate
    ) -> Preference:
        """Replace only the fields present in the request"""
        preference = PreferenceService.get_preference(db, preference_id)
        fields = changes.model_dump(exclude_unset=True)
        if "key" in fields and not fields["key"]:
            raise ServiceValidationError("Preference key must not be empty")

        with unit_of_work(db):
            for name, value in fields.items():
                setattr(preference, name, value)
        db.refresh(preference)
        logger.info(
            f"Updated preference: {preference_id} fields={','.join(fields) or '-'}"
        )
        return preference

    @staticmethod
    def delete_preference(db: Session, preference_id: int) -> None:
        preference = PreferenceService.get_preference(db, preference_id)
        with unit_of_work(db):
            PreferenceRepository(db).delete(preference)
        logger.info(f"Removed preference: {preference_id}")
