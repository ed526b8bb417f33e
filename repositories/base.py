"""
Base repository interface for data access layer.
This follows the Repository pattern to separate business logic from data access.

Repositories only flush; committing is left to the caller's unit of work so
several repository calls can form one atomic operation.
"""

from typing import Any, Generic, TypeVar, Optional, List, Type
from sqlalchemy.orm import Session
from abc import ABC

ModelType = TypeVar("ModelType")


class BaseRepository(Generic[ModelType], ABC):
    """
    Base repository providing common CRUD operations.
    All repositories should inherit from this class.
    """

    def __init__(self, db: Session, model: Type[ModelType]):
        self.db = db
        self.model = model

    def get_by_id(self, entity_id: Any) -> Optional[ModelType]:
        """Get entity by primary key, or None"""
        return self.db.get(self.model, entity_id)

    def get_all(self) -> List[ModelType]:
        """Get all entities in insertion order"""
        return self.db.query(self.model).order_by(*self.model.__mapper__.primary_key).all()

    def add(self, entity: ModelType) -> ModelType:
        """Stage a new entity and flush so generated ids are available"""
        self.db.add(entity)
        self.db.flush()
        return entity

    def delete(self, entity: ModelType) -> None:
        """Delete an already loaded entity"""
        self.db.delete(entity)
        self.db.flush()

    def exists(self, entity_id: Any) -> bool:
        """Check if entity exists"""
        return self.get_by_id(entity_id) is not None
