"""Base repository with shared get-by-ID patterns.

Subclasses name their model and the exception raised when an id is unknown.
Override ``_base_query()`` to apply default filters (soft-delete exclusion in
the attendance and shift repositories).
"""

from typing import Generic, Optional, Type, TypeVar

from sqlalchemy.orm import Query, Session

from ..exceptions import PetroException

ModelT = TypeVar("ModelT")


class BaseRepository(Generic[ModelT]):
    """Shared repository logic for SQLAlchemy models.

    Class variables to set in subclasses:
        model_class:     The SQLAlchemy model
        not_found_error: Exception class raised by get_by_id
    """

    model_class: Type[ModelT]
    not_found_error: Type[PetroException]

    def __init__(self, db: Session):
        self.db = db

    def _base_query(self) -> Query:
        return self.db.query(self.model_class)

    def get_by_id(self, entity_id: str) -> ModelT:
        """Get entity by primary key. Raises not_found_error if missing."""
        entity = self.get_by_id_optional(entity_id)
        if entity is None:
            raise self.not_found_error(entity_id)
        return entity

    def get_by_id_optional(self, entity_id: str) -> Optional[ModelT]:
        """Get entity by primary key, or None if not found."""
        return self._base_query().filter(self.model_class.id == entity_id).first()

    def add(self, entity: ModelT) -> ModelT:
        """Insert, commit, and reload server defaults."""
        self.db.add(entity)
        self.db.commit()
        self.db.refresh(entity)
        return entity
