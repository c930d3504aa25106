import uuid
from typing import Generic, TypeVar

from sqlalchemy.orm import Session

from cms.database import Base

ModelT = TypeVar("ModelT", bound=Base)


class Repository(Generic[ModelT]):
    """Basic reads and inserts for one soft-deletable model."""

    def __init__(self, db: Session, model: type[ModelT]):
        self.db = db
        self.model = model

    def _base_query(self, include_deleted: bool):
        query = self.db.query(self.model)
        if not include_deleted:
            query = query.filter(self.model.is_deleted.is_(False))
        return query

    def get(self, entity_id: uuid.UUID, include_deleted: bool = False) -> ModelT | None:
        return (
            self._base_query(include_deleted)
            .filter(self.model.id == entity_id)
            .first()
        )

    def get_by_name(self, name: str, include_deleted: bool = False) -> ModelT | None:
        return (
            self._base_query(include_deleted).filter(self.model.name == name).first()
        )

    def list_all(
        self, include_deleted: bool = False, active_only: bool = False
    ) -> list[ModelT]:
        query = self._base_query(include_deleted)
        if active_only:
            query = query.filter(self.model.is_active.is_(True))
        return query.order_by(self.model.name).all()

    def add(self, entity: ModelT) -> ModelT:
        self.db.add(entity)
        return entity
