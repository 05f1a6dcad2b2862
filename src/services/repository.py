"""Repository - storage access for catalog entities.

A thin layer over a SQLAlchemy session that gives the services the storage
contract they consume:

- find_all()                     -> list of entities
- find_by_id(id)                 -> entity or None
- find_by_name_ignore_case(name) -> list of entities with exactly that name
- save(entity)                   -> entity (id assigned on first save)
- delete_by_id(id)               -> None

Services build one repository per call around the session they were given,
so atomicity follows the caller's session_scope().
"""

from typing import Generic, List, Optional, Type, TypeVar

from sqlalchemy import func
from sqlalchemy.orm import Session

from ..models.base import BaseModel

ModelT = TypeVar("ModelT", bound=BaseModel)


class Repository(Generic[ModelT]):
    """Storage operations for one model class within one session."""

    def __init__(self, session: Session, model: Type[ModelT]):
        self.session = session
        self.model = model

    def find_all(self) -> List[ModelT]:
        return self.session.query(self.model).order_by(self.model.id).all()

    def find_by_id(self, entity_id: int) -> Optional[ModelT]:
        return self.session.get(self.model, entity_id)

    def find_by_name_ignore_case(self, name: str) -> List[ModelT]:
        """Exact name match, ignoring letter case."""
        return (
            self.session.query(self.model)
            .filter(func.lower(self.model.name) == name.lower())
            .order_by(self.model.id)
            .all()
        )

    def save(self, entity: ModelT) -> ModelT:
        """Add or update an entity and flush so its id is populated."""
        self.session.add(entity)
        self.session.flush()
        self.session.refresh(entity)
        return entity

    def delete_by_id(self, entity_id: int) -> None:
        self.session.query(self.model).filter(self.model.id == entity_id).delete(
            synchronize_session="fetch"
        )
        self.session.flush()
