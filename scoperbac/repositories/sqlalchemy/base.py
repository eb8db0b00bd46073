import logging
from typing import Any, Dict, List, Optional, Tuple, Union

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from scoperbac.services.exceptions import ValidationError
from .filters import apply_filter, build_where

logger = logging.getLogger(__name__)


class SqlalchemyCrudRepository:
    """
    모델 하나에 대한 공통 CRUD 구현입니다.
    쓰기 작업마다 commit 하며, 실패하면 rollback 후 예외를 그대로 전파합니다.
    """
    model = None

    def __init__(self, db_session: Session):
        self.db = db_session

    def _commit(self):
        try:
            self.db.commit()
        except SQLAlchemyError:
            logger.warning("Commit failed on %s, rolling back.", self.model.__tablename__)
            self.db.rollback()
            raise

    def _build(self, data: Dict[str, Any]):
        if not isinstance(data, dict):
            raise ValidationError(f"{self.model.__name__} data must be a dict.")
        unknown = set(data) - set(self.model.__table__.columns.keys())
        if unknown:
            raise ValidationError(f"Unknown fields for {self.model.__name__}: {sorted(unknown)}")
        return self.model(**data)

    def find(self, filter: Optional[Dict[str, Any]] = None) -> List[Any]:
        return apply_filter(self.db.query(self.model), self.model, filter).all()

    def find_by_id(self, entity_id: str) -> Optional[Any]:
        return self.db.query(self.model).filter(self.model.id == entity_id).first()

    def count(self, where: Optional[Dict[str, Any]] = None) -> int:
        return self.db.query(self.model).filter(build_where(self.model, where)).count()

    def create(self, data: Union[Dict[str, Any], List[Dict[str, Any]]]):
        many = isinstance(data, (list, tuple))
        entities = [self._build(item) for item in (data if many else [data])]
        self.db.add_all(entities)
        self._commit()
        for entity in entities:
            self.db.refresh(entity)
        return entities if many else entities[0]

    def find_or_create(self, where: Dict[str, Any], data: Dict[str, Any]) -> Tuple[Any, bool]:
        existing = self.db.query(self.model).filter(build_where(self.model, where)).first()
        if existing is not None:
            return existing, False
        return self.create(data), True

    def destroy_all(self, where: Optional[Dict[str, Any]] = None) -> int:
        clause = build_where(self.model, where)
        try:
            count = self.db.query(self.model).filter(clause).delete(synchronize_session="fetch")
        except SQLAlchemyError:
            logger.warning("Delete failed on %s, rolling back.", self.model.__tablename__)
            self.db.rollback()
            raise
        self._commit()
        return count

    def save(self, entity):
        self.db.add(entity)
        self._commit()
        self.db.refresh(entity)
        return entity

    def close(self):
        self.db.close()
