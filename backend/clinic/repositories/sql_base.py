"""
Shared plumbing for the SQLAlchemy repositories.

Rows are never physically removed: ``delete`` stamps ``deleted_at`` and every
query goes through ``_active()``, which hides stamped rows. Driver errors are
rolled back and re-raised as ``StorageError``.
"""

import logging
from functools import wraps
from typing import Any, List

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from clinic.core.config import now
from clinic.core.exceptions import NotFoundError, StorageError

logger = logging.getLogger(__name__)


def translate_errors(method):
    """Roll back and convert SQLAlchemy failures into StorageError."""

    @wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            return method(self, *args, **kwargs)
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.error(
                "Database operation failed",
                extra={
                    "context": {
                        "repository": type(self).__name__,
                        "operation": method.__name__,
                        "error": str(exc),
                    }
                },
                exc_info=True,
            )
            raise StorageError(f"failed to {method.__name__} {self.entity_name}") from exc

    return wrapper


class SqlRepository:
    """Base class: subclasses set ``model`` and implement the row mapping."""

    model: Any = None
    entity_name = "entity"

    def __init__(self, db_session) -> None:
        self.db = db_session

    def _active(self):
        return self.db.query(self.model).filter(self.model.deleted_at.is_(None))

    def _get_row(self, item_id: int):
        row = self._active().filter(self.model.id == item_id).first()
        if row is None:
            raise NotFoundError(f"{self.entity_name} with ID {item_id} not found")
        return row

    def _save(self, row):
        self.db.add(row)
        try:
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            raise self._integrity_error(exc) from exc
        self.db.refresh(row)
        return row

    def _integrity_error(self, exc: IntegrityError) -> Exception:
        return StorageError(f"{self.entity_name} violates a storage constraint")

    def _apply(self, row, entity) -> None:
        raise NotImplementedError

    def _to_domain(self, row):
        raise NotImplementedError

    @translate_errors
    def get_by_id(self, item_id: int):
        return self._to_domain(self._get_row(item_id))

    @translate_errors
    def get_all(self) -> List:
        return [self._to_domain(row) for row in self._active().order_by(self.model.id)]

    @translate_errors
    def create(self, entity):
        row = self.model()
        self._apply(row, entity)
        if entity.created_at is not None:
            row.created_at = entity.created_at
        return self._to_domain(self._save(row))

    @translate_errors
    def update(self, entity):
        row = self._get_row(entity.id)
        self._apply(row, entity)
        return self._to_domain(self._save(row))

    @translate_errors
    def delete(self, item_id: int) -> None:
        row = self._get_row(item_id)
        row.deleted_at = now()
        self._save(row)
