"""Service catalog repository backed by SQLAlchemy."""

from decimal import Decimal
from typing import List

from sqlalchemy import func, or_

from clinic.db.base import Service as DbService
from clinic.domain.entities import Service as DomainService
from clinic.domain.interfaces import IServiceRepository

from .sql_base import SqlRepository, translate_errors


class ServiceRepository(SqlRepository, IServiceRepository):
    """Repository for Service persistence operations."""

    model = DbService
    entity_name = "service"

    @translate_errors
    def get_by_category(self, category: str) -> List[DomainService]:
        rows = (
            self._active()
            .filter(func.lower(DbService.category) == category.lower())
            .order_by(DbService.name)
            .all()
        )
        return [self._to_domain(row) for row in rows]

    @translate_errors
    def search(self, query: str) -> List[DomainService]:
        pattern = f"%{query}%"
        rows = (
            self._active()
            .filter(
                or_(
                    DbService.name.ilike(pattern),
                    DbService.category.ilike(pattern),
                    DbService.description.ilike(pattern),
                )
            )
            .order_by(DbService.name)
            .all()
        )
        return [self._to_domain(row) for row in rows]

    def _apply(self, row: DbService, service: DomainService) -> None:
        row.name = service.name
        row.category = service.category
        row.description = service.description or None
        row.notes = service.notes or None
        row.price = Decimal(str(service.price))
        row.duration = service.duration
        if service.updated_at is not None:
            row.updated_at = service.updated_at

    def _to_domain(self, row: DbService) -> DomainService:
        return DomainService(
            id=row.id,
            name=row.name,
            category=row.category,
            description=row.description or "",
            notes=row.notes or "",
            price=float(row.price or 0),
            duration=row.duration or 0,
            created_at=row.created_at,
            updated_at=row.updated_at,
        )
