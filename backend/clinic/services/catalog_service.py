"""
Service catalog management: the treatments and procedures the clinic offers.
"""

import logging
from typing import List, Optional

from clinic.core.config import now
from clinic.core.exceptions import ValidationError
from clinic.domain.entities import Service
from clinic.domain.interfaces import IServiceRepository

logger = logging.getLogger(__name__)

MAX_DURATION_MINUTES = 480  # one working day


class CatalogService:
    """Application service for the service catalog."""

    def __init__(self, service_repo: IServiceRepository) -> None:
        self.service_repo = service_repo

    def get_service(self, service_id: int) -> Service:
        if service_id <= 0:
            raise ValidationError("invalid service ID")
        return self.service_repo.get_by_id(service_id)

    def get_all_services(self) -> List[Service]:
        return self.service_repo.get_all()

    def create_service(self, service: Service) -> Service:
        self.validate_service(service)

        timestamp = now()
        service.created_at = timestamp
        service.updated_at = timestamp

        created = self.service_repo.create(service)
        logger.info("Service created", extra={"context": {"service_id": created.id}})
        return created

    def update_service(self, service: Service) -> Service:
        self.validate_service(service)

        service.updated_at = now()

        updated = self.service_repo.update(service)
        logger.info("Service updated", extra={"context": {"service_id": updated.id}})
        return updated

    def delete_service(self, service_id: int) -> None:
        if service_id <= 0:
            raise ValidationError("invalid service ID")
        self.service_repo.delete(service_id)
        logger.info("Service deleted", extra={"context": {"service_id": service_id}})

    def get_services_by_category(self, category: Optional[str]) -> List[Service]:
        if not category or not category.strip():
            return self.service_repo.get_all()
        return self.service_repo.get_by_category(category.strip())

    def search_services(self, query: Optional[str]) -> List[Service]:
        if not query or not query.strip():
            return self.service_repo.get_all()
        return self.service_repo.search(query.strip())

    def validate_service(self, service: Optional[Service]) -> None:
        if service is None:
            raise ValidationError("service cannot be empty")

        name = service.name or ""
        if not name.strip():
            raise ValidationError("service name is required", "name")
        if len(name) > 100:
            raise ValidationError("service name is too long", "name")

        category = service.category or ""
        if not category.strip():
            raise ValidationError("service category is required", "category")
        if len(category) > 50:
            raise ValidationError("service category is too long", "category")

        if service.price < 0:
            raise ValidationError("service price cannot be negative", "price")

        if service.duration < 0:
            raise ValidationError("service duration cannot be negative", "duration")
        if service.duration > MAX_DURATION_MINUTES:
            raise ValidationError("service duration is too long", "duration")

        if service.description and len(service.description) > 500:
            raise ValidationError("service description is too long", "description")

        if service.notes and len(service.notes) > 500:
            raise ValidationError("service notes are too long", "notes")
