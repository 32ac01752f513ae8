"""
Demo data for local development.

Seeding goes through the services so passwords are hashed and the same
validation applies as for API input. Running it twice is harmless: the
admin account and catalog entries are only created when missing.
"""

import logging
import os

from clinic.core.exceptions import NotFoundError
from clinic.domain.entities import Doctor, Service

logger = logging.getLogger(__name__)

DEMO_SERVICES = (
    Service(name="Initial consultation", category="Consultation", price=8000, duration=30),
    Service(name="Follow-up consultation", category="Consultation", price=5000, duration=20),
    Service(name="Blood test", category="Laboratory", price=3500, duration=15),
    Service(name="Ultrasound", category="Diagnostics", price=12000, duration=40),
    Service(name="ECG", category="Diagnostics", price=4500, duration=20),
)


def seed_demo_data(container) -> dict:
    """Create the demo admin doctor and service catalog if they are absent."""
    created = {"doctors": 0, "services": 0}

    login = os.getenv("SEED_ADMIN_LOGIN", "admin")
    try:
        container.doctors.doctor_repo.get_by_login(login)
    except NotFoundError:
        container.doctors.create_doctor(
            Doctor(
                name="Clinic Administrator",
                login=login,
                password=os.getenv("SEED_ADMIN_PASSWORD", "admin123"),
                is_admin=True,
            )
        )
        created["doctors"] += 1

    existing = {s.name for s in container.catalog.get_all_services()}
    for service in DEMO_SERVICES:
        if service.name in existing:
            continue
        container.catalog.create_service(
            Service(
                name=service.name,
                category=service.category,
                price=service.price,
                duration=service.duration,
            )
        )
        created["services"] += 1

    logger.info("Demo data seeded", extra={"context": created})
    return created
