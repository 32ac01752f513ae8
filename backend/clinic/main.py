"""
Application factory for the clinic CRM API.

``create_app`` reads configuration from the environment, configures logging,
wires repositories into services and registers the JSON blueprints. The
service container lives in ``app.extensions["clinic"]``.

Run locally with ``flask --app clinic.main run`` from ``backend/``.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from clinic.core import config
from clinic.core.exceptions import ClinicError
from clinic.core.logging_config import get_logger, setup_logging
from clinic.core.security import PasswordHasher
from clinic.schemas.dtos import ErrorResponse
from clinic.services import (
    AppointmentService,
    CatalogService,
    DashboardService,
    DoctorService,
    PatientService,
)

logger = get_logger(__name__)


@dataclass
class ServiceContainer:
    """The use-case services shared by every request."""

    patients: PatientService
    catalog: CatalogService
    doctors: DoctorService
    appointments: AppointmentService
    dashboard: DashboardService


def build_services(
    patient_repo,
    service_repo,
    doctor_repo,
    appointment_repo,
    password_hasher: Optional[PasswordHasher] = None,
) -> ServiceContainer:
    return ServiceContainer(
        patients=PatientService(patient_repo),
        catalog=CatalogService(service_repo),
        doctors=DoctorService(doctor_repo, password_hasher),
        appointments=AppointmentService(appointment_repo, patient_repo),
        dashboard=DashboardService(patient_repo, appointment_repo),
    )


def build_memory_container() -> ServiceContainer:
    from clinic.repositories.memory import (
        InMemoryAppointmentRepository,
        InMemoryDoctorRepository,
        InMemoryPatientRepository,
        InMemoryServiceRepository,
    )

    return build_services(
        InMemoryPatientRepository(),
        InMemoryServiceRepository(),
        InMemoryDoctorRepository(),
        InMemoryAppointmentRepository(),
    )


def build_sql_container(database_url: str) -> ServiceContainer:
    from clinic.db.session import create_tables, db_session, get_engine
    from clinic.repositories import (
        AppointmentRepository,
        DoctorRepository,
        PatientRepository,
        ServiceRepository,
    )

    get_engine(database_url)
    create_tables()

    return build_services(
        PatientRepository(db_session),
        ServiceRepository(db_session),
        DoctorRepository(db_session),
        AppointmentRepository(db_session),
    )


def _register_error_handlers(app: Flask) -> None:
    @app.errorhandler(ClinicError)
    def handle_clinic_error(exc: ClinicError):
        level = logging.ERROR if exc.status_code >= 500 else logging.INFO
        logger.log(
            level,
            "Request rejected",
            extra={
                "context": {
                    "error": exc.error,
                    "message": exc.message,
                    "status_code": exc.status_code,
                }
            },
        )
        return jsonify(ErrorResponse.from_exception(exc).to_dict()), exc.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(exc: HTTPException):
        error = (exc.name or "error").lower().replace(" ", "_")
        payload = ErrorResponse(error=error, message=exc.description or exc.name)
        return jsonify(payload.to_dict()), exc.code

    @app.errorhandler(Exception)
    def handle_unexpected_error(exc: Exception):
        logger.error(
            "Unhandled exception",
            extra={"context": {"error": str(exc), "type": type(exc).__name__}},
            exc_info=True,
        )
        payload = ErrorResponse(error="server_error", message="internal server error")
        return jsonify(payload.to_dict()), 500


def _register_cli(app: Flask) -> None:
    @app.cli.command("init-db")
    def init_db_command():
        """Create database tables."""
        from clinic.db.session import create_tables, get_engine

        get_engine(app.config["DATABASE_URL"])
        create_tables()
        print("Database tables created")

    @app.cli.command("seed")
    def seed_command():
        """Load the demo admin doctor and service catalog."""
        from clinic.db.seed import seed_demo_data

        created = seed_demo_data(app.extensions["clinic"])
        print(f"Seeded {created['doctors']} doctor(s), {created['services']} service(s)")


def create_app(config_overrides: Optional[Dict[str, Any]] = None) -> Flask:
    config.load_environment()

    app = Flask(__name__)
    app.config.update(config.load_app_config())
    if config_overrides:
        app.config.update(config_overrides)

    setup_logging(
        app=app,
        log_level=app.config["LOG_LEVEL"],
        enable_sql_echo=app.config["SQL_ECHO"],
        log_to_file=app.config["LOG_TO_FILE"],
        use_json_format=app.config["LOG_JSON"],
    )
    config.log_timezone_config()

    # Flask >= 2.3 reads JSON_SORT_KEYS from the provider only
    app.json.sort_keys = app.config["JSON_SORT_KEYS"]

    from clinic.core.limiter_config import limiter

    limiter.init_app(app)
    limiter.enabled = app.config["RATELIMIT_ENABLED"]
    if not limiter.enabled:
        logger.info(
            "Rate limiting disabled",
            extra={"context": {"testing": app.config["TESTING"]}},
        )

    backend = app.config["STORAGE_BACKEND"]
    if backend == config.STORAGE_MEMORY:
        container = build_memory_container()
    else:
        container = build_sql_container(app.config["DATABASE_URL"])

        from clinic.db.session import db_session

        @app.teardown_appcontext
        def remove_session(exception=None):
            db_session.remove()

    app.extensions["clinic"] = container

    from clinic.controllers import ALL_BLUEPRINTS

    for blueprint in ALL_BLUEPRINTS:
        app.register_blueprint(blueprint)

    _register_error_handlers(app)
    _register_cli(app)

    if app.config["SEED_DEMO_DATA"]:
        from clinic.db.seed import seed_demo_data

        seed_demo_data(container)
        if backend == config.STORAGE_SQL:
            from clinic.db.session import db_session

            db_session.remove()

    logger.info(
        "Application created",
        extra={
            "context": {
                "storage_backend": backend,
                "env": app.config["ENV_NAME"],
                "login_disabled": app.config["LOGIN_DISABLED"],
            }
        },
    )
    return app


if __name__ == "__main__":
    create_app().run(host="0.0.0.0", port=5000)
