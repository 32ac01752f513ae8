# Controllers package initialization
# Flask blueprints for the JSON API

from .appointment_controller import appointment_bp
from .auth_controller import auth_bp
from .dashboard_controller import dashboard_bp
from .doctor_controller import doctor_bp
from .patient_controller import patient_bp
from .service_controller import service_bp

ALL_BLUEPRINTS = (
    patient_bp,
    service_bp,
    appointment_bp,
    doctor_bp,
    dashboard_bp,
    auth_bp,
)

__all__ = [
    "ALL_BLUEPRINTS",
    "appointment_bp",
    "auth_bp",
    "dashboard_bp",
    "doctor_bp",
    "patient_bp",
    "service_bp",
]
