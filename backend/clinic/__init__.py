"""Clinic CRM backend: patients, services, doctors, appointments and reports."""

__version__ = "1.0.0"
