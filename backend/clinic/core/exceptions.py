"""
Custom exceptions for the application.
Following SOLID principles - centralized error handling.

Every use-case failure is raised as a ``ClinicError`` subclass. The kind and
HTTP status travel with the exception so controllers can render it without
inspecting the message text.
"""

from typing import Optional


class ClinicError(Exception):
    """Base class for all domain errors raised by services and repositories."""

    error = "server_error"
    status_code = 500

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.field = field

    def __str__(self) -> str:
        return self.message


class ValidationError(ClinicError, ValueError):
    """Malformed or missing input. Safe to retry after correction."""

    error = "validation_error"
    status_code = 400


class NotFoundError(ClinicError):
    """Referenced entity does not exist (or was soft-deleted)."""

    error = "not_found"
    status_code = 404


class ConflictError(ClinicError):
    """Uniqueness violation or scheduling collision."""

    error = "conflict"
    status_code = 409


class UnauthorizedError(ClinicError):
    """Authentication failure."""

    error = "unauthorized"
    status_code = 401


class StorageError(ClinicError):
    """Opaque failure from the storage backend, passed through untouched."""

    error = "storage_error"
    status_code = 500
