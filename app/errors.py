# app/errors.py
"""
Application error hierarchy.
Services raise these; app.main maps each one to an HTTP status code.
"""

from typing import Optional


class FleetError(Exception):
    """Base class for every error raised by the fleet admin services."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(FleetError):
    """Form input rejected locally, before any backend call."""

    status_code = 422

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class DuplicateError(ValidationError):
    status_code = 409


class NotFoundError(FleetError):
    status_code = 404


class BackendError(FleetError):
    """Network failure or an error reported by the hosted data API."""

    status_code = 502

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.backend_status = status_code


class BackendNotInitializedError(BackendError):
    status_code = 503

    def __init__(self, message: str = "Backend not initialized: missing BACKEND_URL / BACKEND_KEY"):
        super().__init__(message)


class AuthenticationError(BackendError):
    status_code = 401
