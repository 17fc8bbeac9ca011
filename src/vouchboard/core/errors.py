"""Domain exceptions raised by the service layer.

Services never raise ``HTTPException`` directly; the application registers
handlers in ``vouchboard.main`` that translate these into JSON responses.
"""

from __future__ import annotations


class ServiceError(RuntimeError):
    """Base exception for expected, user-facing failures.

    Each subclass carries the HTTP status code the API layer should answer with.
    """

    status_code: int = 400

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail


class NotFoundError(ServiceError):
    """Raised when a user, post, reply or category does not exist."""

    status_code = 404


class PermissionDeniedError(ServiceError):
    """Raised when a role or ownership check fails."""

    status_code = 403


class BadRequestError(ServiceError):
    """Raised for invalid requests the request schema cannot express."""

    status_code = 400


class ConflictError(BadRequestError):
    """Raised when a write would violate a unique key."""

    status_code = 409


class AuthenticationError(ServiceError):
    """Raised when credentials are missing or wrong."""

    status_code = 401
