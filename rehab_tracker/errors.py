"""Service-level error taxonomy.

Services raise these instead of HTTP exceptions; ``main`` maps each one to
its status code and a ``{"detail", "code"}`` JSON body.
"""


class ServiceError(Exception):
    """Base class for errors returned to the caller."""

    code = "SERVICE_ERROR"
    status_code = 500
    default_message = "Service error"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {"detail": self.message, "code": self.code}


class ValidationFailed(ServiceError):
    """Malformed or out-of-range input."""

    code = "VALIDATION_ERROR"
    status_code = 400
    default_message = "Invalid input"


class Unauthenticated(ServiceError):
    """Missing or invalid credential."""

    code = "UNAUTHENTICATED"
    status_code = 401
    default_message = "Access denied. No valid token provided."


class Forbidden(ServiceError):
    """Authenticated but not permitted."""

    code = "FORBIDDEN"
    status_code = 403
    default_message = "Access denied."


class NotFound(ServiceError):
    """Resource absent, or not owned by the caller on mutate endpoints."""

    code = "NOT_FOUND"
    status_code = 404
    default_message = "Not found"


class Conflict(ServiceError):
    """Write collides with existing state."""

    code = "CONFLICT"
    status_code = 409
    default_message = "Conflict"


class StorageError(ServiceError):
    """Underlying database failure."""

    code = "STORAGE_ERROR"
    status_code = 500
    default_message = "Database error"
