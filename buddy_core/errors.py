"""
Service error taxonomy.

Every failure an operation can report to a caller is a ``ServiceError`` with a
stable machine-readable ``code`` and the HTTP status the transport maps it to.
"""
from typing import Optional


class ServiceError(Exception):
    code = "INTERNAL_SERVER_ERROR"
    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {"code": self.code, "message": self.message}


class ValidationError(ServiceError):
    """Malformed or missing input; raised before any store access."""
    code = "BAD_REQUEST"
    status_code = 400
    default_message = "Invalid input"


class Unauthorized(ServiceError):
    code = "UNAUTHORIZED"
    status_code = 401
    default_message = "Authentication required"


class Forbidden(ServiceError):
    code = "FORBIDDEN"
    status_code = 403
    default_message = "You do not have access to this resource"


class NotFound(ServiceError):
    code = "NOT_FOUND"
    status_code = 404
    default_message = "Not found"


class StoreUnavailable(ServiceError):
    """The backing store is absent or unreachable."""
    code = "SERVICE_UNAVAILABLE"
    status_code = 503
    default_message = "Database not available"
