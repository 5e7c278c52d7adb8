"""
Domain exceptions raised by the service layer.

Each exception carries the HTTP status it maps to; ``main.py`` registers a
single handler that renders them as ``{"success": false, "error": detail}``.
"""


class MindShieldError(Exception):
    """Base class for service errors."""
    status_code = 500
    default_detail = "Internal server error"

    def __init__(self, detail: str = None):
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class ValidationError(MindShieldError):
    """Raised when input is out of range or a required field is missing."""
    status_code = 400
    default_detail = "Invalid request"


class NotFoundError(MindShieldError):
    """Raised when a referenced user (or record) does not exist."""
    status_code = 404
    default_detail = "Not found"


class ConflictError(MindShieldError):
    """Raised when a uniqueness constraint is violated."""
    status_code = 409
    default_detail = "Conflict"


class DegradedServiceError(MindShieldError):
    """Raised when persistence or a dependent service is unreachable."""
    status_code = 503
    default_detail = "Service temporarily unavailable"
