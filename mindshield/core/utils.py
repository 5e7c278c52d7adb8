"""
Utility functions for the application.
"""
from typing import Any, Dict, Optional
from datetime import date, datetime, timezone
from zoneinfo import ZoneInfo
from mindshield.core.config import settings


def utcnow() -> datetime:
    """Current time as a naive UTC datetime (the storage convention)."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_local(value: datetime) -> datetime:
    """Convert a stored naive UTC datetime to the configured local zone."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(ZoneInfo(settings.TIMEZONE))


def round2(value: Optional[float]) -> Optional[float]:
    """Round to two decimals, passing None through."""
    if value is None:
        return None
    return round(value, 2)


def serialize_date(obj: Any) -> str:
    """Serialize date objects to ISO format strings."""
    if isinstance(obj, (date, datetime)):
        return obj.isoformat()
    raise TypeError(f"Type {type(obj)} not serializable")


def format_error(message: str, details: Any = None) -> Dict[str, Any]:
    """Format error response."""
    response = {"success": False, "error": message}
    if details:
        response["details"] = details
    return response
