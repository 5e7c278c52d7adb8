"""
Health check route.
"""
from fastapi import APIRouter, Depends
from mindshield.db.session import DatabaseStatus, get_db_status
from mindshield.core.utils import utcnow

router = APIRouter(tags=["health"])


@router.get("/health")
async def health(db_status: DatabaseStatus = Depends(get_db_status)):
    """Service status with database connectivity."""
    return {
        "status": "healthy",
        "timestamp": utcnow(),
        "database": "connected" if db_status.is_connected() else "disconnected"
    }
