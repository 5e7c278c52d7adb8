"""
User data export and reset routes.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from mindshield.db.session import get_db
from mindshield.schemas.insights import ExportResult
from mindshield.services import user_service

router = APIRouter(tags=["data"])


@router.get("/export/{user_id}", response_model=ExportResult)
async def export_user_data(user_id: int, db: Session = Depends(get_db)):
    """Export everything stored for a user."""
    return {"data": user_service.export_user_data(db, user_id)}


@router.post("/reset/{user_id}")
async def reset_user_data(user_id: int, db: Session = Depends(get_db)):
    """Delete a user's logs, sessions and patterns."""
    user_service.reset_user_data(db, user_id)
    return {"success": True, "message": "User data reset successfully"}
