"""
User profile routes.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from mindshield.db.session import get_db
from mindshield.schemas.user import UserResponse
from mindshield.models.user import User
from mindshield.api.dependencies import get_current_user
from mindshield.services import user_service

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/me", response_model=UserResponse)
async def get_current_user_info(current_user: User = Depends(get_current_user)):
    """Get current user information."""
    return current_user


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(user_id: int, db: Session = Depends(get_db)):
    """Get user by ID."""
    return user_service.get_user_or_404(user_id, db)
