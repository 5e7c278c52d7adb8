"""
Pattern query routes.
"""
from typing import List
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from mindshield.db.session import get_db
from mindshield.schemas.pattern import PatternResponse
from mindshield.services import pattern_service, user_service

router = APIRouter(prefix="/patterns", tags=["patterns"])


@router.get("/{user_id}", response_model=List[PatternResponse])
async def get_top_patterns(
    user_id: int,
    limit: int = Query(3, ge=1, le=50),
    db: Session = Depends(get_db)
):
    """Patterns with the highest confidence."""
    user_service.get_user_or_404(user_id, db)
    return pattern_service.get_top_patterns(db, user_id, limit)


@router.get("/{user_id}/high-risk", response_model=List[PatternResponse])
async def get_high_risk_patterns(user_id: int, db: Session = Depends(get_db)):
    """Early stress alerts: high-risk patterns with enough evidence."""
    user_service.get_user_or_404(user_id, db)
    return pattern_service.get_high_risk_patterns(db, user_id)
