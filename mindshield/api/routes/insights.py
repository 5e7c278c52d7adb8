"""
Insights and dashboard routes.
"""
import random
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from mindshield.db.session import get_db
from mindshield.schemas.insights import InsightsResult, DashboardResult
from mindshield.api.dependencies import get_rng
from mindshield.services import insights_service

router = APIRouter(tags=["insights"])


@router.get("/insights/{user_id}", response_model=InsightsResult)
async def get_insights(
    user_id: int,
    days: int = Query(30, ge=1, le=365),
    db: Session = Depends(get_db)
):
    """Statistics, patterns and stress prediction for the last ``days`` days."""
    return {"insights": insights_service.get_insights(db, user_id, days)}


@router.get("/dashboard/{user_id}", response_model=DashboardResult)
async def get_dashboard(
    user_id: int,
    db: Session = Depends(get_db),
    rng: random.Random = Depends(get_rng)
):
    """Daily dashboard."""
    return {"dashboard": insights_service.get_dashboard(db, user_id, rng)}
