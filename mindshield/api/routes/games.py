"""
Game session routes.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from mindshield.db.session import get_db
from mindshield.schemas.game import GameSessionCreate, GameSessionResult
from mindshield.services import game_service

router = APIRouter(prefix="/games", tags=["games"])


@router.post("/session", response_model=GameSessionResult)
async def save_game_session(session_data: GameSessionCreate, db: Session = Depends(get_db)):
    """Save a completed game session."""
    session = game_service.save_game_session(
        db,
        user_id=session_data.user_id,
        game_type=session_data.game_type,
        duration=session_data.duration,
        score=session_data.score,
        metrics=session_data.metrics.model_dump(exclude_none=True),
        completed=session_data.completed
    )
    return {
        "session": {
            "id": session.id,
            "game_type": session.game_type,
            "duration": session.duration,
            "score": session.score,
            "engagement_score": session.engagement_score,
            "difficulty_level": session.difficulty_level,
            "wellness_impact": session.wellness_impact,
            "achievements_unlocked": session.achievements_unlocked,
            "timestamp": session.created_at
        }
    }
