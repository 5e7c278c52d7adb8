"""
Mood logging and stress prediction routes.
"""
import random
from typing import Optional
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from mindshield.db.session import get_db
from mindshield.schemas.mood import MoodCreate, MoodLogResult
from mindshield.schemas.stress import StressPrediction
from mindshield.api.dependencies import get_rng
from mindshield.services import mood_service, pattern_service, stress_service, user_service

router = APIRouter(tags=["mood"])


@router.post("/mood", response_model=MoodLogResult)
async def log_mood(
    mood_data: MoodCreate,
    db: Session = Depends(get_db),
    rng: random.Random = Depends(get_rng)
):
    """Log a mood and return the updated streak and top patterns."""
    mood_log = mood_service.log_mood(
        db,
        user_id=mood_data.user_id,
        mood=mood_data.mood,
        notes=mood_data.notes,
        context=mood_data.context.model_dump() if mood_data.context else None,
        voice_analysis=mood_data.voice_analysis.model_dump(exclude_none=True) if mood_data.voice_analysis else None,
        rng=rng
    )
    user = user_service.get_user_or_404(mood_data.user_id, db)
    patterns = pattern_service.get_top_patterns(db, mood_data.user_id, 3)
    
    return {
        "log": {
            "id": mood_log.id,
            "mood": mood_log.mood,
            "mood_label": mood_log.mood_label,
            "notes": mood_log.notes,
            "ai_response": mood_log.ai_response,
            "stress_prediction": mood_log.stress_prediction,
            "timestamp": mood_log.created_at
        },
        "user": {
            "streak": user.streak_current,
            "longest_streak": user.streak_longest
        },
        "patterns": [pattern_service.summarize_pattern(p) for p in patterns]
    }


@router.get("/stress/{user_id}", response_model=Optional[StressPrediction])
async def get_stress_prediction(user_id: int, db: Session = Depends(get_db)):
    """Current stress prediction, or null when there is none."""
    user_service.get_user_or_404(user_id, db)
    return stress_service.predict_stress(db, user_id)
