"""
Voice analysis routes.
"""
import random
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from mindshield.db.session import get_db
from mindshield.schemas.voice import VoiceAnalyzeRequest, VoiceAnalyzeResult
from mindshield.api.dependencies import get_rng
from mindshield.services import voice_service

router = APIRouter(prefix="/voice", tags=["voice"])


@router.post("/analyze", response_model=VoiceAnalyzeResult)
async def analyze_voice(
    request: VoiceAnalyzeRequest,
    db: Session = Depends(get_db),
    rng: random.Random = Depends(get_rng)
):
    """Score stress from voice features and store the check."""
    analysis = voice_service.record_voice_analysis(
        db,
        user_id=request.user_id,
        duration=request.duration,
        features=request.features.model_dump(exclude_none=True),
        audio_data=request.audio_data,
        rng=rng
    )
    return {"analysis": analysis, "suggestions": voice_service.get_voice_suggestions(analysis)}
