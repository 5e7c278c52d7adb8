"""
Voice stress check.

A deterministic heuristic over acoustic features the client computes
(RMS energy, zero-crossing rate, speech rate). Features the client did not
send are filled in from the injected random source.
"""
import logging
import random
from datetime import datetime
from typing import List, Optional
from sqlalchemy.orm import Session
from mindshield.core.utils import utcnow
from mindshield.models.voice import VoiceLog
from mindshield.services import user_service

logger = logging.getLogger(__name__)

BASE_STRESS = 4.5


def analyze_voice(features: Optional[dict], duration: float = 0, rng: Optional[random.Random] = None) -> dict:
    """Score stress (1-10) and an emotion label from voice features."""
    features = features or {}
    rng = rng or random.Random()

    speech_rate = features.get("speech_rate") or (140 + rng.random() * 40)
    pitch_variation = features.get("pitch_variation") or (0.5 + rng.random() * 0.4)
    confidence = features.get("confidence") or (0.7 + rng.random() * 0.2)

    stress_score = BASE_STRESS
    emotion = "Neutral"

    rms = features.get("rms")
    if rms is not None:
        # Louder speech roughly tracks tension
        if rms > 0.06:
            stress_score += 2.5
        if rms < 0.02:
            emotion = "Tired"

    zero_crossing_rate = features.get("zero_crossing_rate")
    if zero_crossing_rate is not None and zero_crossing_rate > 0.2:
        stress_score += 2
        emotion = "Anxious"

    if speech_rate > 180:
        stress_score += 1.5
        emotion = "Anxious"
    if 8 <= duration <= 12 and emotion == "Tired":
        stress_score += 0.8

    stress_score = max(1.0, min(10.0, round(stress_score, 1)))

    if stress_score > 7.5:
        emotion = "Anxious"
    elif stress_score >= 6:
        emotion = "Tired"
    elif stress_score < 3:
        emotion = "Calm"

    insights = []
    if stress_score > 7:
        insights.append("High stress detected in voice pattern")
    if emotion == "Tired":
        insights.append("Voice shows signs of fatigue")

    return {
        "stress_score": stress_score,
        "emotion": emotion,
        "speech_rate": int(round(speech_rate)),
        "pitch_variation": round(pitch_variation, 2),
        "confidence": round(confidence, 2),
        "insights": insights
    }


def get_voice_suggestions(analysis: dict) -> List[str]:
    suggestions = []
    if analysis["stress_score"] > 7:
        suggestions.append("Try the breathing exercise for 5 minutes")
        suggestions.append("Consider taking a short break")
        suggestions.append("Drink some water and relax your shoulders")
    if analysis["emotion"] == "Tired":
        suggestions.append("Get some rest if possible")
        suggestions.append("Try a quick energy-boosting activity")
    return suggestions or ["Your voice sounds balanced. Keep up the good work!"]


def record_voice_analysis(
    db: Session,
    user_id: int,
    duration: float,
    features: Optional[dict] = None,
    audio_data: Optional[str] = None,
    rng: Optional[random.Random] = None,
    now: Optional[datetime] = None
) -> dict:
    """Analyze a voice sample and store the result."""
    now = now or utcnow()
    user_service.get_user_or_404(user_id, db)

    analysis = analyze_voice(features, duration, rng)
    voice_log = VoiceLog(
        user_id=user_id,
        duration=duration,
        audio_url=f"data:audio/wav;base64,{audio_data}" if audio_data else None,
        method="heuristic",
        created_at=now,
        updated_at=now,
        **analysis
    )
    db.add(voice_log)
    db.commit()

    logger.info(f"Voice check for user {user_id}: stress {analysis['stress_score']} ({analysis['emotion']})")
    return analysis


def get_voice_logs(db: Session, user_id: int, since: Optional[datetime] = None) -> List[VoiceLog]:
    query = db.query(VoiceLog).filter(VoiceLog.user_id == user_id)
    if since is not None:
        query = query.filter(VoiceLog.created_at >= since)
    return query.order_by(VoiceLog.created_at).all()
