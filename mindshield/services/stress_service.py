"""
Stress trend prediction from a rolling window of recent mood logs.
"""
import logging
from datetime import datetime, timedelta
from typing import List, Optional, Sequence
import numpy as np
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from mindshield.core.config import settings
from mindshield.core.utils import utcnow, to_local
from mindshield.models.mood import MoodLog
from mindshield.models.pattern import RiskLevel
from mindshield.schemas.stress import StressPrediction

logger = logging.getLogger(__name__)

STRESS_SUGGESTIONS = {
    RiskLevel.LOW: [
        "Maintain your current routine",
        "Practice daily gratitude",
        "Stay hydrated and take breaks"
    ],
    RiskLevel.MEDIUM: [
        "Schedule a 10-minute mindfulness break",
        "Reach out to a friend or family member",
        "Engage in light physical activity",
        "Use the breathing exercise feature"
    ],
    RiskLevel.HIGH: [
        "Take immediate 15-minute break",
        "Use crisis resources if needed",
        "Practice deep breathing for 5 minutes",
        "Avoid stressful decisions today",
        "Consider professional support"
    ]
}

MAX_CONFIDENCE = 0.9


def calculate_volatility(moods: Sequence[float]) -> float:
    """Population standard deviation of a mood sequence."""
    return float(np.std(np.asarray(moods, dtype=float)))


def generate_stress_suggestions(risk_level: RiskLevel) -> List[str]:
    """Static suggestions for a risk tier."""
    return list(STRESS_SUGGESTIONS.get(risk_level, STRESS_SUGGESTIONS[RiskLevel.LOW]))


def prediction_window(hour: int) -> str:
    """When the predicted stress is expected, relative to the current hour."""
    if hour < 12:
        return "this afternoon"
    if hour < 18:
        return "this evening"
    return "tomorrow morning"


def assess_moods(moods: Sequence[int], now: datetime) -> Optional[StressPrediction]:
    """
    Score stress risk for moods ordered newest first.

    Rules are cumulative: each matching rule adds to the confidence and can
    only raise the risk level. Low risk yields no prediction.
    """
    if len(moods) < settings.PREDICTION_MIN_LOGS:
        return None

    avg_mood = float(np.mean(moods))
    recent_avg = float(np.mean(moods[:3]))
    trend = float(moods[0] - moods[-1])
    volatility = calculate_volatility(moods)

    risk_level = RiskLevel.LOW
    confidence = 0.0
    reasons = []

    if avg_mood < 4:
        risk_level = RiskLevel.MEDIUM
        confidence += 0.3
        reasons.append("Low average mood")

    if trend < -1.5:
        risk_level = RiskLevel.HIGH
        confidence += 0.4
        reasons.append("Downward trend detected")

    if volatility > 2.5:
        if risk_level == RiskLevel.LOW:
            risk_level = RiskLevel.MEDIUM
        confidence += 0.3
        reasons.append("High mood volatility")

    if risk_level == RiskLevel.LOW:
        return None

    hour = to_local(now).hour
    return StressPrediction(
        risk_level=risk_level,
        confidence=round(min(confidence, MAX_CONFIDENCE), 2),
        prediction=f"Potential stress {prediction_window(hour)}",
        reasons=reasons,
        suggestions=generate_stress_suggestions(risk_level),
        avg_mood=avg_mood,
        recent_avg=recent_avg,
        trend=trend,
        volatility=volatility
    )


def get_recent_moods(db: Session, user_id: int, now: datetime) -> List[int]:
    """Moods from the prediction window, newest first."""
    since = now - timedelta(days=settings.PREDICTION_WINDOW_DAYS)
    logs = db.query(MoodLog).filter(
        MoodLog.user_id == user_id,
        MoodLog.created_at >= since
    ).order_by(MoodLog.created_at.desc(), MoodLog.id.desc()).limit(settings.PREDICTION_MAX_LOGS).all()
    return [log.mood for log in logs]


def predict_stress(db: Session, user_id: int, now: Optional[datetime] = None) -> Optional[StressPrediction]:
    """
    Predict short-term stress risk for a user.

    Returns None with insufficient history, for low risk, or when the
    history cannot be read.
    """
    now = now or utcnow()
    try:
        moods = get_recent_moods(db, user_id, now)
    except SQLAlchemyError as e:
        logger.warning(f"Stress prediction unavailable for user {user_id}: {e}")
        return None

    prediction = assess_moods(moods, now)
    if prediction:
        logger.info(f"Stress risk {prediction.risk_level.value} predicted for user {user_id}")
    return prediction
