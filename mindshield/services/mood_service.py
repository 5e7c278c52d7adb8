"""
Mood service: labels, supportive responses and mood log ingestion.
"""
import logging
import random
from datetime import datetime
from typing import Any, Optional
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from mindshield.core.exceptions import DegradedServiceError, ValidationError
from mindshield.core.utils import utcnow
from mindshield.models.mood import MoodLog
from mindshield.services import pattern_service, stress_service, user_service

logger = logging.getLogger(__name__)

MOOD_LABELS = {
    9: "Excellent",
    8: "Very Good",
    7: "Good",
    6: "Fairly Good",
    5: "Neutral",
    4: "Fairly Low",
    3: "Low",
    2: "Very Low",
    1: "Critical"
}

AI_RESPONSES = {
    "high": [
        "Wonderful! This positive energy is great! How about journaling this moment to remember what worked?",
        "Excellent! Your mood is soaring! This is perfect for trying new activities or helping others."
    ],
    "medium": [
        "Thanks for checking in. I'm here with you. How about a quick mindfulness break to find more balance?",
        "I appreciate you sharing. This is a good moment for gentle reflection. Want to try a short gratitude exercise?"
    ],
    "low": [
        "I hear you, and I'm here with you. Would you like to try a calming activity or just have some quiet support?",
        "Thank you for sharing this with me. It's completely okay to feel this way. Let's try something gentle together."
    ]
}

MAX_NOTES_LENGTH = 1000
MAX_CONTEXT_LENGTH = 100


def mood_label(mood: Any) -> str:
    """Label for an integer mood; anything outside the table is 'Unknown'."""
    if isinstance(mood, bool) or not isinstance(mood, (int, float)):
        return "Unknown"
    if isinstance(mood, float):
        if not mood.is_integer():
            return "Unknown"
        mood = int(mood)
    return MOOD_LABELS.get(mood, "Unknown")


def mood_category(mood: int) -> str:
    if mood >= 7:
        return "high"
    if mood <= 3:
        return "low"
    return "medium"


def get_ai_response(mood: int, rng: Optional[random.Random] = None) -> str:
    """Pick a supportive response for the mood band."""
    rng = rng or random.Random()
    return rng.choice(AI_RESPONSES[mood_category(mood)])


def _clean_context(context: Optional[dict]) -> dict:
    context = context or {}
    location = (context.get("location") or "").strip() or None
    activity = (context.get("activity") or "").strip() or None
    # Both become pattern keys
    for name, value in (("location", location), ("activity", activity)):
        if value and len(value) > MAX_CONTEXT_LENGTH:
            raise ValidationError(f"Context {name} must be at most {MAX_CONTEXT_LENGTH} characters")
    return {
        "tags": list(context.get("tags") or []),
        "location": location,
        "activity": activity
    }


def log_mood(
    db: Session,
    user_id: int,
    mood: int,
    notes: Optional[str] = None,
    context: Optional[dict] = None,
    voice_analysis: Optional[dict] = None,
    rng: Optional[random.Random] = None,
    now: Optional[datetime] = None
) -> MoodLog:
    """
    Record a mood, predict stress from prior history and update patterns.

    The prediction is taken before the new log is stored. Pattern tracking
    runs synchronously after the log is committed; its failures are logged
    and do not fail the call.
    """
    now = now or utcnow()
    user = user_service.get_user_or_404(user_id, db)

    if isinstance(mood, bool) or not isinstance(mood, int) or not 1 <= mood <= 10:
        raise ValidationError("Mood must be an integer between 1 and 10")
    notes = (notes or "").strip()
    if len(notes) > MAX_NOTES_LENGTH:
        raise ValidationError(f"Notes must be at most {MAX_NOTES_LENGTH} characters")
    context = _clean_context(context)

    user_service.update_streak(user, now)

    prediction = stress_service.predict_stress(db, user_id, now)

    mood_log = MoodLog(
        user_id=user_id,
        mood=mood,
        mood_label=mood_label(mood),
        notes=notes,
        context=context,
        voice_analysis=voice_analysis or None,
        ai_response=get_ai_response(mood, rng),
        stress_prediction=prediction.model_dump(mode="json") if prediction else None,
        created_at=now,
        updated_at=now
    )
    db.add(mood_log)
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Could not store mood log for user {user_id}: {e}", exc_info=True)
        raise DegradedServiceError("Could not save mood log")
    db.refresh(mood_log)
    logger.info(f"Logged mood {mood} for user {user_id}")

    pattern_service.track_safely(db, mood_log, now)

    return mood_log


def get_mood_logs(
    db: Session,
    user_id: int,
    since: Optional[datetime] = None,
    newest_first: bool = False,
    limit: Optional[int] = None
):
    """Mood logs of a user, optionally from ``since`` on."""
    query = db.query(MoodLog).filter(MoodLog.user_id == user_id)
    if since is not None:
        query = query.filter(MoodLog.created_at >= since)
    if newest_first:
        query = query.order_by(MoodLog.created_at.desc(), MoodLog.id.desc())
    else:
        query = query.order_by(MoodLog.created_at, MoodLog.id)
    if limit:
        query = query.limit(limit)
    return query.all()
