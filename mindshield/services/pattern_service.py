"""
Pattern detection service.

Folds mood logs into per-user behavioral patterns keyed by
(pattern type, key): time of day, day of week, activity, location and
stress trigger. Each pattern keeps a recency-weighted mood average, an
optional stress average, an evidence-based confidence and a risk level.
"""
import logging
import threading
from datetime import datetime, timedelta
from typing import List, Optional, Tuple
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from mindshield.core.config import settings
from mindshield.core.exceptions import ConflictError
from mindshield.core.utils import utcnow, to_local
from mindshield.models.mood import MoodLog
from mindshield.models.pattern import Pattern, PatternType, RiskLevel

logger = logging.getLogger(__name__)

# Incremented whenever tracking fails for a mood log; the log itself is kept
TRACKING_FAILURES = 0

# Fixed pool of locks; a (user, type, key) always maps to the same stripe
LOCK_STRIPES = 64
_key_locks = tuple(threading.Lock() for _ in range(LOCK_STRIPES))

WEEKDAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")


def _lock_for(user_id: int, pattern_type: PatternType, key: str) -> threading.Lock:
    return _key_locks[hash((user_id, pattern_type.value, key)) % LOCK_STRIPES]


def get_time_of_day(hour: int) -> str:
    """Bucket an hour of the day (0-23)."""
    if hour < 6:
        return "Late Night"
    if hour < 12:
        return "Morning"
    if hour < 18:
        return "Afternoon"
    return "Evening"


def derive_candidates(mood_log: MoodLog) -> List[Tuple[PatternType, str]]:
    """
    Derive the (pattern type, key) pairs a mood log contributes to.

    Time of day and weekday are always present; activity and location only
    when given in the context; a stress trigger only for moods of 3 or less.
    """
    local = to_local(mood_log.created_at)
    context = mood_log.context or {}
    activity = context.get("activity")
    location = context.get("location")

    candidates = [
        (PatternType.TIME_OF_DAY, get_time_of_day(local.hour)),
        (PatternType.DAY_OF_WEEK, WEEKDAYS[local.weekday()]),
    ]
    if activity:
        candidates.append((PatternType.ACTIVITY, activity))
    if location:
        candidates.append((PatternType.LOCATION, location))
    if mood_log.mood <= 3:
        candidates.append((PatternType.STRESS_TRIGGER, activity or "Unknown"))

    return candidates


def stress_from_prediction(stress_prediction: Optional[dict]) -> Optional[float]:
    """Stress-equivalent value (0-10) of a prediction snapshot, if it has a confidence."""
    if not stress_prediction:
        return None
    confidence = stress_prediction.get("confidence")
    if isinstance(confidence, (int, float)) and not isinstance(confidence, bool):
        return confidence * 10
    return None


def recalculate_confidence(occurrences: int) -> float:
    """Confidence grows from 0.25 toward 1.0 over the first 10 occurrences."""
    factor = min(occurrences / 10, 1)
    return round(0.25 + factor * 0.75, 2)


def apply_decay(pattern: Pattern, now: datetime) -> None:
    """Fade confidence of a pattern not updated for longer than the decay window."""
    age = now - pattern.last_updated
    if age > timedelta(days=settings.PATTERN_DECAY_DAYS):
        pattern.confidence = round(pattern.confidence * 0.9, 2)


def calculate_risk(avg_stress: Optional[float], confidence: float) -> RiskLevel:
    """Classify a pattern by its average stress and confidence."""
    if avg_stress is None:
        return RiskLevel.LOW
    if avg_stress >= 7 and confidence >= 0.6:
        return RiskLevel.HIGH
    if avg_stress >= 5:
        return RiskLevel.MEDIUM
    return RiskLevel.LOW


def generate_insight(key: str, avg_mood: float, avg_stress: Optional[float]) -> str:
    """Natural-language insight for a pattern; first matching rule wins."""
    if avg_mood <= 3:
        return f"Your mood tends to be lower during {key}. Consider a calming activity then."
    if avg_stress is not None and avg_stress >= 7:
        return f"Higher stress is often detected around {key}. Try breathing or a short break."
    return f"You seem emotionally balanced during {key}. Keep it up!"


def _refresh_derived(pattern: Pattern) -> None:
    pattern.confidence = recalculate_confidence(pattern.occurrences)
    pattern.risk_level = calculate_risk(pattern.avg_stress, pattern.confidence)
    pattern.insight_message = generate_insight(pattern.key, pattern.avg_mood, pattern.avg_stress)


def _update_pattern(pattern: Pattern, mood: int, stress: Optional[float], now: datetime) -> Pattern:
    pattern.occurrences += 1
    # Each observation pulls the average halfway toward itself
    pattern.avg_mood = (pattern.avg_mood + mood) / 2
    if stress is not None:
        pattern.avg_stress = stress if pattern.avg_stress is None else (pattern.avg_stress + stress) / 2

    # Decay is measured against the previous update and is then overwritten by
    # the occurrence-based recalculation below
    apply_decay(pattern, now)
    pattern.last_updated = now
    _refresh_derived(pattern)
    return pattern


def _create_pattern(
    user_id: int,
    pattern_type: PatternType,
    key: str,
    mood: int,
    stress: Optional[float],
    now: datetime
) -> Pattern:
    pattern = Pattern(
        user_id=user_id,
        pattern_type=pattern_type,
        key=key,
        occurrences=1,
        avg_mood=mood,
        avg_stress=stress,
        first_detected_at=now,
        last_updated=now
    )
    _refresh_derived(pattern)
    return pattern


def get_pattern(db: Session, user_id: int, pattern_type: PatternType, key: str) -> Optional[Pattern]:
    """Look up the pattern for a (user, type, key) triple."""
    return db.query(Pattern).filter(
        Pattern.user_id == user_id,
        Pattern.pattern_type == pattern_type,
        Pattern.key == key
    ).first()


def upsert_pattern(
    db: Session,
    user_id: int,
    pattern_type: PatternType,
    key: str,
    mood: int,
    stress: Optional[float] = None,
    now: Optional[datetime] = None
) -> Pattern:
    """
    Create or update one pattern and commit it.

    Upserts on the same key are serialized in-process. A concurrent insert
    from another process surfaces as a unique-constraint violation and is
    retried once as an update.
    """
    now = now or utcnow()
    with _lock_for(user_id, pattern_type, key):
        existing = get_pattern(db, user_id, pattern_type, key)
        if existing:
            _update_pattern(existing, mood, stress, now)
            db.commit()
            return existing

        pattern = _create_pattern(user_id, pattern_type, key, mood, stress, now)
        db.add(pattern)
        try:
            db.commit()
            return pattern
        except IntegrityError:
            db.rollback()
            logger.warning(f"Pattern {pattern_type.value}/{key} for user {user_id} created concurrently; retrying as update")

        existing = get_pattern(db, user_id, pattern_type, key)
        if not existing:
            raise ConflictError(f"Could not upsert pattern {pattern_type.value}/{key}")
        _update_pattern(existing, mood, stress, now)
        db.commit()
        return existing


def track_from_mood_log(db: Session, mood_log: MoodLog, now: Optional[datetime] = None) -> List[Pattern]:
    """
    Update every pattern a mood log contributes to.

    Upserts run sequentially; the first failure propagates to the caller.
    Not idempotent: tracking the same log twice counts it twice.
    """
    now = now or utcnow()
    stress = stress_from_prediction(mood_log.stress_prediction)

    patterns = []
    for pattern_type, key in derive_candidates(mood_log):
        patterns.append(upsert_pattern(db, mood_log.user_id, pattern_type, key, mood_log.mood, stress, now))

    logger.debug(f"Tracked {len(patterns)} patterns for mood log {mood_log.id}")
    return patterns


def track_safely(db: Session, mood_log: MoodLog, now: Optional[datetime] = None) -> List[Pattern]:
    """Track patterns for a mood log without letting failures escape."""
    global TRACKING_FAILURES
    try:
        return track_from_mood_log(db, mood_log, now)
    except Exception as e:
        db.rollback()
        TRACKING_FAILURES += 1
        logger.warning(f"Pattern tracking failed for mood log {mood_log.id}: {e}", exc_info=True)
        return []


def get_top_patterns(db: Session, user_id: int, limit: int = 3) -> List[Pattern]:
    """Patterns with the most evidence first."""
    return db.query(Pattern).filter(
        Pattern.user_id == user_id
    ).order_by(Pattern.confidence.desc(), Pattern.id).limit(limit).all()


def get_high_risk_patterns(db: Session, user_id: int) -> List[Pattern]:
    """Patterns flagged HIGH risk with confidence of at least 0.6."""
    return db.query(Pattern).filter(
        Pattern.user_id == user_id,
        Pattern.risk_level == RiskLevel.HIGH,
        Pattern.confidence >= 0.6
    ).all()


def get_recent_patterns(db: Session, user_id: int, limit: int = 3) -> List[Pattern]:
    """Most recently updated patterns."""
    return db.query(Pattern).filter(
        Pattern.user_id == user_id
    ).order_by(Pattern.last_updated.desc(), Pattern.id.desc()).limit(limit).all()


def get_all_patterns(db: Session, user_id: int) -> List[Pattern]:
    """All patterns of a user."""
    return db.query(Pattern).filter(Pattern.user_id == user_id).all()


def summarize_pattern(
    pattern: Pattern,
    high_risk_suggestion: str = "Consider proactive stress management",
    default_suggestion: str = "Maintain current healthy habits"
) -> dict:
    """Shape a pattern for client display."""
    return {
        "type": pattern.pattern_type,
        "key": pattern.key,
        "message": pattern.insight_message,
        "suggestion": high_risk_suggestion if pattern.risk_level == RiskLevel.HIGH else default_suggestion,
        "confidence": pattern.confidence or 0,
        "risk_level": pattern.risk_level,
        "last_updated": pattern.last_updated
    }
