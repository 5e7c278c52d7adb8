"""
Game session scoring: engagement, wellness impact, difficulty and achievements.
"""
import logging
from datetime import datetime
from typing import List, Optional
from sqlalchemy.orm import Session
from mindshield.core.exceptions import ValidationError
from mindshield.core.utils import utcnow
from mindshield.models.game import GameSession, GameType, DifficultyLevel
from mindshield.services import user_service

logger = logging.getLogger(__name__)

GAME_ICONS = {
    GameType.BREATHING: "🌀",
    GameType.GRATITUDE: "🌼",
    GameType.MINDFUL_MATCH: "🎯",
    GameType.THOUGHT_CATCHER: "🧠",
}
DEFAULT_GAME_ICON = "🎮"

MASTER_BADGE_SESSIONS = 5
MIN_DURATION = 5
MAX_DURATION = 3600


def _number(metrics: dict, name: str) -> Optional[float]:
    value = metrics.get(name)
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value
    return None


def calculate_stress_delta(metrics: dict) -> Optional[float]:
    """stress_after - stress_before; negative means the session helped."""
    before = _number(metrics, "stress_before")
    after = _number(metrics, "stress_after")
    if before is None or after is None:
        return None
    return after - before


def calculate_engagement(duration: int, metrics: dict, completed: bool) -> float:
    """Session quality in [0, 1]."""
    engagement = 0.0
    accuracy = _number(metrics, "accuracy")
    items_added = _number(metrics, "items_added")

    if duration >= 60:
        engagement += 0.3
    if accuracy is not None and accuracy >= 0.7:
        engagement += 0.3
    if items_added is not None and items_added >= 3:
        engagement += 0.2
    if completed:
        engagement += 0.2

    return round(min(1.0, engagement), 2)


def calculate_wellness_impact(engagement: float, stress_delta: Optional[float]) -> float:
    """Reward stress improvement (x2) plus engagement (x5)."""
    wellness = 0.0
    if stress_delta is not None and stress_delta < 0:
        wellness += abs(stress_delta) * 2
    wellness += engagement * 5
    return round(wellness, 2)


def calculate_difficulty(engagement: float) -> DifficultyLevel:
    if engagement > 0.75:
        return DifficultyLevel.HARD
    if engagement > 0.4:
        return DifficultyLevel.MEDIUM
    return DifficultyLevel.EASY


def calculate_achievements(
    game_type: GameType,
    metrics: dict,
    engagement: float,
    wellness_impact: float
) -> List[str]:
    """Achievements unlocked by this session alone."""
    achievements = []
    breaths = _number(metrics, "breaths_completed")
    items_added = _number(metrics, "items_added")

    if game_type == GameType.BREATHING and breaths is not None and breaths >= 10:
        achievements.append("Calm Breather")
    if game_type == GameType.GRATITUDE and items_added is not None and items_added >= 5:
        achievements.append("Gratitude Grower")
    if engagement >= 0.9:
        achievements.append("Mindful Master")
    if wellness_impact >= 8:
        achievements.append("Wellness Booster")

    return achievements


def score_session(game_type: GameType, duration: int, metrics: dict, completed: bool = True) -> dict:
    """
    Derive every computed field of a session.

    Returns the metrics (with ``stress_delta`` filled in when both stress
    readings are present) and the derived scores.
    """
    metrics = {k: v for k, v in (metrics or {}).items() if v is not None}
    stress_delta = calculate_stress_delta(metrics)
    if stress_delta is not None:
        metrics["stress_delta"] = stress_delta

    engagement = calculate_engagement(duration, metrics, completed)
    wellness_impact = calculate_wellness_impact(engagement, stress_delta)

    return {
        "metrics": metrics,
        "engagement_score": engagement,
        "wellness_impact": wellness_impact,
        "difficulty_level": calculate_difficulty(engagement),
        "achievements_unlocked": calculate_achievements(game_type, metrics, engagement, wellness_impact)
    }


def award_game_badges(db: Session, user, game_type: GameType, now: Optional[datetime] = None) -> bool:
    """Award '<game>_master' once a user has enough sessions of one game."""
    count = db.query(GameSession).filter(
        GameSession.user_id == user.id,
        GameSession.game_type == game_type
    ).count()
    if count < MASTER_BADGE_SESSIONS:
        return False
    return user_service.award_badge(
        user,
        f"{game_type.value}_master",
        GAME_ICONS.get(game_type, DEFAULT_GAME_ICON),
        now
    )


def save_game_session(
    db: Session,
    user_id: int,
    game_type: GameType,
    duration: int,
    score: float = 0,
    metrics: Optional[dict] = None,
    completed: bool = True,
    now: Optional[datetime] = None
) -> GameSession:
    """Validate, score and persist a completed session, then check badges."""
    now = now or utcnow()
    user = user_service.get_user_or_404(user_id, db)

    if not MIN_DURATION <= duration <= MAX_DURATION:
        raise ValidationError(f"Duration must be between {MIN_DURATION} and {MAX_DURATION} seconds")
    if score is None or score < 0:
        raise ValidationError("Score must be non-negative")

    derived = score_session(game_type, duration, metrics or {}, completed)
    session = GameSession(
        user_id=user_id,
        game_type=game_type,
        duration=duration,
        score=score,
        completed=completed,
        created_at=now,
        updated_at=now,
        **derived
    )
    db.add(session)
    db.flush()

    award_game_badges(db, user, game_type, now)
    db.commit()
    db.refresh(session)

    logger.info(f"Saved {game_type.value} session for user {user_id} (engagement {session.engagement_score})")
    return session


def get_recent_sessions(db: Session, user_id: int, limit: int = 2) -> List[GameSession]:
    return db.query(GameSession).filter(
        GameSession.user_id == user_id
    ).order_by(GameSession.created_at.desc(), GameSession.id.desc()).limit(limit).all()
