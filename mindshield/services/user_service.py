"""
User service: registration, login, streaks, badges and data reset.
"""
import logging
from datetime import datetime, timedelta
from typing import Dict, Optional
from sqlalchemy import or_
from sqlalchemy.orm import Session
from mindshield.core.exceptions import ConflictError, NotFoundError
from mindshield.core.security import get_password_hash, verify_password
from mindshield.core.utils import utcnow, to_local
from mindshield.models.user import User
from mindshield.models.mood import MoodLog
from mindshield.models.pattern import Pattern
from mindshield.models.voice import VoiceLog
from mindshield.models.game import GameSession

logger = logging.getLogger(__name__)


def get_user_or_404(user_id: int, db: Session) -> User:
    """Fetch a user or raise NotFoundError."""
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise NotFoundError("User not found")
    return user


def register_user(
    db: Session,
    name: str,
    age: int,
    password: str,
    email: Optional[str] = None,
    responses: Optional[Dict[str, str]] = None,
    now: Optional[datetime] = None
) -> User:
    """Create a user; the first registration counts as day one of the streak."""
    now = now or utcnow()
    name = name.strip()
    email = email.strip().lower() if email else None

    filters = [User.name == name]
    if email:
        filters.append(User.email == email)
    if db.query(User).filter(or_(*filters)).first():
        raise ConflictError("User already exists")

    user = User(
        name=name,
        age=age,
        email=email,
        hashed_password=get_password_hash(password),
        situational_responses=responses or {},
        streak_current=1,
        streak_longest=1,
        streak_last_login=now,
        badges=[]
    )
    db.add(user)
    db.commit()
    db.refresh(user)

    logger.info(f"Registered user {user.id}")
    return user


def authenticate_user(db: Session, username: str, password: str) -> Optional[User]:
    """Return the user matching name or email and password, else None."""
    user = db.query(User).filter(
        or_(User.name == username.strip(), User.email == username.strip().lower())
    ).first()
    if not user or not verify_password(password, user.hashed_password):
        return None
    return user


def update_streak(user: User, now: Optional[datetime] = None) -> int:
    """
    Advance the daily streak for activity at ``now``.

    Same local day: unchanged. Previous local day: +1. Otherwise restart at 1.
    """
    now = now or utcnow()
    today = to_local(now).date()
    last_day = to_local(user.streak_last_login).date() if user.streak_last_login else None

    if last_day != today:
        if last_day == today - timedelta(days=1):
            user.streak_current += 1
        else:
            user.streak_current = 1
        user.streak_longest = max(user.streak_longest, user.streak_current)
        user.streak_last_login = now

    return user.streak_current


def award_badge(user: User, name: str, icon: str, now: Optional[datetime] = None) -> bool:
    """Append a badge unless one with the same name exists. Returns True when added."""
    badges = list(user.badges or [])
    if any(b.get("name") == name for b in badges):
        return False

    now = now or utcnow()
    badges.append({"name": name, "icon": icon, "earned_at": now.isoformat()})
    user.badges = badges
    logger.info(f"Awarded badge '{name}' to user {user.id}")
    return True


def reset_user_data(db: Session, user_id: int) -> None:
    """Delete a user's logs, sessions and patterns and clear streak and badges."""
    user = get_user_or_404(user_id, db)

    for model in (MoodLog, VoiceLog, GameSession, Pattern):
        db.query(model).filter(model.user_id == user_id).delete(synchronize_session=False)

    user.streak_current = 0
    user.streak_longest = 0
    user.streak_last_login = None
    user.badges = []
    db.commit()

    logger.info(f"Reset data for user {user_id}")


def export_user_data(db: Session, user_id: int, now: Optional[datetime] = None) -> dict:
    """Everything stored for a user, for download."""
    user = get_user_or_404(user_id, db)
    mood_logs = db.query(MoodLog).filter(MoodLog.user_id == user_id).order_by(MoodLog.created_at).all()
    voice_logs = db.query(VoiceLog).filter(VoiceLog.user_id == user_id).order_by(VoiceLog.created_at).all()
    sessions = db.query(GameSession).filter(GameSession.user_id == user_id).order_by(GameSession.created_at).all()

    return {
        "user": {
            "name": user.name,
            "age": user.age,
            "created_at": user.created_at,
            "streak": {
                "current": user.streak_current,
                "longest": user.streak_longest,
                "last_login": user.streak_last_login
            },
            "badges": user.badges or []
        },
        "mood_logs": [
            {
                "mood": log.mood,
                "mood_label": log.mood_label,
                "notes": log.notes,
                "ai_response": log.ai_response,
                "timestamp": log.created_at
            }
            for log in mood_logs
        ],
        "voice_logs": [
            {
                "duration": log.duration,
                "analysis": {
                    "stress_score": log.stress_score,
                    "emotion": log.emotion,
                    "speech_rate": log.speech_rate,
                    "pitch_variation": log.pitch_variation,
                    "confidence": log.confidence
                },
                "timestamp": log.created_at
            }
            for log in voice_logs
        ],
        "game_sessions": [
            {
                "game_type": session.game_type.value,
                "duration": session.duration,
                "score": session.score,
                "timestamp": session.created_at
            }
            for session in sessions
        ],
        "exported_at": now or utcnow()
    }
