"""
Insights and dashboard aggregation.

Read-only composition of mood logs, patterns, voice logs, game sessions and
the current stress prediction. Nothing here writes to the database.
"""
import logging
import math
import random
from datetime import datetime, time, timedelta, timezone
from typing import List, Optional, Sequence
import numpy as np
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from mindshield.core.utils import utcnow, to_local
from mindshield.models.mood import MoodLog
from mindshield.models.user import User
from mindshield.services import game_service, mood_service, pattern_service, stress_service, user_service, voice_service

logger = logging.getLogger(__name__)

RECOMMENDED_GAMES = ["breathing", "gratitude", "guided_meditation", "thought_catcher"]


def _mean(values: Sequence[float]) -> Optional[float]:
    if not values:
        return None
    return float(np.mean(values))


def calculate_consistency(logs: Sequence[MoodLog], now: datetime) -> float:
    """
    Percentage of calendar days since the first log on which the user logged.

    ``logs`` must be ordered oldest first. Fewer than two logs give 0.
    """
    if len(logs) < 2:
        return 0
    unique_days = {to_local(log.created_at).date() for log in logs}
    total_days = math.ceil((now - logs[0].created_at).total_seconds() / 86400)
    if total_days <= 0:
        return 0
    return round(len(unique_days) / total_days * 100, 1)


def calculate_statistics(logs: Sequence[MoodLog], voice_log_count: int, now: datetime) -> dict:
    """Aggregate mood statistics for logs ordered oldest first."""
    moods = [log.mood for log in logs]
    week_ago = now - timedelta(days=7)
    weekly = [log.mood for log in logs if log.created_at >= week_ago]

    avg_mood = _mean(moods)
    weekly_avg = _mean(weekly)

    return {
        "total_logs": len(logs),
        "avg_mood": round(avg_mood, 1) if avg_mood is not None else None,
        "weekly_avg": round(weekly_avg, 1) if weekly_avg is not None else 0,
        "mood_distribution": {
            "high": sum(1 for m in moods if m >= 7),
            "medium": sum(1 for m in moods if 4 <= m < 7),
            "low": sum(1 for m in moods if m < 4)
        },
        "voice_checks": voice_log_count,
        "consistency": calculate_consistency(logs, now)
    }


def get_insights(db: Session, user_id: int, days: int = 30, now: Optional[datetime] = None) -> dict:
    """Statistics, patterns, stress prediction and recent logs for a period."""
    now = now or utcnow()
    user_service.get_user_or_404(user_id, db)
    since = now - timedelta(days=days)

    logs = mood_service.get_mood_logs(db, user_id, since=since)
    try:
        patterns = pattern_service.get_all_patterns(db, user_id)
    except SQLAlchemyError as e:
        logger.warning(f"Patterns unavailable for user {user_id}: {e}")
        patterns = []
    voice_logs = voice_service.get_voice_logs(db, user_id, since=since)

    return {
        "stats": calculate_statistics(logs, len(voice_logs), now),
        "patterns": [pattern_service.summarize_pattern(p) for p in patterns],
        "stress_prediction": stress_service.predict_stress(db, user_id, now),
        "recent_logs": [
            {
                "mood": log.mood,
                "mood_label": log.mood_label,
                "timestamp": log.created_at,
                "ai_response": log.ai_response
            }
            for log in reversed(logs[-5:])
        ]
    }


def _start_of_local_day(now: datetime) -> datetime:
    """Local midnight of ``now``, as naive UTC."""
    local_now = to_local(now)
    midnight = datetime.combine(local_now.date(), time.min, tzinfo=local_now.tzinfo)
    return midnight.astimezone(timezone.utc).replace(tzinfo=None)


def calculate_wellness_score(user: User, today_logs: Sequence[MoodLog]) -> int:
    """0-100 score from streak, today's mood, badges and check-in frequency."""
    score = 50
    score += min(user.streak_current * 2, 20)

    if today_logs:
        today_mood = today_logs[0].mood
        if today_mood >= 7:
            score += 15
        elif today_mood >= 4:
            score += 5

    score += min(len(user.badges or []) * 3, 15)

    if len(today_logs) >= 5:
        score += 10

    return min(score, 100)


def generate_daily_recommendations(
    user: User,
    today_logs: Sequence[MoodLog],
    rng: Optional[random.Random] = None,
    now: Optional[datetime] = None
) -> List[str]:
    rng = rng or random.Random()
    hour = to_local(now or utcnow()).hour
    recommendations = []

    if hour < 12 and not today_logs:
        recommendations.append("Start your day with a mood check-in")
        recommendations.append("Set a positive intention for the day")

    if hour >= 18 and not today_logs:
        recommendations.append("Log your evening mood")
        recommendations.append("Practice gratitude before bed")

    if user.streak_current >= 3:
        recommendations.append(f"Maintain your {user.streak_current}-day streak!")

    if len(user.badges or []) < 3:
        recommendations.append("Complete more activities to earn badges")

    game = rng.choice(RECOMMENDED_GAMES)
    recommendations.append(f"Try the {game.replace('_', ' ')} game today")

    return recommendations


def get_dashboard(
    db: Session,
    user_id: int,
    rng: Optional[random.Random] = None,
    now: Optional[datetime] = None
) -> dict:
    """Today's status, recent patterns and games, wellness score and recommendations."""
    now = now or utcnow()
    user = user_service.get_user_or_404(user_id, db)

    today_logs = mood_service.get_mood_logs(db, user_id, since=_start_of_local_day(now), newest_first=True)
    patterns = pattern_service.get_recent_patterns(db, user_id, 3)
    recent_games = game_service.get_recent_sessions(db, user_id, 2)

    return {
        "user": {
            "name": user.name,
            "streak": user.streak_current,
            "badges": user.badges or []
        },
        "today": {
            "has_logged": bool(today_logs),
            "last_mood": today_logs[0].mood if today_logs else None,
            "last_response": today_logs[0].ai_response if today_logs else None
        },
        "patterns": [
            pattern_service.summarize_pattern(
                p,
                high_risk_suggestion="Immediate attention recommended",
                default_suggestion="No action needed"
            )
            for p in patterns
        ],
        "recent_games": [
            {
                "type": g.game_type,
                "duration": g.duration,
                "score": g.score,
                "timestamp": g.created_at
            }
            for g in recent_games
        ],
        "wellness_score": calculate_wellness_score(user, today_logs),
        "recommendations": generate_daily_recommendations(user, today_logs, rng, now)
    }
