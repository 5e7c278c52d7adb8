"""Models package - Import all models for SQLAlchemy registration."""
from mindshield.models.user import User
from mindshield.models.mood import MoodLog
from mindshield.models.pattern import Pattern, PatternType, RiskLevel
from mindshield.models.voice import VoiceLog
from mindshield.models.game import GameSession, GameType, DifficultyLevel

__all__ = [
    "User",
    "MoodLog",
    "Pattern",
    "PatternType",
    "RiskLevel",
    "VoiceLog",
    "GameSession",
    "GameType",
    "DifficultyLevel",
]
