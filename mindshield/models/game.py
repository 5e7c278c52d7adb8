"""
Game session model for completed wellness activities.
"""
from sqlalchemy import Column, Boolean, Float, Enum as SQLEnum, ForeignKey, Integer, JSON
from sqlalchemy.orm import relationship
from mindshield.db.base import BaseModel
import enum


class GameType(str, enum.Enum):
    """Available mini-games."""
    BREATHING = "breathing"
    GRATITUDE = "gratitude"
    MINDFUL_MATCH = "mindful_match"
    THOUGHT_CATCHER = "thought_catcher"
    GUIDED_MEDITATION = "guided_meditation"


class DifficultyLevel(str, enum.Enum):
    """Difficulty suggested for the next session."""
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class GameSession(BaseModel):
    """One completed activity; derived fields are computed once on save."""
    __tablename__ = "game_sessions"
    
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    game_type = Column(SQLEnum(GameType), nullable=False, index=True)
    duration = Column(Integer, nullable=False)  # seconds
    score = Column(Float, default=0, nullable=False)
    completed = Column(Boolean, default=True, nullable=False)
    metrics = Column(JSON, nullable=False, default=dict)
    
    # Derived
    engagement_score = Column(Float, nullable=False)
    difficulty_level = Column(SQLEnum(DifficultyLevel), default=DifficultyLevel.EASY, nullable=False)
    wellness_impact = Column(Float, nullable=False)
    achievements_unlocked = Column(JSON, nullable=False, default=list)
    
    # Relationships
    user = relationship("User", back_populates="game_sessions")
