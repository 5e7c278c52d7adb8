"""
User model: identity plus cumulative streak and badge state.
"""
from sqlalchemy import Column, String, Integer, DateTime, JSON
from sqlalchemy.orm import relationship
from mindshield.db.base import BaseModel


class User(BaseModel):
    """User model with streak bookkeeping and earned badges."""
    __tablename__ = "users"
    
    name = Column(String(100), unique=True, nullable=False, index=True)
    email = Column(String(255), unique=True, nullable=True, index=True)
    hashed_password = Column(String(255), nullable=False)
    age = Column(Integer, nullable=False)
    situational_responses = Column(JSON, nullable=False, default=dict)
    
    # Streak
    streak_current = Column(Integer, default=0, nullable=False)
    streak_longest = Column(Integer, default=0, nullable=False)
    streak_last_login = Column(DateTime, nullable=True)
    
    # List of {"name", "icon", "earned_at"}; reassign on change so the JSON column is flagged dirty
    badges = Column(JSON, nullable=False, default=list)
    
    # Relationships
    mood_logs = relationship("MoodLog", back_populates="user", cascade="all, delete-orphan")
    patterns = relationship("Pattern", back_populates="user", cascade="all, delete-orphan")
    voice_logs = relationship("VoiceLog", back_populates="user", cascade="all, delete-orphan")
    game_sessions = relationship("GameSession", back_populates="user", cascade="all, delete-orphan")
