"""
Pattern model: per-user aggregate keyed by (user, pattern type, key).
"""
from sqlalchemy import Column, String, Text, Float, DateTime, Enum as SQLEnum, ForeignKey, Integer, UniqueConstraint
from sqlalchemy.orm import relationship
from mindshield.db.base import BaseModel
from mindshield.core.utils import utcnow
import enum


class PatternType(str, enum.Enum):
    """Kinds of behavioral pattern derived from mood logs."""
    TIME_OF_DAY = "time_of_day"
    DAY_OF_WEEK = "day_of_week"
    ACTIVITY = "activity"
    LOCATION = "location"
    STRESS_TRIGGER = "stress_trigger"


class RiskLevel(str, enum.Enum):
    """Risk classification shared by patterns and stress predictions."""
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


class Pattern(BaseModel):
    """Aggregate mood/stress signal for a recurring contextual key."""
    __tablename__ = "patterns"
    
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    pattern_type = Column(SQLEnum(PatternType), nullable=False)
    key = Column(String(100), nullable=False)
    
    # Stats
    occurrences = Column(Integer, default=1, nullable=False)
    avg_mood = Column(Float, nullable=False)
    avg_stress = Column(Float, nullable=True)  # NULL until a stress signal is seen
    
    confidence = Column(Float, default=0.2, nullable=False, index=True)
    risk_level = Column(SQLEnum(RiskLevel), default=RiskLevel.LOW, nullable=False)
    insight_message = Column(Text, nullable=True)
    
    first_detected_at = Column(DateTime, default=utcnow, nullable=False)
    last_updated = Column(DateTime, default=utcnow, nullable=False)
    
    # Relationships
    user = relationship("User", back_populates="patterns")
    
    # Unique constraint: one aggregate per user per type per key
    __table_args__ = (
        UniqueConstraint('user_id', 'pattern_type', 'key', name='uq_user_pattern_key'),
    )
