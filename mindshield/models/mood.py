"""
Mood log model: one immutable mood observation.
"""
from sqlalchemy import Column, String, Text, ForeignKey, Integer, JSON, Index
from sqlalchemy.orm import relationship
from mindshield.db.base import BaseModel


class MoodLog(BaseModel):
    """
    A single mood event.
    
    ``context`` holds ``{"tags": [...], "location": str|None, "activity": str|None}``.
    ``voice_analysis`` is present only when the client sent voice metrics.
    ``stress_prediction`` is the predictor snapshot taken before this log was stored,
    or NULL when there was not enough history or the risk was low.
    """
    __tablename__ = "mood_logs"
    
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    mood = Column(Integer, nullable=False)
    mood_label = Column(String(20), nullable=False)
    notes = Column(Text, nullable=False, default="")
    context = Column(JSON, nullable=False, default=dict)
    voice_analysis = Column(JSON, nullable=True)
    ai_response = Column(Text, nullable=False)
    stress_prediction = Column(JSON, nullable=True)
    
    # Relationships
    user = relationship("User", back_populates="mood_logs")
    
    __table_args__ = (
        Index('ix_mood_logs_user_created', 'user_id', 'created_at'),
    )
