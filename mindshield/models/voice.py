"""
Voice log model for heuristic voice stress checks.
"""
from sqlalchemy import Column, String, Text, Float, ForeignKey, Integer, JSON
from sqlalchemy.orm import relationship
from mindshield.db.base import BaseModel


class VoiceLog(BaseModel):
    """Result of one voice analysis request."""
    __tablename__ = "voice_logs"
    
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    duration = Column(Float, nullable=False)  # seconds
    audio_url = Column(Text, nullable=True)
    
    stress_score = Column(Float, nullable=False)
    emotion = Column(String(20), nullable=False)
    speech_rate = Column(Integer, nullable=True)
    pitch_variation = Column(Float, nullable=True)
    confidence = Column(Float, nullable=False)
    method = Column(String(20), default="heuristic", nullable=False)
    insights = Column(JSON, nullable=False, default=list)
    
    # Relationships
    user = relationship("User", back_populates="voice_logs")
