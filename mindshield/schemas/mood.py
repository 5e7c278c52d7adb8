"""
Pydantic schemas for mood logging.
"""
from pydantic import Field
from typing import List, Optional
from datetime import datetime
from mindshield.schemas.common import CamelModel
from mindshield.schemas.pattern import PatternSummary
from mindshield.schemas.stress import StressPrediction


class MoodContext(CamelModel):
    """Optional context attached to a mood log."""
    tags: List[str] = Field(default_factory=list)
    location: Optional[str] = Field(None, max_length=100)
    activity: Optional[str] = Field(None, max_length=100)


class VoiceAnalysisSnapshot(CamelModel):
    """Voice metrics embedded in a mood log."""
    stress_score: Optional[float] = Field(None, ge=0, le=10)
    emotion: Optional[str] = None
    confidence: Optional[float] = Field(None, ge=0, le=1)


class MoodCreate(CamelModel):
    """Schema for logging a mood."""
    user_id: int
    mood: int = Field(..., ge=1, le=10)
    notes: Optional[str] = Field(None, max_length=1000)
    context: Optional[MoodContext] = None
    voice_analysis: Optional[VoiceAnalysisSnapshot] = None


class MoodLogResponse(CamelModel):
    """Schema for a stored mood log."""
    id: int
    mood: int
    mood_label: str
    notes: str = ""
    ai_response: str
    stress_prediction: Optional[StressPrediction] = None
    timestamp: datetime


class StreakSummary(CamelModel):
    """Streak counters returned after logging."""
    streak: int
    longest_streak: int


class MoodLogResult(CamelModel):
    """Envelope returned by POST /mood."""
    success: bool = True
    log: MoodLogResponse
    user: StreakSummary
    patterns: List[PatternSummary]
    message: str = "Mood logged successfully"
