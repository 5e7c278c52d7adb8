"""
Pydantic schemas for voice analysis.
"""
from pydantic import Field
from typing import List, Optional
from mindshield.schemas.common import CamelModel


class VoiceFeatures(CamelModel):
    """Acoustic features computed on the client, when available."""
    rms: Optional[float] = Field(None, ge=0)
    zero_crossing_rate: Optional[float] = Field(None, ge=0)
    speech_rate: Optional[float] = Field(None, gt=0)
    pitch_variation: Optional[float] = Field(None, ge=0)
    confidence: Optional[float] = Field(None, ge=0, le=1)


class VoiceAnalyzeRequest(CamelModel):
    """Schema for a voice analysis request."""
    user_id: int
    duration: float = Field(..., ge=1, le=60)
    audio_data: Optional[str] = None
    features: VoiceFeatures = Field(default_factory=VoiceFeatures)


class VoiceAnalysis(CamelModel):
    """Heuristic analysis result."""
    stress_score: float
    emotion: str
    speech_rate: int
    pitch_variation: float
    confidence: float
    insights: List[str] = []


class VoiceAnalyzeResult(CamelModel):
    """Envelope returned by POST /voice/analyze."""
    success: bool = True
    analysis: VoiceAnalysis
    suggestions: List[str]
