"""
Pydantic schemas for Pattern entity.
"""
from typing import Optional
from datetime import datetime
from mindshield.schemas.common import CamelModel
from mindshield.models.pattern import PatternType, RiskLevel


class PatternResponse(CamelModel):
    """Full pattern record."""
    id: int
    pattern_type: PatternType
    key: str
    occurrences: int
    avg_mood: float
    avg_stress: Optional[float] = None
    confidence: float
    risk_level: RiskLevel
    insight_message: Optional[str] = None
    first_detected_at: datetime
    last_updated: datetime


class PatternSummary(CamelModel):
    """Pattern as shown alongside mood logs, insights and the dashboard."""
    type: PatternType
    key: str
    message: Optional[str] = None
    suggestion: str
    confidence: float
    risk_level: RiskLevel
    last_updated: Optional[datetime] = None
