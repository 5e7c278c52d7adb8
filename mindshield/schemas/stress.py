"""
Pydantic schemas for stress predictions.
"""
from typing import List
from mindshield.schemas.common import CamelModel
from mindshield.models.pattern import RiskLevel


class StressPrediction(CamelModel):
    """Short-term stress risk derived from recent mood logs."""
    risk_level: RiskLevel
    confidence: float
    prediction: str
    reasons: List[str]
    suggestions: List[str]
    
    # Window metrics behind the decision
    avg_mood: float
    recent_avg: float
    trend: float
    volatility: float
