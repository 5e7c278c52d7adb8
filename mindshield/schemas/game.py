"""
Pydantic schemas for game sessions.
"""
from pydantic import Field
from typing import List, Optional
from datetime import datetime
from mindshield.schemas.common import CamelModel
from mindshield.models.game import GameType, DifficultyLevel


class GameMetrics(CamelModel):
    """Activity-specific metrics; every field is optional."""
    breaths_completed: Optional[int] = Field(None, ge=0)
    items_added: Optional[int] = Field(None, ge=0)
    accuracy: Optional[float] = Field(None, ge=0, le=1)
    stress_before: Optional[float] = Field(None, ge=0, le=10)
    stress_after: Optional[float] = Field(None, ge=0, le=10)


class GameSessionCreate(CamelModel):
    """Schema for saving a game session."""
    user_id: int
    game_type: GameType
    duration: int = Field(..., ge=5, le=3600)
    score: float = Field(0, ge=0)
    completed: bool = True
    metrics: GameMetrics = Field(default_factory=GameMetrics)


class GameSessionResponse(CamelModel):
    """Schema for a stored game session."""
    id: int
    game_type: GameType
    duration: int
    score: float
    engagement_score: float
    difficulty_level: DifficultyLevel
    wellness_impact: float
    achievements_unlocked: List[str] = []
    timestamp: datetime


class GameSessionResult(CamelModel):
    """Envelope returned by POST /games/session."""
    success: bool = True
    session: GameSessionResponse
