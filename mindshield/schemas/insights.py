"""
Pydantic schemas for insights, dashboard and export views.
"""
from typing import Any, Dict, List, Optional
from datetime import datetime
from mindshield.schemas.common import CamelModel
from mindshield.schemas.pattern import PatternSummary
from mindshield.schemas.stress import StressPrediction
from mindshield.schemas.user import Badge
from mindshield.models.game import GameType


class MoodDistribution(CamelModel):
    high: int
    medium: int
    low: int


class MoodStatistics(CamelModel):
    """Aggregates over the requested period."""
    total_logs: int
    avg_mood: Optional[float] = None
    weekly_avg: float
    mood_distribution: MoodDistribution
    voice_checks: int
    consistency: float


class RecentLog(CamelModel):
    mood: int
    mood_label: str
    timestamp: datetime
    ai_response: str


class Insights(CamelModel):
    stats: MoodStatistics
    patterns: List[PatternSummary]
    stress_prediction: Optional[StressPrediction] = None
    recent_logs: List[RecentLog]


class InsightsResult(CamelModel):
    """Envelope returned by GET /insights/{user_id}."""
    success: bool = True
    insights: Insights


class DashboardUser(CamelModel):
    name: str
    streak: int
    badges: List[Badge] = []


class DashboardToday(CamelModel):
    has_logged: bool
    last_mood: Optional[int] = None
    last_response: Optional[str] = None


class RecentGame(CamelModel):
    type: GameType
    duration: int
    score: float
    timestamp: datetime


class Dashboard(CamelModel):
    user: DashboardUser
    today: DashboardToday
    patterns: List[PatternSummary]
    recent_games: List[RecentGame]
    wellness_score: int
    recommendations: List[str]


class DashboardResult(CamelModel):
    """Envelope returned by GET /dashboard/{user_id}."""
    success: bool = True
    dashboard: Dashboard


class ExportResult(CamelModel):
    """Envelope returned by GET /export/{user_id}."""
    success: bool = True
    data: Dict[str, Any]
    format: str = "JSON"
