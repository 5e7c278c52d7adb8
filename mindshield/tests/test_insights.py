"""
Tests for insights statistics and the dashboard.
"""
import random
from datetime import timedelta
from types import SimpleNamespace
import pytest

from mindshield.models.pattern import PatternType
from mindshield.services import game_service, insights_service, mood_service, pattern_service
from mindshield.models.game import GameType


def fake_log(mood, created_at):
    return SimpleNamespace(mood=mood, created_at=created_at)


def test_statistics_distribution_and_averages(now):
    logs = [
        fake_log(8, now - timedelta(days=10)),
        fake_log(5, now - timedelta(days=3)),
        fake_log(2, now - timedelta(days=2)),
        fake_log(7, now - timedelta(hours=1)),
    ]
    stats = insights_service.calculate_statistics(logs, voice_log_count=2, now=now)

    assert stats["total_logs"] == 4
    assert stats["avg_mood"] == 5.5
    assert stats["weekly_avg"] == pytest.approx(4.7)
    assert stats["mood_distribution"] == {"high": 2, "medium": 1, "low": 1}
    assert stats["voice_checks"] == 2


def test_statistics_empty(now):
    stats = insights_service.calculate_statistics([], 0, now)
    assert stats["total_logs"] == 0
    assert stats["avg_mood"] is None
    assert stats["consistency"] == 0


def test_consistency(now):
    # 3 distinct days out of a 4-day span
    logs = [
        fake_log(5, now - timedelta(days=4)),
        fake_log(5, now - timedelta(days=3)),
        fake_log(5, now - timedelta(days=3, hours=1) + timedelta(hours=2)),
        fake_log(5, now - timedelta(days=1)),
    ]
    assert insights_service.calculate_consistency(logs, now) == 75.0
    assert insights_service.calculate_consistency(logs[:1], now) == 0


def test_wellness_score():
    user = SimpleNamespace(streak_current=4, badges=[{"name": "a"}])
    assert insights_service.calculate_wellness_score(user, []) == 50 + 8 + 3

    good_day = [fake_log(8, None)] * 5
    assert insights_service.calculate_wellness_score(user, good_day) == 50 + 8 + 15 + 3 + 10

    veteran = SimpleNamespace(streak_current=30, badges=[{}] * 10)
    assert insights_service.calculate_wellness_score(veteran, good_day) == 100


def test_daily_recommendations(now):
    user = SimpleNamespace(streak_current=3, badges=[])
    morning = insights_service.generate_daily_recommendations(user, [], random.Random(0), now)
    assert morning[:2] == ["Start your day with a mood check-in", "Set a positive intention for the day"]
    assert "Maintain your 3-day streak!" in morning
    assert "Complete more activities to earn badges" in morning
    assert morning[-1].startswith("Try the ")

    evening = insights_service.generate_daily_recommendations(user, [], random.Random(0), now.replace(hour=20))
    assert evening[:2] == ["Log your evening mood", "Practice gratitude before bed"]


def test_get_insights(db, user, rng, now):
    for i, mood in enumerate([6, 3, 2, 4]):
        mood_service.log_mood(db, user.id, mood, rng=rng, now=now - timedelta(hours=4 - i))

    insights = insights_service.get_insights(db, user.id, days=30, now=now)

    assert insights["stats"]["total_logs"] == 4
    assert insights["stats"]["mood_distribution"] == {"high": 0, "medium": 2, "low": 2}
    assert [log["mood"] for log in insights["recent_logs"]] == [4, 2, 3, 6]
    assert insights["stress_prediction"] is not None
    assert {p["type"] for p in insights["patterns"]} >= {PatternType.TIME_OF_DAY, PatternType.DAY_OF_WEEK}


def test_get_dashboard(db, user, rng, now):
    mood_service.log_mood(db, user.id, 8, rng=rng, now=now)
    game_service.save_game_session(db, user.id, GameType.BREATHING, 60, now=now)

    dashboard = insights_service.get_dashboard(db, user.id, random.Random(1), now)

    assert dashboard["user"]["name"] == "tester"
    assert dashboard["today"]["has_logged"] is True
    assert dashboard["today"]["last_mood"] == 8
    assert len(dashboard["patterns"]) == 2
    assert dashboard["patterns"][0]["suggestion"] == "No action needed"
    assert dashboard["recent_games"][0]["type"] == GameType.BREATHING
    # base 50 + streak 1 * 2 + mood 8 bonus 15
    assert dashboard["wellness_score"] == 67


def test_insights_and_dashboard_api(client, db, user):
    client.post("/api/mood", json={"userId": user.id, "mood": 7})

    response = client.get(f"/api/insights/{user.id}", params={"days": 7})
    assert response.status_code == 200
    insights = response.json()["insights"]
    assert insights["stats"]["totalLogs"] == 1
    assert insights["stressPrediction"] is None

    response = client.get(f"/api/dashboard/{user.id}")
    assert response.status_code == 200
    dashboard = response.json()["dashboard"]
    assert dashboard["today"]["hasLogged"] is True
    assert 0 <= dashboard["wellnessScore"] <= 100

    assert client.get("/api/dashboard/31337").status_code == 404
    assert client.get("/api/insights/31337").status_code == 404


def test_pattern_summary_shape(db, user, now):
    pattern = pattern_service.upsert_pattern(db, user.id, PatternType.ACTIVITY, "Work", 2, 8.0, now)
    summary = pattern_service.summarize_pattern(pattern)
    assert summary["key"] == "Work"
    assert summary["message"].startswith("Your mood tends to be lower during Work")
