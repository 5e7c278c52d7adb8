"""
Tests for export, reset and health endpoints.
"""
from datetime import timedelta

from mindshield.db.session import get_db_status
from mindshield.models.game import GameType
from mindshield.models.mood import MoodLog
from mindshield.models.pattern import Pattern
from mindshield.models.voice import VoiceLog
from mindshield.services import game_service, mood_service, user_service, voice_service


def seed(db, user, rng, now):
    mood_service.log_mood(db, user.id, 2, context={"activity": "Work"}, rng=rng, now=now)
    voice_service.record_voice_analysis(db, user.id, 10, {"rms": 0.07}, rng=rng, now=now)
    game_service.save_game_session(db, user.id, GameType.GRATITUDE, 120, metrics={"items_added": 5}, now=now)
    user_service.award_badge(user, "early_bird", "🐦", now)
    db.commit()


def test_export(db, user, rng, now):
    seed(db, user, rng, now)
    data = user_service.export_user_data(db, user.id, now + timedelta(minutes=1))

    assert data["user"]["name"] == "tester"
    assert data["user"]["streak"]["current"] == 1
    assert [log["mood_label"] for log in data["mood_logs"]] == ["Very Low"]
    assert data["voice_logs"][0]["analysis"]["stress_score"] == 7.0
    assert data["game_sessions"][0]["game_type"] == "gratitude"


def test_reset_removes_user_data(db, user, rng, now):
    seed(db, user, rng, now)
    user_service.reset_user_data(db, user.id)

    for model in (MoodLog, Pattern, VoiceLog):
        assert db.query(model).filter(model.user_id == user.id).count() == 0
    assert user.streak_current == 0
    assert user.streak_longest == 0
    assert user.badges == []


def test_export_and_reset_api(client, db, user, rng, now):
    seed(db, user, rng, now)

    response = client.get(f"/api/export/{user.id}")
    assert response.status_code == 200
    assert response.json()["format"] == "JSON"
    assert len(response.json()["data"]["mood_logs"]) == 1

    response = client.post(f"/api/reset/{user.id}")
    assert response.status_code == 200
    assert db.query(Pattern).filter(Pattern.user_id == user.id).count() == 0

    assert client.post("/api/reset/777").status_code == 404


def test_health(client):
    response = client.get("/api/health")
    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "healthy"
    assert body["database"] == "connected"


def test_health_reports_disconnected_database(client):
    class DownStatus:
        def is_connected(self):
            return False

    client.app.dependency_overrides[get_db_status] = lambda: DownStatus()
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json()["database"] == "disconnected"
