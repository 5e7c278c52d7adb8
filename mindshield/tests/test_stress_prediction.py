"""
Tests for the stress trend predictor.
"""
from datetime import timedelta
import pytest
from sqlalchemy.exc import OperationalError

from mindshield.models.mood import MoodLog
from mindshield.models.pattern import RiskLevel
from mindshield.services import stress_service


def add_logs(db, user_id, moods, now):
    """Store moods oldest first, one minute apart, ending at ``now``."""
    for i, mood in enumerate(moods):
        created = now - timedelta(minutes=len(moods) - i)
        db.add(MoodLog(
            user_id=user_id,
            mood=mood,
            mood_label="",
            ai_response="",
            context={},
            created_at=created,
            updated_at=created
        ))
    db.commit()


def test_volatility_is_population_std():
    assert stress_service.calculate_volatility([2, 4, 4, 4, 5, 5, 7, 9]) == pytest.approx(2.0)
    assert stress_service.calculate_volatility([5, 5, 5]) == 0


def test_requires_three_logs(now):
    assert stress_service.assess_moods([2, 2], now) is None
    assert stress_service.assess_moods([], now) is None


def test_low_average_mood_is_medium(now):
    # newest first: [3, 3, 2] -> trend +1, low volatility
    prediction = stress_service.assess_moods([3, 3, 2], now)
    assert prediction is not None
    assert prediction.risk_level == RiskLevel.MEDIUM
    assert prediction.confidence == 0.3
    assert prediction.reasons == ["Low average mood"]
    assert prediction.suggestions == stress_service.STRESS_SUGGESTIONS[RiskLevel.MEDIUM]


def test_downward_trend_is_high(now):
    prediction = stress_service.assess_moods([4, 6, 7], now)
    assert prediction.risk_level == RiskLevel.HIGH
    assert prediction.trend == -3
    assert prediction.reasons == ["Downward trend detected"]
    assert prediction.confidence == 0.4


def test_volatility_never_downgrades_high(now):
    prediction = stress_service.assess_moods([1, 9, 1, 9, 9], now)
    assert prediction.risk_level == RiskLevel.HIGH
    assert "High mood volatility" in prediction.reasons
    assert prediction.reasons[0] == "Downward trend detected"


def test_volatility_alone_is_medium(now):
    prediction = stress_service.assess_moods([9, 1, 9, 1, 9], now)
    assert prediction.risk_level == RiskLevel.MEDIUM
    assert prediction.reasons == ["High mood volatility"]


def test_confidence_capped(now):
    prediction = stress_service.assess_moods([1, 1, 10, 1, 1, 1, 10, 1, 2, 9], now)
    assert prediction.risk_level == RiskLevel.HIGH
    assert len(prediction.reasons) == 3
    assert prediction.confidence == 0.9


def test_stable_good_mood_yields_none(now):
    assert stress_service.assess_moods([7, 7, 8, 7], now) is None


def test_recent_average_computed(now):
    prediction = stress_service.assess_moods([2, 3, 4, 1, 1], now)
    assert prediction.recent_avg == pytest.approx(3.0)
    assert prediction.avg_mood == pytest.approx(2.2)


@pytest.mark.parametrize("hour,window", [
    (8, "this afternoon"), (15, "this evening"), (20, "tomorrow morning"),
])
def test_prediction_text_follows_hour(now, hour, window):
    prediction = stress_service.assess_moods([2, 3, 3], now.replace(hour=hour))
    assert prediction.prediction == f"Potential stress {window}"


def test_predict_from_stored_logs(db, user, now):
    assert stress_service.predict_stress(db, user.id, now) is None

    add_logs(db, user.id, [3, 3, 2], now)
    prediction = stress_service.predict_stress(db, user.id, now)
    assert prediction is not None
    assert prediction.risk_level in (RiskLevel.MEDIUM, RiskLevel.HIGH)


def test_window_ignores_old_logs(db, user, now):
    add_logs(db, user.id, [2, 2, 2], now - timedelta(days=8))
    assert stress_service.predict_stress(db, user.id, now) is None


def test_window_uses_ten_newest(db, user, now):
    add_logs(db, user.id, [1] * 5 + [8] * 10, now)
    assert stress_service.get_recent_moods(db, user.id, now) == [8] * 10
    assert stress_service.predict_stress(db, user.id, now) is None


def test_read_failure_degrades_to_none(db, user, now, monkeypatch):
    def broken(*args, **kwargs):
        raise OperationalError("SELECT", {}, Exception("database is locked"))

    monkeypatch.setattr(stress_service, "get_recent_moods", broken)
    assert stress_service.predict_stress(db, user.id, now) is None


def test_stress_api(client, db, user):
    response = client.get(f"/api/stress/{user.id}")
    assert response.status_code == 200
    assert response.json() is None

    assert client.get("/api/stress/4242").status_code == 404
