"""
Tests for registration, login and streaks.
"""
from datetime import timedelta
import pytest

from mindshield.core.exceptions import ConflictError
from mindshield.core.security import (
    create_access_token, decode_access_token, get_password_hash, get_token_user_id, verify_password
)
from mindshield.services import user_service


def test_password_hashing_round_trip():
    hashed = get_password_hash("a" * 100)
    assert verify_password("a" * 100, hashed)
    assert not verify_password("a" * 99, hashed)


def test_register_starts_streak(user, now):
    assert user.streak_current == 1
    assert user.streak_longest == 1
    assert user.streak_last_login == now
    assert user.email == "tester@example.com"
    assert user.hashed_password != "secret123"


def test_register_duplicate(db, user):
    with pytest.raises(ConflictError):
        user_service.register_user(db, name="tester", age=40, password="another1")
    with pytest.raises(ConflictError):
        user_service.register_user(db, name="other", age=40, password="another1", email="TESTER@example.com")


def test_streak_rules(user, now):
    assert user_service.update_streak(user, now + timedelta(hours=2)) == 1
    assert user_service.update_streak(user, now + timedelta(days=1)) == 2
    assert user_service.update_streak(user, now + timedelta(days=2)) == 3
    assert user_service.update_streak(user, now + timedelta(days=5)) == 1
    assert user.streak_longest == 3


def test_badges_deduplicated_by_name(user, now):
    assert user_service.award_badge(user, "breathing_master", "🌀", now)
    assert not user_service.award_badge(user, "breathing_master", "🌀", now)
    assert len(user.badges) == 1


def test_signup_api(client):
    response = client.post("/api/register", json={
        "name": "newuser",
        "age": 25,
        "password": "testpassword123",
        "email": "new@example.com",
        "responses": {"stress": "work"}
    })
    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    assert body["user"]["name"] == "newuser"
    assert body["user"]["streakCurrent"] == 1


@pytest.mark.parametrize("payload", [
    {"name": "kid", "age": 12, "password": "testpassword123"},
    {"name": "elder", "age": 121, "password": "testpassword123"},
    {"name": "short", "age": 30, "password": "123"},
    {"age": 30, "password": "testpassword123"},
])
def test_signup_api_validation(client, payload):
    assert client.post("/api/register", json=payload).status_code == 422


def test_signup_api_duplicate(client, user):
    response = client.post("/api/register", json={"name": "tester", "age": 30, "password": "testpassword123"})
    assert response.status_code == 409
    assert response.json()["success"] is False


def test_login_and_me(client, user):
    response = client.post("/api/auth/login", json={"username": "tester", "password": "secret123"})
    assert response.status_code == 200
    token = response.json()["accessToken"]
    assert decode_access_token(token)["user_id"] == user.id

    response = client.get("/api/users/me", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 200
    assert response.json()["id"] == user.id


def test_login_by_email(client, user):
    response = client.post("/api/auth/login", json={"username": "tester@example.com", "password": "secret123"})
    assert response.status_code == 200


def test_login_invalid_credentials(client, user):
    response = client.post("/api/auth/login", json={"username": "tester", "password": "wrongpassword"})
    assert response.status_code == 401
    assert client.get("/api/users/me", headers={"Authorization": "Bearer nonsense"}).status_code == 401


def test_get_user_by_id(client, user):
    response = client.get(f"/api/users/{user.id}")
    assert response.status_code == 200
    assert response.json()["name"] == "tester"
    assert client.get("/api/users/999").status_code == 404


def test_token_claims(user):
    token = create_access_token(user.id, user.name)
    claims = decode_access_token(token)
    assert claims["sub"] == "tester"
    assert get_token_user_id(token) == user.id


def test_expired_or_tampered_token(user):
    expired = create_access_token(user.id, user.name, expires_delta=timedelta(seconds=-1))
    assert decode_access_token(expired) is None
    assert get_token_user_id(expired) is None
    assert get_token_user_id(create_access_token(user.id, user.name) + "x") is None


def test_verify_against_non_bcrypt_hash():
    assert not verify_password("secret123", "plain-text")
