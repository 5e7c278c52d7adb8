"""
Shared fixtures: in-memory SQLite database, pinned random source and an API client.
"""
import random
from datetime import datetime
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from mindshield.main import app
from mindshield.api.dependencies import get_rng
from mindshield.db.base import Base
from mindshield.db.session import DatabaseStatus, get_db, get_db_status, init_db
from mindshield.services import user_service

# A Wednesday, mid-morning UTC
FIXED_NOW = datetime(2024, 5, 15, 9, 30)


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool
    )
    init_db(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db(engine):
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def rng():
    return random.Random(42)


@pytest.fixture
def now():
    return FIXED_NOW


@pytest.fixture
def user(db, now):
    return user_service.register_user(db, name="tester", age=30, password="secret123", email="tester@example.com", now=now)


@pytest.fixture
def client(db, engine):
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_rng] = lambda: random.Random(7)
    app.dependency_overrides[get_db_status] = lambda: DatabaseStatus(bind=engine)
    yield TestClient(app)
    app.dependency_overrides.clear()
