"""
Shared fixtures.

The app runs against a throwaway SQLite database; tables are created before
each test and dropped afterwards.
"""
import os

os.environ.setdefault("DATABASE_URL", "sqlite:///./test.db")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from core.config import settings
from core.database import Base, get_db
from main import app

from helpers import WEBHOOK_SECRET

SQLALCHEMY_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(
    SQLALCHEMY_DATABASE_URL, connect_args={"check_same_thread": False}
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


app.dependency_overrides[get_db] = override_get_db


@pytest.fixture(autouse=True)
def tables():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


@pytest.fixture
def webhook_secret(monkeypatch):
    monkeypatch.setattr(settings, "ALCHEMY_WEBHOOK_SECRET", WEBHOOK_SECRET)
    monkeypatch.setattr(settings, "ENVIRONMENT", "development")
    return WEBHOOK_SECRET


@pytest.fixture(autouse=True)
def offline_price_feed(monkeypatch):
    monkeypatch.setattr(settings, "PRICE_FEED_ENABLED", False)


@pytest.fixture
def no_webhook_secret(monkeypatch):
    monkeypatch.setattr(settings, "ALCHEMY_WEBHOOK_SECRET", None)
    monkeypatch.setattr(settings, "ENVIRONMENT", "development")
