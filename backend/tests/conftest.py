"""Pytest configuration and shared fixtures.

Provides:
- An in-memory SQLite database wired into the app through ``get_db``
- A FastAPI TestClient
- A fake LLM client standing in for the completion provider
"""
import sys
from pathlib import Path
from typing import Generator, List, Optional

# Add the backend directory to the path
sys.path.insert(0, str(Path(__file__).parent.parent))

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.llm_client import get_llm_client
from app.db.models import Base
from app.db.session import get_db
from app.main import app


# ============================================================================
# DATABASE FIXTURES
# ============================================================================


@pytest.fixture
def db_engine():
    """Fresh in-memory database per test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=db_engine)


@pytest.fixture
def db_session(session_factory) -> Generator[Session, None, None]:
    """Session for inspecting the database directly from a test."""
    db = session_factory()
    try:
        yield db
    finally:
        db.close()


# ============================================================================
# LLM FIXTURES
# ============================================================================


class FakeLLMClient:
    """Records enhancement requests and replies with a canned rewrite."""

    def __init__(self, reply: str = "  Silky tomato soup with basil oil.  ", error: Optional[Exception] = None):
        self.reply = reply
        self.error = error
        self.calls: List[dict] = []

    async def enhance_description(self, name, old_description=None, brand_voice=None):
        self.calls.append(
            {"name": name, "old_description": old_description, "brand_voice": brand_voice}
        )
        if self.error is not None:
            raise self.error
        return self.reply.strip()


@pytest.fixture
def fake_llm() -> FakeLLMClient:
    return FakeLLMClient()


# ============================================================================
# APP FIXTURES
# ============================================================================


@pytest.fixture
def client(session_factory, fake_llm) -> Generator[TestClient, None, None]:
    """TestClient bound to the test database and the fake LLM."""

    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_llm_client] = lambda: fake_llm
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def restaurant_id(client) -> int:
    response = client.post("/api/restaurants", json={"name": "Chez Test"})
    return response.json()["restaurant"]["id"]


@pytest.fixture
def menu_id(client, restaurant_id) -> int:
    response = client.post(
        "/api/menus",
        json={"restaurantId": restaurant_id, "name": "Dinner", "templateId": "modern"},
    )
    return response.json()["menu"]["id"]
