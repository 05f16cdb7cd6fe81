"""Shared fixtures for the quote profile engine tests."""

from datetime import date, datetime, timezone
from typing import List

import pytest
from fastapi.testclient import TestClient

from app.models.facts import ConversationTurn
from app.models.rules import RuleTables
from app.services.rule_tables import default_rule_tables

TODAY = date(2026, 10, 19)
NOW = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)


def user_turns(*texts: str) -> List[ConversationTurn]:
    """Build a conversation where every message comes from the user."""
    return [ConversationTurn(role="user", text=text) for text in texts]


@pytest.fixture
def today() -> date:
    return TODAY


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture(scope="session")
def rule_tables() -> RuleTables:
    return default_rule_tables()


@pytest.fixture
def client() -> TestClient:
    """Test client with the lifespan run so rule tables are loaded."""
    from app.index import app

    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def make_turns():
    return user_turns
