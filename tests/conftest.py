"""Shared fixtures: fake Moneybird API, in-memory connection store, API client."""

from uuid import uuid4

import pytest
from httpx import ASGITransport, AsyncClient

from app.auth.dependencies import get_current_user
from app.auth.schemas import AuthenticatedUser
from app.integrations.moneybird.router import get_connection_service, get_moneybird_client_factory
from app.main import app
from tests.helpers.moneybird import FakeConnectionService, FakeMoneybird


@pytest.fixture
def moneybird() -> FakeMoneybird:
    return FakeMoneybird()


@pytest.fixture
def connections() -> FakeConnectionService:
    return FakeConnectionService()


@pytest.fixture
def current_user() -> AuthenticatedUser:
    return AuthenticatedUser(id=uuid4(), email="owner@example.com")


@pytest.fixture
async def api_client(current_user, moneybird, connections):
    """API client with identity, credential store and Moneybird faked."""
    app.dependency_overrides[get_current_user] = lambda: current_user
    app.dependency_overrides[get_connection_service] = lambda: connections
    app.dependency_overrides[get_moneybird_client_factory] = lambda: moneybird.client

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()
