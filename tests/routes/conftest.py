# tests/routes/conftest.py
"""Pytest configuration and fixtures for route tests."""

from collections.abc import AsyncGenerator

import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from app.main import app
from app.services.planner import TripPlanner
from app.services.storage import LocalTripStore


@pytest_asyncio.fixture
async def client(
    offline_planner: TripPlanner,
    local_store: LocalTripStore,
) -> AsyncGenerator[AsyncClient]:
    """Create async HTTP client with the offline planner and a temporary local store."""
    app.state.ai_client = offline_planner.ai_client
    app.state.planner = offline_planner
    app.state.trip_store = local_store
    async with AsyncClient(
        base_url="http://test",
        transport=ASGITransport(app=app),
    ) as ac:
        yield ac


@pytest_asyncio.fixture
async def auth_headers(local_store: LocalTripStore) -> dict[str, str]:
    principal = await local_store.sign_in()
    return {"Authorization": f"Bearer {principal.uid}"}
