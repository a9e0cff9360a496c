"""API conftest — app wired to the fake repository and small pools."""

import pytest
from httpx import ASGITransport, AsyncClient

from app.infrastructure.database import DatabaseSessionManager
from app.main import create_app


@pytest.fixture
def db_manager():
    manager = DatabaseSessionManager("sqlite://")
    yield manager
    manager.dispose()


@pytest.fixture
def api_app(player_service, db_manager):
    """ASGITransport skips the lifespan, so state is set here."""
    app = create_app()
    app.state.player_service = player_service
    app.state.db_manager = db_manager
    return app


@pytest.fixture
async def client(api_app):
    async with AsyncClient(
        transport=ASGITransport(app=api_app), base_url="http://test",
    ) as c:
        yield c
