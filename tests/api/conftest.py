"""API test fixtures: FastAPI test client over the per-test SQLite database.

Invariants:
    - get_concepts/get_synchronizations overridden with concepts on the test DB
    - db_manager patched so the readiness probe sees the test engine
    - Every request made through `as_user` carries the X-User-Id header

Design Decisions:
    - Dependency overrides over running the lifespan: ASGITransport does not
      send lifespan events, and overrides keep the app module untouched
"""

import pytest
from httpx import ASGITransport, AsyncClient

import circlenet.infrastructure.database as db_module
from circlenet.api.dependencies import CALLER_HEADER, get_concepts, get_synchronizations
from circlenet.config import get_settings
from circlenet.main import app
from circlenet.services.synchronizations import Synchronizations, build_concepts


@pytest.fixture
async def client(db_manager):
    """FastAPI test client with concept dependencies overridden."""
    settings = get_settings()
    concepts = build_concepts(db_manager, settings)
    sync = Synchronizations.from_concepts(concepts, settings)

    app.dependency_overrides[get_concepts] = lambda: concepts
    app.dependency_overrides[get_synchronizations] = lambda: sync

    original_manager = db_module.db_manager
    db_module.db_manager = db_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


@pytest.fixture
def as_user():
    def headers(user_id) -> dict:
        return {CALLER_HEADER: str(user_id)}
    return headers
