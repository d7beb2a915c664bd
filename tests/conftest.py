"""Root conftest: shared test configuration and a fresh database per test.

Invariants:
    - Every test gets its own file-backed SQLite database under tmp_path
    - Concepts are built on that database exactly as the app builds them

Design Decisions:
    - File-backed over :memory: so concurrent operations get separate connections,
      which the membership race tests depend on
"""

import os

import pytest

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///test.db")
os.environ.setdefault("LOG_FORMAT", "text")

from circlenet.db.base import Base  # noqa: E402
import circlenet.models  # noqa: E402,F401
from circlenet.infrastructure.database import DatabaseSessionManager  # noqa: E402
from circlenet.services.friending import FriendingConcept  # noqa: E402
from circlenet.services.grouping import GroupingConcept  # noqa: E402
from circlenet.services.liking import LikingConcept  # noqa: E402
from circlenet.services.permitting import PermittingConcept  # noqa: E402
from circlenet.services.posting import PostingConcept  # noqa: E402


@pytest.fixture
async def db_manager(tmp_path):
    manager = DatabaseSessionManager(
        f"sqlite+aiosqlite:///{tmp_path / 'circlenet.db'}",
    )
    async with manager.engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield manager
    await manager.dispose()


@pytest.fixture
def grouping(db_manager):
    return GroupingConcept(db_manager)


@pytest.fixture
def permitting(db_manager):
    return PermittingConcept(db_manager)


@pytest.fixture
def liking(db_manager):
    return LikingConcept(db_manager)


@pytest.fixture
def posting(db_manager):
    return PostingConcept(db_manager)


@pytest.fixture
def friending(db_manager):
    return FriendingConcept(db_manager)
