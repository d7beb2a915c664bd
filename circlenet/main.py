"""CircleNet API: FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map CircleNetError -> structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database, concepts and Synchronizations built once in the lifespan

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Concepts stored on app.state and resolved through dependencies, so tests
      swap them with dependency_overrides
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from circlenet.api.error_handlers import register_error_handlers
from circlenet.api.routes import friends, groups, health, likes, permissions, posts
from circlenet.config import get_settings
from circlenet.infrastructure.database import init_db
from circlenet.infrastructure.observability import setup_logging
from circlenet.services.synchronizations import Synchronizations, build_concepts

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    db = init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    concepts = build_concepts(db, settings)
    app.state.concepts = concepts
    app.state.synchronizations = Synchronizations.from_concepts(concepts, settings)
    logger.info("CircleNet API started")
    yield
    logger.info("CircleNet API shutting down")
    await db.dispose()


app = FastAPI(
    title="CircleNet API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routes: explicit registration
app.include_router(health.router)
app.include_router(groups.router)
app.include_router(permissions.router)
app.include_router(likes.router)
app.include_router(posts.router)
app.include_router(friends.router)

register_error_handlers(app)
