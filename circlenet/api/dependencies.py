"""Route Dependencies: caller identity and the concept instances built at startup.

Invariants:
    - Caller identity comes only from the X-User-Id header; absent -> 401
    - Concepts and Synchronizations live on app.state, built once in lifespan
"""

from uuid import UUID

from fastapi import Header, Request

from circlenet.core.errors import UnauthenticatedError
from circlenet.services.synchronizations import Concepts, Synchronizations

CALLER_HEADER = "X-User-Id"


async def get_caller(
    x_user_id: UUID | None = Header(None, alias=CALLER_HEADER),
) -> UUID:
    """Resolve the authenticated caller supplied by the session layer."""
    if x_user_id is None:
        raise UnauthenticatedError()
    return x_user_id


def get_synchronizations(request: Request) -> Synchronizations:
    return request.app.state.synchronizations


def get_concepts(request: Request) -> Concepts:
    return request.app.state.concepts
