"""Error taxonomy: response shape and HTTP status mapping.

Tests cover:
    - to_response carries code, category, severity and context identifiers
    - Forbidden and the conflict errors are all NotAllowedError
    - Category -> status mapping in api/error_handlers.py
"""

import pytest

from circlenet.api.error_handlers import http_status_for
from circlenet.core.errors import (
    AlreadyLikedError, AlreadyMemberError, ConcurrencyConflictError, DatabaseError,
    ErrorContext, ForbiddenError, NameConflictError, NotAllowedError, NotFoundError,
    NotLikedError, NotMemberError, UnauthenticatedError,
)


def test_to_response_shape():
    err = ForbiddenError(
        "User is not group creator!",
        ErrorContext(user_id="u1", group_id="g1"),
    )
    body = err.to_response()["error"]

    assert body["code"] == "FORBIDDEN"
    assert body["message"] == "User is not group creator!"
    assert body["category"] == "not_allowed"
    assert body["severity"] == "warning"
    assert body["context"] == {"user_id": "u1", "group_id": "g1", "resource_id": None}
    assert "timestamp" in body


@pytest.mark.parametrize("err", [
    ForbiddenError("no"),
    NameConflictError("alpha"),
    AlreadyMemberError(),
    NotMemberError(),
    AlreadyLikedError(),
    NotLikedError(),
])
def test_guard_failures_are_not_allowed(err):
    assert isinstance(err, NotAllowedError)
    assert not isinstance(err, NotFoundError)


@pytest.mark.parametrize("err,status", [
    (NotAllowedError("no"), 403),
    (ForbiddenError("no"), 403),
    (NotFoundError("gone", "Group"), 404),
    (NameConflictError("alpha"), 409),
    (AlreadyLikedError(), 409),
    (ConcurrencyConflictError("busy", attempts=5), 409),
    (UnauthenticatedError(), 401),
    (DatabaseError("timeout", "commit"), 503),
])
def test_status_follows_category(err, status):
    assert http_status_for(err) == status


def test_name_conflict_message():
    assert NameConflictError("alpha").message == "Group with name alpha already exists!"
