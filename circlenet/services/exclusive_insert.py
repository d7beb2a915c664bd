"""Exclusive Insert: create a record only if no other record shares its key.

Invariants:
    - A caller succeeds only if its own record was the sole match for the key
      when it re-read after committing; so at most one concurrent caller wins
    - A caller that sees a rival withdraws its own record (delete by id) before
      deciding; it never deletes anyone else's
    - After withdrawing, a surviving rival means conflict; no survivor means
      every contender withdrew, and the insert is retried
    - Retries are bounded; exhaustion raises ConcurrencyConflictError

Design Decisions:
    - Claim-and-verify over a unique index: the store stays free of uniqueness
      failures, and the check lives with the concept that owns the rule
    - Survivor decided by visibility, not created_at: timestamps are taken
      before the commit, so an older stamp can become visible after a younger
      record has already been accepted
"""

import logging
from collections.abc import Callable, Mapping
from typing import Any

from circlenet.core.errors import (
    CircleNetError, ConcurrencyConflictError, ErrorContext,
)
from circlenet.infrastructure.document_store import DocT, DocumentStore, Query

logger = logging.getLogger(__name__)


async def insert_exclusive(
    store: DocumentStore[DocT],
    key: Query,
    fields: Mapping[str, Any],
    *,
    conflict: Callable[[], CircleNetError],
    max_retries: int,
    context: ErrorContext | None = None,
) -> DocT:
    """Insert fields unless a record matching key exists; raise conflict() if it does."""
    for attempt in range(1, max_retries + 1):
        if await store.read_one(key) is not None:
            raise conflict()
        doc = await store.insert_one(fields)
        rivals = [d for d in await store.read_many(key) if d.id != doc.id]
        if not rivals:
            return doc
        await store.delete_one({"id": doc.id})
        if await store.read_one(key) is not None:
            raise conflict()
        logger.warning(
            "Concurrent insert withdrawn, retrying",
            extra={"collection": store.collection, "attempt": attempt},
        )
    raise ConcurrencyConflictError(
        f"Concurrent inserts into {store.collection} kept colliding, try again",
        attempts=max_retries,
        context=context,
    )
