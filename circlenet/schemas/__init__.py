"""Pydantic Schemas: request/response validation for API endpoints.

Invariants:
    - Schemas validate at the system boundary (request bodies, serialized records)
    - Response schemas read straight from ORM records (from_attributes)

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
