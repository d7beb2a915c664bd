"""Route Modules: one file per concept.

Invariants:
    - Each module defines its own APIRouter with prefix and tags
    - Routes never contain business logic (delegate to Synchronizations/concepts)
"""
