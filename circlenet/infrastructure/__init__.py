"""Infrastructure Layer: database access, the generic document store, logging.

Invariants:
    - Infrastructure never imports from services/ concept logic
    - All SQLAlchemy failures surface as DatabaseError
"""
