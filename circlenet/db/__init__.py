"""Database Infrastructure: SQLAlchemy Base and the shared Document columns.

Invariants:
    - All sessions are async (AsyncSession), created by infrastructure/database.py
"""
