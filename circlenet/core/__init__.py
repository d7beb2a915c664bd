"""Core Layer: domain types, error taxonomy, collaborator contracts. No IO, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
"""
