"""Services Layer: concepts (one per file) and the Synchronizations composition layer.

Invariants:
    - Each concept owns exactly its own DocumentStore collections
    - Concepts never call each other; only synchronizations.py composes them
"""
