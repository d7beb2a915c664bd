"""CircleNet Application Package: group-scoped capability authorization for a social backend.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
