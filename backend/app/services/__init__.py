"""Services Layer — orchestration around the pure core: mutations, queries, sign-in.

Invariants:
    - Services receive their DB session and collaborators by injection
    - Validation and persistence failures are returned as values, never raised

Design Decisions:
    - One module per use case for locality
"""
