"""Infrastructure Layer — database, identity, session tokens, view cache, logging.

Invariants:
    - Infrastructure never holds domain rules; it implements core/ protocols
    - Process-wide resources (pool, cache) are owned by the app lifespan

Design Decisions:
    - FastAPI dependency providers live beside the resource they provide
"""
