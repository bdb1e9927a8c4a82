"""API Layer — FastAPI routes, authorization middleware, and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - Every non-public request passes the authorization gate before routing

Design Decisions:
    - Thin routes delegate to services (impureim sandwich)
"""
