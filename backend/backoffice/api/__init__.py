"""API Layer — FastAPI routes, dependencies and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - Every route goes through GuardedRoute (api/routing.py)
    - All endpoints return JSON except the signed-URL redirect
"""
