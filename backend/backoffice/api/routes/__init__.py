"""Route Modules — one file per resource.

Invariants:
    - Each module defines its own APIRouter with prefix, tags and route_class=GuardedRoute
    - Routes never contain query logic (delegate to services/)
"""
