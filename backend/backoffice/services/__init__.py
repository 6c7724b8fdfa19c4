"""Services — role-scoped persistence queries feeding the route handlers.

Invariants:
    - Services receive an already-authorized Principal; they never decide 401/403
    - Services return ORM objects or plain dicts; serialization happens in routes
"""
