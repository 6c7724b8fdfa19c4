"""Infrastructure Layer — external service adapters and cross-cutting concerns.

Invariants:
    - Infrastructure never imports from api/ or services/
    - All external failures mapped to typed errors (core/errors.py)
"""
