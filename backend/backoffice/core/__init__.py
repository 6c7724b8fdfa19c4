"""Core Layer — pure domain rules: errors, authorization, serialization, aggregation.

Invariants:
    - Core never imports from api/, infrastructure/ or services/
    - No IO in core (no DB sessions, no network, no clocks except via parameters)
"""
