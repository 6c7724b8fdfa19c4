"""API Schemas — Pydantic models for request bodies and query parameters."""
