"""Pydantic Schemas - request/response validation for API endpoints.

Invariants:
    - Schemas validate at the system boundary only; settings blobs are
      interpreted by core/resolve_settings

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
