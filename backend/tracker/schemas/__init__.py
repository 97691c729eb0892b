"""Pydantic Schemas — request/response validation for API endpoints.

Invariants:
    - Schemas validate at system boundary (request bodies, API responses)
    - Domain enums from core/ used for status/priority fields

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
    - camelCase on the wire (clientName, projectId, createdAt); snake_case accepted on input
"""
