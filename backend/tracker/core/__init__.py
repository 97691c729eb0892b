"""Core Layer — domain types, error hierarchy, boundary protocols, pure helpers.

Invariants:
    - Core never imports from infrastructure/, services/ or api/
    - No IO in this package

Design Decisions:
    - Protocols live here so services depend on contracts, not clients
"""
