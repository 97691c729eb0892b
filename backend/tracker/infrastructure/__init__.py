"""Infrastructure Layer — external service clients and cross-cutting concerns.

Invariants:
    - Infrastructure never imports from services/ or api/
    - Every client has an explicit lifecycle: created on startup, closed on shutdown

Design Decisions:
    - Thin wrappers over raw clients (SQLAlchemy, redis, aiokafka) that satisfy
      the protocols in core/repository_protocols.py
"""
