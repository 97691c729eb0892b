"""ORM Models — SQLAlchemy declarative models for all domain entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - User owns Projects; Project owns Tasks

Design Decisions:
    - One file per entity for locality
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs
"""

from tracker.models.user import User  # noqa: F401
from tracker.models.project import Project  # noqa: F401
from tracker.models.task import Task  # noqa: F401
