"""Domain Types — identity types and closed status/priority sets for all entities.

Invariants:
    - ProjectId, TaskId, UserId wrap UUIDs — never use bare UUID in domain logic
    - Every enumerated column is a str Enum — membership validated at the API boundary
    - No transition graph is encoded: any status may move to any other status,
      except that delete operations force the soft-delete sink

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
    - Event kinds are per entity (project vs task) and kept as separate enums
      because their tag sets differ (DELETED vs ARCHIVED)
"""

from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

ProjectId = NewType("ProjectId", UUID)
TaskId = NewType("TaskId", UUID)
UserId = NewType("UserId", UUID)


# ─── Status Enums ────────────────────────────────────────────────

class ProjectStatus(str, Enum):
    """Project lifecycle states — INACTIVE is the soft-delete sink."""
    PENDING = "PENDING"
    ACTIVE = "ACTIVE"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    INACTIVE = "INACTIVE"


class TaskStatus(str, Enum):
    """Task lifecycle states — ARCHIVED is the soft-delete sink."""
    PENDING = "PENDING"
    ACTIVE = "ACTIVE"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    ARCHIVED = "ARCHIVED"


class Priority(str, Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


class UserRole(str, Enum):
    USER = "USER"
    ADMIN = "ADMIN"


class UserStatus(str, Enum):
    """Account states. Only ACTIVE accounts may sign in."""
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
    BANNED = "BANNED"
    DELETED = "DELETED"


# ─── Event Kinds ─────────────────────────────────────────────────

class ProjectEvent(str, Enum):
    """Event tags published on the project topic."""
    CREATED = "CREATED"
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
    DELETED = "DELETED"
    UPDATED = "UPDATED"


class TaskEvent(str, Enum):
    """Event tags published on the task topic."""
    CREATED = "CREATED"
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
    ARCHIVED = "ARCHIVED"
    UPDATED = "UPDATED"


# ─── Cache Keys ──────────────────────────────────────────────────

# One key per collection; any mutation of the entity type drops the whole key.
PROJECTS_CACHE_KEY = "projects"
TASKS_CACHE_KEY = "tasks"

DEFAULT_PROJECT_STATUS = ProjectStatus.IN_PROGRESS
DEFAULT_TASK_STATUS = TaskStatus.PENDING
