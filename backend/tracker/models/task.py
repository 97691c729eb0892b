"""Task ORM — persists a unit of work belonging to exactly one project.

Invariants:
    - project_id is a non-nullable FK to projects.id
    - ARCHIVED marks a soft-deleted task

Design Decisions:
    - status default lives in the schema layer too (PENDING) so the row and the
      response agree even when the body omits it
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from tracker.core.domain_types import DEFAULT_TASK_STATUS
from tracker.db.base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Task(Base):
    """Task entity."""
    __tablename__ = "tasks"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=DEFAULT_TASK_STATUS.value,
    )
    project_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("projects.id"), nullable=False,
        index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
        onupdate=_utcnow,
    )

    project: Mapped["Project"] = relationship(
        "Project", back_populates="tasks",
    )
