"""Project ORM — persists a workflow owned by a user.

Invariants:
    - id is UUID primary key (client-side default)
    - name is non-nullable
    - status defaults to IN_PROGRESS; INACTIVE marks a soft-deleted project
    - rows are never physically deleted by the API

Design Decisions:
    - deadline as Date: the API accepts calendar dates, not instants
    - No cascade on tasks: soft delete leaves tasks untouched
"""

import uuid
from datetime import date, datetime, timezone

from sqlalchemy import String, Text, Date, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from tracker.core.domain_types import DEFAULT_PROJECT_STATUS
from tracker.db.base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Project(Base):
    """Project entity — owns zero or more tasks."""
    __tablename__ = "projects"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    deadline: Mapped[date | None] = mapped_column(Date, nullable=True)
    priority: Mapped[str | None] = mapped_column(String(10), nullable=True)
    client_name: Mapped[str | None] = mapped_column(
        String(200), nullable=True,
    )
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=DEFAULT_PROJECT_STATUS.value,
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("users.id"), nullable=False, index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
        onupdate=_utcnow,
    )

    user: Mapped["User"] = relationship("User", back_populates="projects")
    tasks: Mapped[list["Task"]] = relationship(
        "Task", back_populates="project",
    )
