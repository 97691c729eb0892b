"""Task Schemas — create/update bodies and the public task shape.

Invariants:
    - TaskCreate.name: 1-200 chars after stripping
    - TaskUpdate.status is required and must be a TaskStatus member
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from tracker.core.domain_types import TaskStatus


class TaskCreate(BaseModel):
    """Task creation body — status defaults to PENDING when omitted."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    name: str = Field(min_length=1, max_length=200)
    status: TaskStatus | None = None

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name cannot be empty or whitespace")
        return v


class TaskUpdate(BaseModel):
    status: TaskStatus


class TaskResponse(BaseModel):
    """Public task shape."""
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True,
    )

    id: UUID
    name: str
    status: str
    project_id: UUID
    created_at: datetime
    updated_at: datetime
