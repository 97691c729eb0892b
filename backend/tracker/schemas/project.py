"""Project Schemas — create/update bodies and the public project shape.

Invariants:
    - name: 1-200 chars after stripping, on create and on update
    - ProjectUpdate is partial: only fields present in the body are written
    - name and status may be omitted from an update but never set to null
    - deadline parsed as a calendar date

Design Decisions:
    - status on create is optional; the service fills in IN_PROGRESS
    - ProjectResponse.model_dump(mode="json", by_alias=True) is also the event payload
"""

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from tracker.core.domain_types import Priority, ProjectStatus

_wire_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ProjectCreate(BaseModel):
    """Project creation body."""
    model_config = _wire_config

    name: str = Field(min_length=1, max_length=200)
    description: str | None = Field(None, max_length=10_000)
    deadline: date | None = None
    priority: Priority | None = None
    client_name: str | None = Field(None, max_length=200)
    status: ProjectStatus | None = None

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name cannot be empty or whitespace")
        return v


class ProjectUpdate(BaseModel):
    """Partial project update body."""
    model_config = _wire_config

    name: str | None = Field(None, min_length=1, max_length=200)
    description: str | None = Field(None, max_length=10_000)
    deadline: date | None = None
    priority: Priority | None = None
    client_name: str | None = Field(None, max_length=200)
    status: ProjectStatus | None = None

    @field_validator("name", "status", mode="before")
    @classmethod
    def reject_null(cls, v):
        if v is None:
            raise ValueError("field cannot be null")
        return v

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name cannot be empty or whitespace")
        return v

    def changed_fields(self) -> dict:
        """Fields present in the request body, enums flattened to values."""
        fields = self.model_dump(exclude_unset=True)
        return {
            k: (v.value if isinstance(v, (Priority, ProjectStatus)) else v)
            for k, v in fields.items()
        }


class ProjectResponse(BaseModel):
    """Public project shape."""
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True,
    )

    id: UUID
    name: str
    description: str | None = None
    deadline: date | None = None
    priority: str | None = None
    client_name: str | None = None
    status: str
    user_id: UUID
    created_at: datetime
    updated_at: datetime
