"""Task schemas."""

from datetime import datetime

from pydantic import ConfigDict, Field, model_validator

from src.models.enums import TaskStatus
from src.schemas.base import CamelModel

UPDATE_FIELDS_REQUIRED = (
    "At least one field (title, description, or status) is required for update."
)


class TaskCreate(CamelModel):
    """Create a new task."""

    title: str = Field(..., min_length=1, max_length=255)
    description: str | None = Field(None, max_length=2000)


class TaskUpdate(CamelModel):
    """Partially update a task."""

    title: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = Field(None, max_length=2000)
    status: TaskStatus | None = None

    @model_validator(mode="after")
    def require_one_field(self) -> "TaskUpdate":
        """Reject an update that carries no non-empty field."""
        if not self.title and not self.description and self.status is None:
            raise ValueError(UPDATE_FIELDS_REQUIRED)
        return self


class TaskResponse(CamelModel):
    """Task response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    title: str
    description: str | None
    status: TaskStatus
    created_at: datetime
    updated_at: datetime


class TaskListMetadata(CamelModel):
    """Pagination details for a task listing."""

    total_tasks: int
    total_pages: int
    current_page: int
    limit: int


class TaskListResponse(CamelModel):
    """Paginated task listing."""

    tasks: list[TaskResponse]
    metadata: TaskListMetadata
