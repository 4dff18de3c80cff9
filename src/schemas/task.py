"""Task schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, model_validator

from src.models.enums import TaskStatus

# Fields a client may change after creation
MUTABLE_TASK_FIELDS = ("title", "description", "status", "due_date")


class TaskCreate(BaseModel):
    """Create a new task. The owner is always the caller."""

    model_config = ConfigDict(populate_by_name=True)

    title: str = Field(..., min_length=1, max_length=255)
    description: str | None = Field(None, max_length=5000)
    status: TaskStatus = TaskStatus.TODO
    due_date: datetime | None = Field(None, alias="dueDate")


class TaskUpdate(BaseModel):
    """Partially update a task."""

    model_config = ConfigDict(populate_by_name=True)

    title: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = Field(None, max_length=5000)
    status: TaskStatus | None = None
    due_date: datetime | None = Field(None, alias="dueDate")

    @model_validator(mode="after")
    def reject_null_required_fields(self) -> "TaskUpdate":
        """Title and status may be omitted but not cleared."""
        for field in ("title", "status"):
            if field in self.model_fields_set and getattr(self, field) is None:
                raise ValueError(f"{field} cannot be null")
        return self

    def changes(self) -> dict:
        """Return the allow-listed fields the client actually sent."""
        return {
            field: getattr(self, field)
            for field in MUTABLE_TASK_FIELDS
            if field in self.model_fields_set
        }


class TaskReplace(TaskUpdate):
    """Full update of a task; title is required."""

    title: str = Field(..., min_length=1, max_length=255)


class TaskResponse(BaseModel):
    """Task response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: str | None
    status: TaskStatus
    due_date: datetime | None
    owner_id: int
    created_at: datetime
    updated_at: datetime


class TaskEnvelope(BaseModel):
    """Single task wrapper."""

    task: TaskResponse


class TaskListResponse(BaseModel):
    """Task list wrapper."""

    tasks: list[TaskResponse]
