"""Pydantic models for tasks and the task API."""

from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator

MIN_TASKS = 3
MAX_TASKS = 5


class TaskCandidate(BaseModel):
    """A generated task before it is given an id."""

    name: str = Field(..., min_length=1, description="A clear, actionable task name")
    description: str = Field(
        ..., min_length=1, description="Detailed description of what needs to be done"
    )
    timeframe: str = Field(
        ...,
        min_length=1,
        description='Estimated time to complete (e.g., "2 hours", "30 minutes", "1 day")',
    )

    @field_validator("name", "description", "timeframe")
    @classmethod
    def reject_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value


class TaskList(BaseModel):
    """Structured output requested from the model."""

    tasks: list[TaskCandidate] = Field(
        ...,
        min_length=MIN_TASKS,
        max_length=MAX_TASKS,
        description="Array of 3-5 actionable tasks",
    )


class Task(BaseModel):
    """A task held by the store."""

    id: str
    name: str
    description: str
    timeframe: str
    completed: bool = False


class TaskUpdate(BaseModel):
    """Request model for editing a task."""

    name: str | None = None
    description: str | None = None
    timeframe: str | None = None


class TaskListResponse(BaseModel):
    """Response model for the current task list."""

    tasks: list[Task]
    count: int
    completed: int


class GenerateRequest(BaseModel):
    """Body of a generation request."""

    content: str
    threadId: Any = None


class TaskSummary(BaseModel):
    """Task fields sent with a completion notification."""

    name: str
    description: str
    timeframe: str


class CompletionEnvelope(BaseModel):
    """Webhook payload sent when a task is completed."""

    event: Literal["task_completed"] = "task_completed"
    task: TaskSummary
    timestamp: str


class ToggleResponse(BaseModel):
    """Response model for a completion toggle."""

    task: Task
    notified: bool
    delivered: bool | None = None
    error: str | None = None
