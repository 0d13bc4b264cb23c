"""Models package."""

from .schema import task_list_json_schema, validate_task_list
from .task import (
    MAX_TASKS,
    MIN_TASKS,
    CompletionEnvelope,
    GenerateRequest,
    Task,
    TaskCandidate,
    TaskList,
    TaskListResponse,
    TaskSummary,
    TaskUpdate,
    ToggleResponse,
)

__all__ = [
    "MIN_TASKS",
    "MAX_TASKS",
    "TaskCandidate",
    "TaskList",
    "Task",
    "TaskUpdate",
    "TaskListResponse",
    "GenerateRequest",
    "TaskSummary",
    "CompletionEnvelope",
    "ToggleResponse",
    "task_list_json_schema",
    "validate_task_list",
]
