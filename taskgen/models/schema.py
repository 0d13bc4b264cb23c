"""Task list schema: output constraint for the model and response validation."""

from typing import Any

from pydantic import ValidationError

from ..errors import SchemaViolation
from .task import MAX_TASKS, MIN_TASKS, TaskCandidate, TaskList


def task_list_json_schema() -> dict[str, Any]:
    """Return the task list contract as a self-contained JSON Schema."""
    item_schema = TaskCandidate.model_json_schema()
    item_schema.pop("title", None)
    return {
        "type": "object",
        "properties": {
            "tasks": {
                "type": "array",
                "description": TaskList.model_fields["tasks"].description,
                "items": item_schema,
                "minItems": MIN_TASKS,
                "maxItems": MAX_TASKS,
            }
        },
        "required": ["tasks"],
    }


def validate_task_list(data: Any) -> list[TaskCandidate]:
    """Validate a structured response and return its task candidates.

    Raises SchemaViolation when the response is not an object holding
    3-5 tasks with non-blank string name, description and timeframe.
    """
    if not isinstance(data, dict):
        raise SchemaViolation(f"expected an object, got {type(data).__name__}")
    try:
        task_list = TaskList.model_validate(data)
    except ValidationError as e:
        raise SchemaViolation(str(e)) from e
    return task_list.tasks
