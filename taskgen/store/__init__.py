"""Task list store package."""

from .task_store import (
    SlotStorage,
    TaskListStore,
    ToggleOutcome,
    build_completion_envelope,
    decode_tasks,
    encode_tasks,
)

__all__ = [
    "SlotStorage",
    "TaskListStore",
    "ToggleOutcome",
    "build_completion_envelope",
    "decode_tasks",
    "encode_tasks",
]
