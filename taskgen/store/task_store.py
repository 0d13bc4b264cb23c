"""In-process task list mirrored to a persistence slot."""

import json
import logging
import threading
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Awaitable, Callable, Iterable, Mapping, Protocol

import anyio
from pydantic import TypeAdapter, ValidationError
from ulid import ULID

from ..config import DEFAULT_STORAGE_SLOT
from ..errors import PersistenceParseError, RelayError
from ..models import CompletionEnvelope, Task, TaskCandidate, TaskSummary, TaskUpdate
from ..relay import RelayResponse

logger = logging.getLogger(__name__)

Notifier = Callable[[bytes], Awaitable[RelayResponse]]

_task_list_adapter = TypeAdapter(list[Task])


class SlotStorage(Protocol):
    """Persistence port: one serialized value per named slot."""

    def read(self, name: str) -> str | None: ...

    def write(self, name: str, value: str) -> None: ...

    def delete(self, name: str) -> None: ...


@dataclass
class ToggleOutcome:
    """Result of a completion toggle."""

    task: Task
    notified: bool = False
    delivered: bool | None = None
    error: str | None = None


def encode_tasks(tasks: Iterable[Task]) -> str:
    """Serialize tasks as a JSON array."""
    return json.dumps([task.model_dump() for task in tasks])


def decode_tasks(raw: str) -> list[Task]:
    """Parse a serialized task list."""
    try:
        return _task_list_adapter.validate_json(raw)
    except ValidationError as e:
        raise PersistenceParseError(str(e)) from e


def utc_timestamp() -> str:
    """ISO 8601 UTC time with millisecond precision."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def build_completion_envelope(task: Task, timestamp: str) -> CompletionEnvelope:
    return CompletionEnvelope(
        task=TaskSummary(
            name=task.name,
            description=task.description,
            timeframe=task.timeframe,
        ),
        timestamp=timestamp,
    )


class TaskListStore:
    """Holds the current task list and mirrors every change to storage.

    The list is read from the storage slot once by ``load()``. Each mutation
    rewrites the whole slot; a list that becomes empty deletes the slot.
    Mutations hold a lock through the write, so the slot always receives
    snapshots in mutation order, whichever thread performs them.
    """

    def __init__(
        self,
        storage: SlotStorage,
        notify: Notifier,
        slot: str = DEFAULT_STORAGE_SLOT,
        clock: Callable[[], str] = utc_timestamp,
    ):
        self._storage = storage
        self._notify = notify
        self._slot = slot
        self._clock = clock
        self._tasks: list[Task] = []
        self._lock = threading.Lock()

    def load(self) -> list[Task]:
        """Initialize the list from storage. Unreadable data yields an empty list."""
        raw = self._storage.read(self._slot)
        if raw is None:
            self._tasks = []
            return self.tasks
        try:
            self._tasks = decode_tasks(raw)
        except PersistenceParseError as e:
            logger.warning("Error loading tasks from storage: %s", e)
            self._tasks = []
        return self.tasks

    @property
    def tasks(self) -> list[Task]:
        return list(self._tasks)

    @property
    def completed_count(self) -> int:
        return sum(1 for task in self._tasks if task.completed)

    def get(self, task_id: str) -> Task | None:
        for task in self._tasks:
            if task.id == task_id:
                return task
        return None

    def set_all(self, candidates: Iterable[TaskCandidate]) -> list[Task]:
        """Replace the whole list with freshly identified tasks."""
        tasks = [
            Task(
                id=str(ULID()),
                name=candidate.name,
                description=candidate.description,
                timeframe=candidate.timeframe,
            )
            for candidate in candidates
        ]
        with self._lock:
            self._tasks = tasks
            self._persist()
        return self.tasks

    def update(self, task_id: str, fields: TaskUpdate | Mapping[str, Any]) -> Task | None:
        """Merge edited fields into a task. Unknown ids are ignored."""
        if not isinstance(fields, TaskUpdate):
            fields = TaskUpdate.model_validate(fields)
        changes = fields.model_dump(exclude_unset=True, exclude_none=True)
        return self._replace(task_id, changes)

    async def toggle_completion(self, task_id: str) -> ToggleOutcome | None:
        """Flip a task's completion flag.

        Completing a task sends one webhook notification. The toggle is kept
        whatever the outcome of the notification. The returned task reflects
        the store after the notification, including changes made meanwhile.
        """
        task = await anyio.to_thread.run_sync(self._flip, task_id)
        if task is None:
            return None

        outcome = ToggleOutcome(task=task)
        if not task.completed:
            return outcome

        outcome.notified = True
        outcome.error = await self._send_completion(task)
        outcome.delivered = outcome.error is None
        outcome.task = self.get(task_id) or task
        return outcome

    async def _send_completion(self, task: Task) -> str | None:
        envelope = build_completion_envelope(task, self._clock())
        try:
            response = await self._notify(envelope.model_dump_json().encode("utf-8"))
        except RelayError as e:
            logger.error("Webhook error for task %s: %s", task.id, e)
            return "Failed to send completion notification."

        if not response.ok:
            logger.error(
                "Webhook request failed for task %s with status %d",
                task.id,
                response.status_code,
            )
            return "Failed to send completion notification."
        return None

    def _flip(self, task_id: str) -> Task | None:
        with self._lock:
            task = self.get(task_id)
            if task is None:
                return None
            return self._replace_locked(task_id, {"completed": not task.completed})

    def _replace(self, task_id: str, changes: dict[str, Any]) -> Task | None:
        with self._lock:
            return self._replace_locked(task_id, changes)

    def _replace_locked(self, task_id: str, changes: dict[str, Any]) -> Task | None:
        for index, task in enumerate(self._tasks):
            if task.id == task_id:
                updated = task.model_copy(update=changes)
                self._tasks[index] = updated
                self._persist()
                return updated
        return None

    def _persist(self) -> None:
        if self._tasks:
            self._storage.write(self._slot, encode_tasks(self._tasks))
        else:
            self._storage.delete(self._slot)
