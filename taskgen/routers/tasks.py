"""Task list router: JSON API and HTMX fragments for the page."""

import logging
from html import escape

from fastapi import APIRouter, Depends, Form, HTTPException, status
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import HTMLResponse

from ..agents.task_generator import TaskGenerator
from ..dependencies import get_generator, get_store
from ..errors import GenerationFailed, InvalidInput
from ..models import Task, TaskListResponse, TaskUpdate, ToggleResponse
from ..store import TaskListStore, ToggleOutcome

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/tasks", tags=["tasks"])


# =============================================================================
# Helper Functions
# =============================================================================


def render_notice(title: str, message: str, kind: str = "info") -> str:
    """Render a dismissible notice, appended out-of-band to #notices."""
    return f"""
    <div hx-swap-oob="beforeend:#notices">
        <div class="notice notice-{kind}" role="alert">
            <strong>{escape(title)}</strong> {escape(message)}
            <button type="button" class="notice-close"
                    onclick="this.parentElement.remove()">&times;</button>
        </div>
    </div>
    """


def render_counter(store: TaskListStore, oob: bool = False) -> str:
    """Render the "X of Y completed" counter."""
    swap = ' hx-swap-oob="true"' if oob else ""
    return (
        f'<div id="counter" class="counter"{swap}>'
        f"{store.completed_count} of {len(store.tasks)} completed</div>"
    )


def render_task_item(task: Task) -> str:
    """Render a single task as HTML."""
    task_id = escape(task.id)
    done = " completed" if task.completed else ""
    checked = " checked" if task.completed else ""
    check_mark = '<span class="check-mark">&#10004;</span>' if task.completed else ""
    return f"""
    <li id="task-{task_id}" class="task-item{done}">
        <input
            type="checkbox"
            class="complete-box"
            hx-patch="/api/tasks/{task_id}/htmx/toggle"
            hx-target="#task-{task_id}"
            hx-swap="outerHTML"{checked}
        >
        <form class="task-fields" hx-patch="/api/tasks/{task_id}/htmx"
              hx-trigger="change" hx-swap="none">
            <input class="task-name" name="name" value="{escape(task.name)}"
                   placeholder="Task name">
            <textarea class="task-description" name="description" rows="2"
                      placeholder="Task description">{escape(task.description)}</textarea>
            <label class="task-timeframe">Timeframe:
                <input name="timeframe" value="{escape(task.timeframe)}"
                       placeholder="Estimated time">
            </label>
        </form>
        {check_mark}
    </li>
    """


def render_board(store: TaskListStore) -> str:
    """Render the task list section, or the empty state."""
    tasks = store.tasks
    if not tasks:
        return """
    <section id="board" class="empty-state">
        <h3>No tasks yet</h3>
        <p>Enter a context above to generate your first set of tasks.</p>
    </section>
    """
    items = "".join(render_task_item(task) for task in tasks)
    return f"""
    <section id="board">
        <div class="board-header">
            <h2>Your Tasks</h2>
            {render_counter(store)}
        </div>
        <ul id="task-list">{items}</ul>
    </section>
    """


def render_toggle_notice(outcome: ToggleOutcome) -> str:
    if not outcome.notified:
        return ""
    if outcome.delivered:
        return render_notice(
            "Webhook Sent Successfully:", "Task completion notification sent!", "success"
        )
    return render_notice(
        "Webhook Failed:", "Failed to send completion notification.", "error"
    )


def toggle_response(outcome: ToggleOutcome) -> ToggleResponse:
    return ToggleResponse(
        task=outcome.task,
        notified=outcome.notified,
        delivered=outcome.delivered,
        error=outcome.error,
    )


def task_not_found() -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Task not found")


# =============================================================================
# HTMX Endpoints (HTML Fragments) - Must be defined BEFORE /{task_id} routes
# =============================================================================


@router.get("/htmx", response_class=HTMLResponse)
def board_htmx(store: TaskListStore = Depends(get_store)):
    """Get the task list as HTML fragment."""
    return render_board(store)


@router.post("/htmx/generate", response_class=HTMLResponse)
async def generate_htmx(
    context: str = Form(""),
    threadId: str | None = Form(None),
    store: TaskListStore = Depends(get_store),
    generator: TaskGenerator = Depends(get_generator),
):
    """Generate a new task list and return the refreshed board."""
    try:
        candidates = await generator.generate(context, threadId)
    except InvalidInput:
        notice = render_notice(
            "Context Required:", "Please enter a context to generate tasks.", "warning"
        )
        return render_board(store) + notice
    except GenerationFailed:
        logger.exception("Error generating tasks")
        notice = render_notice(
            "Generation Failed:", "Failed to generate tasks. Please try again.", "error"
        )
        return render_board(store) + notice

    tasks = await run_in_threadpool(store.set_all, candidates)
    notice = render_notice(
        "Tasks Generated:", f"Generated {len(tasks)} tasks successfully!", "success"
    )
    return render_board(store) + notice


# =============================================================================
# REST API Endpoints (JSON)
# =============================================================================


@router.get("", response_model=TaskListResponse)
def list_tasks(store: TaskListStore = Depends(get_store)):
    """Get the current task list."""
    tasks = store.tasks
    return TaskListResponse(tasks=tasks, count=len(tasks), completed=store.completed_count)


@router.get("/{task_id}", response_model=Task)
def get_task(task_id: str, store: TaskListStore = Depends(get_store)):
    """Get a task by ID."""
    task = store.get(task_id)
    if not task:
        raise task_not_found()
    return task


@router.patch("/{task_id}", response_model=Task)
def update_task_endpoint(
    task_id: str, task_data: TaskUpdate, store: TaskListStore = Depends(get_store)
):
    """Update a task's name, description and/or timeframe."""
    task = store.update(task_id, task_data)
    if not task:
        raise task_not_found()
    return task


@router.post("/{task_id}/toggle", response_model=ToggleResponse)
async def toggle_task_endpoint(task_id: str, store: TaskListStore = Depends(get_store)):
    """Toggle a task's completion, notifying the webhook when it is completed."""
    outcome = await store.toggle_completion(task_id)
    if not outcome:
        raise task_not_found()
    return toggle_response(outcome)


# =============================================================================
# HTMX Endpoints with task_id (must be after static /htmx routes)
# =============================================================================


@router.patch("/{task_id}/htmx", response_class=HTMLResponse)
def update_task_htmx(
    task_id: str,
    name: str | None = Form(None),
    description: str | None = Form(None),
    timeframe: str | None = Form(None),
    store: TaskListStore = Depends(get_store),
):
    """Save inline edits. Nothing is swapped on the page."""
    fields = TaskUpdate(name=name, description=description, timeframe=timeframe)
    if not store.update(task_id, fields):
        raise task_not_found()
    return ""


@router.patch("/{task_id}/htmx/toggle", response_class=HTMLResponse)
async def toggle_task_htmx(task_id: str, store: TaskListStore = Depends(get_store)):
    """Toggle completion and return the re-rendered task."""
    outcome = await store.toggle_completion(task_id)
    if not outcome:
        raise task_not_found()
    return (
        render_task_item(outcome.task)
        + render_counter(store, oob=True)
        + render_toggle_notice(outcome)
    )
