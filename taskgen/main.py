"""FastAPI application entry point."""

import logging
import random
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates

from . import __version__
from .agents.task_generator import TaskGenerator, new_thread_id
from .config import BASE_DIR, Settings, get_settings
from .db import MemorySlotStorage, SqliteSlotStorage
from .logging_config import configure_logging
from .relay import WebhookRelay
from .routers import generate, tasks, webhook
from .store import TaskListStore

TEMPLATES_DIR = BASE_DIR / "templates"
STATIC_DIR = BASE_DIR / "static"

PLACEHOLDER_TEXTS = [
    "How can I prepare for exam",
    "I am preparing to move out",
    "I'd like to build a PC",
]

logger = logging.getLogger(__name__)


def build_storage(settings: Settings):
    if settings.storage == "memory":
        return MemorySlotStorage()
    return SqliteSlotStorage(settings.database_path)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build services and load the persisted task list on startup."""
    settings = get_settings()
    configure_logging(settings.log_level)

    relay = WebhookRelay(settings.webhook_url)
    store = TaskListStore(
        build_storage(settings), notify=relay.relay, slot=settings.storage_slot
    )
    store.load()
    logger.info("Loaded %d tasks from %s storage", len(store.tasks), settings.storage)

    app.state.settings = settings
    app.state.relay = relay
    app.state.store = store
    app.state.generator = TaskGenerator(
        model=settings.model,
        temperature=settings.temperature,
        max_tokens=settings.max_tokens,
        api_key=settings.anthropic_api_key,
    )
    yield
    await relay.aclose()


app = FastAPI(
    title="AI Task Generator",
    description="Break a goal into actionable tasks",
    version=__version__,
    lifespan=lifespan,
)

app.mount("/static", StaticFiles(directory=STATIC_DIR), name="static")

templates = Jinja2Templates(directory=TEMPLATES_DIR)

app.include_router(generate.router)
app.include_router(webhook.router)
app.include_router(tasks.router)


@app.get("/", response_class=HTMLResponse)
def index(request: Request):
    """Render the main page."""
    return templates.TemplateResponse(
        request,
        "index.html",
        {
            "placeholder": random.choice(PLACEHOLDER_TEXTS),
            "thread_id": new_thread_id(),
            "board": tasks.render_board(request.app.state.store),
        },
    )


@app.get("/health")
def health(request: Request):
    """Report which external collaborators are configured."""
    settings = request.app.state.settings
    return {
        "status": "healthy",
        "model_configured": bool(settings.anthropic_api_key),
        "webhook_configured": bool(settings.webhook_url),
        "storage": settings.storage,
    }


def main():
    """Run the application with uvicorn."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "taskgen.main:app",
        host=settings.host,
        port=settings.port,
    )


if __name__ == "__main__":
    main()
