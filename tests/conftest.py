from types import SimpleNamespace

import httpx
import pytest
from fastapi.testclient import TestClient

from taskgen.agents.task_generator import TaskGenerator
from taskgen.config import Settings
from taskgen.db import MemorySlotStorage
from taskgen.main import app
from taskgen.relay import WebhookRelay
from taskgen.store import TaskListStore

from .fakes import PC_TASKS, WEBHOOK_URL, FakeAnthropic, RecordingNotifier, tool_response


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def fake_anthropic():
    return FakeAnthropic(response=tool_response({"tasks": PC_TASKS}))


@pytest.fixture
def generator(fake_anthropic):
    return TaskGenerator(model="test-model", client=fake_anthropic)


@pytest.fixture
def storage():
    return MemorySlotStorage()


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def store(storage, notifier):
    return TaskListStore(storage, notify=notifier)


@pytest.fixture
def sink():
    """Records requests reaching the webhook endpoint."""
    state = SimpleNamespace(requests=[], status_code=200, body=b"received", error=None)

    def handler(request: httpx.Request) -> httpx.Response:
        state.requests.append(request)
        if state.error is not None:
            raise state.error
        return httpx.Response(
            state.status_code, content=state.body, headers={"content-type": "text/plain"}
        )

    state.handler = handler
    return state


@pytest.fixture
def relay(sink):
    client = httpx.AsyncClient(transport=httpx.MockTransport(sink.handler))
    return WebhookRelay(WEBHOOK_URL, client=client)


@pytest.fixture
def client(generator, relay, storage):
    """TestClient wired to in-memory services, without running the lifespan."""
    store = TaskListStore(storage, notify=relay.relay)
    store.load()
    app.state.settings = Settings(webhook_url=WEBHOOK_URL, storage="memory")
    app.state.generator = generator
    app.state.relay = relay
    app.state.store = store
    return TestClient(app)
