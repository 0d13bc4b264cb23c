"""FastAPI dependencies resolving the services built at startup."""

from fastapi import Request

from .agents.task_generator import TaskGenerator
from .relay import WebhookRelay
from .store import TaskListStore


def get_store(request: Request) -> TaskListStore:
    return request.app.state.store


def get_generator(request: Request) -> TaskGenerator:
    return request.app.state.generator


def get_relay(request: Request) -> WebhookRelay:
    return request.app.state.relay
