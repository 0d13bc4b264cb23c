"""Task generation API router."""

import logging

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from ..agents.task_generator import TaskGenerator
from ..dependencies import get_generator
from ..errors import GenerationFailed, InvalidInput
from ..models import GenerateRequest, TaskList

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["generate"])

INVALID_CONTENT = "Content is required and must be a string"


def error_response(message: str, status_code: int) -> JSONResponse:
    return JSONResponse({"error": message}, status_code=status_code)


@router.post("/generate-tasks", response_model=TaskList)
async def generate_tasks(
    request: Request, generator: TaskGenerator = Depends(get_generator)
):
    """Generate 3-5 tasks for the given context."""
    try:
        body = GenerateRequest.model_validate(await request.json())
    except (ValueError, ValidationError):
        return error_response(INVALID_CONTENT, status.HTTP_400_BAD_REQUEST)

    try:
        tasks = await generator.generate(body.content, body.threadId)
    except InvalidInput:
        return error_response(INVALID_CONTENT, status.HTTP_400_BAD_REQUEST)
    except GenerationFailed:
        logger.exception("Error generating tasks")
        return error_response(
            "Failed to generate tasks", status.HTTP_500_INTERNAL_SERVER_ERROR
        )
    return TaskList(tasks=tasks)
