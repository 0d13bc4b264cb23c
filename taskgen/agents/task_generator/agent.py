"""Task generation client using the Anthropic Messages API."""

import logging
import time
from typing import Any

from anthropic import AnthropicError, AsyncAnthropic

from ...errors import GenerationFailed, InvalidInput, SchemaViolation
from ...models import TaskCandidate, task_list_json_schema, validate_task_list

logger = logging.getLogger(__name__)

TOOL_NAME = "record_tasks"
TOOL_DESCRIPTION = "Record the 3-5 actionable tasks generated for the user's goal."

PROMPT_TEMPLATE = """\
Based on the following context, generate 3-5 specific, actionable tasks that would help someone accomplish their goal. Each task should be practical and achievable.

Context: "{context}"

Please provide tasks that are:
- Specific and actionable
- Realistic in scope
- Properly sequenced if order matters
- Include reasonable time estimates

Focus on breaking down the main goal into concrete steps that can be completed and checked off."""


def build_prompt(context: str) -> str:
    """Embed the user's context verbatim in the generation instruction."""
    return PROMPT_TEMPLATE.format(context=context)


def new_thread_id() -> str:
    """Opaque per-page identifier, logged with generation requests."""
    return f"thread_{int(time.time() * 1000)}"


class TaskGenerator:
    """Turns a free-text goal into validated task candidates."""

    def __init__(
        self,
        model: str,
        temperature: float = 0.7,
        max_tokens: int = 1024,
        api_key: str | None = None,
        client: Any = None,
    ):
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens
        self._api_key = api_key
        self._client = client

    @property
    def client(self) -> Any:
        if self._client is None:
            if not self._api_key:
                raise GenerationFailed("ANTHROPIC_API_KEY is not configured")
            self._client = AsyncAnthropic(api_key=self._api_key)
        return self._client

    async def generate(
        self, context: Any, thread_id: Any = None
    ) -> list[TaskCandidate]:
        """Generate 3-5 tasks for a context.

        Raises InvalidInput for a missing or blank context before any
        request is made, and GenerationFailed for every provider or
        schema error.
        """
        if not isinstance(context, str) or not context.strip():
            raise InvalidInput("Content is required and must be a string")

        logger.info("Generating tasks for thread %s", thread_id)

        try:
            response = await self.client.messages.create(
                model=self.model,
                max_tokens=self.max_tokens,
                temperature=self.temperature,
                tools=[
                    {
                        "name": TOOL_NAME,
                        "description": TOOL_DESCRIPTION,
                        "input_schema": task_list_json_schema(),
                    }
                ],
                tool_choice={"type": "tool", "name": TOOL_NAME},
                messages=[{"role": "user", "content": build_prompt(context)}],
            )
            tasks = validate_task_list(_extract_tool_input(response))
        except (AnthropicError, SchemaViolation) as e:
            logger.error("Error generating tasks: %s", e)
            raise GenerationFailed("Failed to generate tasks") from e

        logger.info("Generated %d tasks for thread %s", len(tasks), thread_id)
        return tasks


def _extract_tool_input(response: Any) -> Any:
    for block in response.content:
        if block.type == "tool_use" and block.name == TOOL_NAME:
            return block.input
    raise SchemaViolation("response did not contain a task list")
