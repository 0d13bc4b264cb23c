from types import SimpleNamespace

import httpx
import pytest
from anthropic import APIConnectionError

from taskgen.agents.task_generator import TaskGenerator, build_prompt
from taskgen.agents.task_generator.agent import TOOL_NAME
from taskgen.errors import GenerationFailed, InvalidInput

from .fakes import PC_TASKS, FakeAnthropic, tool_response


@pytest.mark.anyio
async def test_generate_returns_validated_tasks(generator, fake_anthropic):
    tasks = await generator.generate("I'd like to build a PC", "thread_1")

    assert [t.name for t in tasks] == [t["name"] for t in PC_TASKS]
    assert tasks[-1].timeframe == "1 hour"
    assert len(fake_anthropic.messages.calls) == 1


@pytest.mark.anyio
async def test_request_forces_schema_tool(generator, fake_anthropic):
    await generator.generate("I'd like to build a PC")

    call = fake_anthropic.messages.calls[0]
    assert call["model"] == "test-model"
    assert call["temperature"] == 0.7
    assert call["tool_choice"] == {"type": "tool", "name": TOOL_NAME}
    assert call["tools"][0]["input_schema"]["properties"]["tasks"]["maxItems"] == 5
    assert call["messages"] == [
        {"role": "user", "content": build_prompt("I'd like to build a PC")}
    ]


def test_prompt_embeds_context_verbatim():
    prompt = build_prompt('Plan a "surprise" party')
    assert 'Context: "Plan a "surprise" party"' in prompt
    assert "3-5" in prompt


@pytest.mark.parametrize("context", ["", "   ", "\n\t", None, 42])
@pytest.mark.anyio
async def test_invalid_context_makes_no_request(generator, fake_anthropic, context):
    with pytest.raises(InvalidInput):
        await generator.generate(context)
    assert fake_anthropic.messages.calls == []


@pytest.mark.anyio
async def test_provider_error_becomes_generation_failed():
    error = APIConnectionError(
        request=httpx.Request("POST", "https://api.anthropic.com/v1/messages")
    )
    generator = TaskGenerator(model="test-model", client=FakeAnthropic(error=error))

    with pytest.raises(GenerationFailed) as exc_info:
        await generator.generate("Learn to juggle")
    assert exc_info.value.__cause__ is error


@pytest.mark.parametrize(
    "data",
    [
        {"tasks": PC_TASKS[:2]},
        {"tasks": PC_TASKS + PC_TASKS[:2]},
        {"tasks": [dict(t, name="") for t in PC_TASKS]},
        {"summary": "no tasks here"},
    ],
)
@pytest.mark.anyio
async def test_schema_violation_becomes_generation_failed(data):
    generator = TaskGenerator(
        model="test-model", client=FakeAnthropic(response=tool_response(data))
    )
    with pytest.raises(GenerationFailed):
        await generator.generate("Learn to juggle")


@pytest.mark.anyio
async def test_missing_tool_block_becomes_generation_failed():
    response = SimpleNamespace(content=[SimpleNamespace(type="text", text="Sure!")])
    generator = TaskGenerator(model="test-model", client=FakeAnthropic(response=response))

    with pytest.raises(GenerationFailed):
        await generator.generate("Learn to juggle")


@pytest.mark.anyio
async def test_missing_api_key_becomes_generation_failed():
    generator = TaskGenerator(model="test-model", api_key=None)
    with pytest.raises(GenerationFailed):
        await generator.generate("Learn to juggle")


@pytest.mark.anyio
async def test_logs_thread_id(generator, caplog):
    with caplog.at_level("INFO", logger="taskgen.agents.task_generator.agent"):
        await generator.generate("Learn to juggle", "thread_12345")
    assert "thread_12345" in caplog.text
