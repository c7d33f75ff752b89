from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import anthropic
import pytest

from idea_board.core.errors import UpstreamFailure, ValidationError
from idea_board.services.ai_workshop import (
    AIWorkshopService,
    AnthropicCompletionClient,
    ChatTurn,
    opening_turn,
    render_transcript,
    should_finalize,
)


@pytest.fixture
def sdk_client():
    client = MagicMock()
    client.messages.create = AsyncMock(
        return_value=SimpleNamespace(content=[SimpleNamespace(type="text", text="Tell me more")])
    )
    return client


@pytest.fixture
def completion_client(sdk_client):
    client = AnthropicCompletionClient(api_key="test-key", model="test-model", timeout_seconds=5)
    client._client = sdk_client
    return client


@pytest.mark.asyncio
async def test_complete_sends_system_prompt_and_turns(completion_client, sdk_client):
    turns = [ChatTurn(role="user", content="Hi"), ChatTurn(role="assistant", content="Hello")]

    reply = await completion_client.complete("be helpful", turns, max_tokens=42)

    assert reply == "Tell me more"
    sdk_client.messages.create.assert_awaited_once_with(
        model="test-model",
        max_tokens=42,
        system="be helpful",
        messages=[
            {"role": "user", "content": "Hi"},
            {"role": "assistant", "content": "Hello"},
        ],
    )


@pytest.mark.asyncio
async def test_complete_wraps_sdk_errors(completion_client, sdk_client):
    sdk_client.messages.create.side_effect = anthropic.AnthropicError("boom")

    with pytest.raises(UpstreamFailure) as excinfo:
        await completion_client.complete("sys", [ChatTurn(role="user", content="Hi")], max_tokens=10)

    assert excinfo.value.status_code == 500
    assert excinfo.value.message == "Failed to process AI request"


@pytest.mark.asyncio
async def test_complete_without_content_is_upstream_failure(completion_client, sdk_client):
    sdk_client.messages.create.return_value = SimpleNamespace(content=[])

    with pytest.raises(UpstreamFailure):
        await completion_client.complete("sys", [ChatTurn(role="user", content="Hi")], max_tokens=10)


@pytest.mark.asyncio
async def test_complete_non_text_block_yields_empty_reply(completion_client, sdk_client):
    sdk_client.messages.create.return_value = SimpleNamespace(
        content=[SimpleNamespace(type="tool_use", id="t1")]
    )

    reply = await completion_client.complete("sys", [ChatTurn(role="user", content="Hi")], max_tokens=10)

    assert reply == ""


def test_sdk_client_built_lazily_without_retries(mocker):
    factory = mocker.patch("idea_board.services.ai_workshop.anthropic.AsyncAnthropic")
    client = AnthropicCompletionClient(api_key="k", model="m", timeout_seconds=7)
    factory.assert_not_called()

    assert client._get_client() is factory.return_value
    assert client._get_client() is factory.return_value
    factory.assert_called_once_with(api_key="k", timeout=7, max_retries=0)


def test_opening_turn_and_transcript():
    turn = opening_turn("Dark mode", "Add a dark theme")
    assert turn.role == "user"
    assert turn.content.startswith("I have a product idea I'd like to develop.")
    assert "Title: Dark mode\n\nDescription: Add a dark theme" in turn.content

    rendered = render_transcript(
        [ChatTurn(role="user", content="A"), ChatTurn(role="assistant", content="B")]
    )
    assert rendered == "User: A\n\nAI Coach: B"


@pytest.mark.parametrize(
    ("prior_turns", "reply", "expected"),
    [
        (0, "Who are the users?", False),
        (3, "Who are the users?", False),
        (4, "Who are the users?", True),
        (1, "Here is a draft Problem Statement", True),
        (1, "Want a SUMMARY?", True),
    ],
)
def test_should_finalize(prior_turns, reply, expected):
    assert should_finalize(prior_turns, reply) is expected


@pytest.mark.asyncio
async def test_service_develop_requires_input():
    client = AsyncMock()
    service = AIWorkshopService(client)

    with pytest.raises(ValidationError):
        await service.develop([])

    client.complete.assert_not_awaited()


@pytest.mark.asyncio
async def test_service_develop_with_blank_idea_still_opens():
    client = AsyncMock()
    client.complete.return_value = "What problem does it solve?"
    service = AIWorkshopService(client)

    result = await service.develop([], initial_title="", initial_description="")

    assert result.message == "What problem does it solve?"
    assert result.should_finalize is False
    (turns,) = client.complete.await_args.args[1:]
    assert len(turns) == 1 and turns[0].role == "user"
