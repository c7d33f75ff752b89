"""AI workshop: a stateless bridge to the completion service.

The conversation lives with the client, which resends the whole transcript
on every call. Nothing here is persisted; a summary only reaches the database
when the client later submits it as part of an idea.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from functools import lru_cache
from typing import Literal, Protocol

import anthropic

from idea_board.core.errors import UpstreamFailure, ValidationError
from idea_board.core.settings import settings

logger = logging.getLogger(__name__)

Role = Literal["user", "assistant"]

FINALIZE_AFTER_TURNS = 4
FINALIZE_PHRASES = ("problem statement", "summary")

DEVELOP_SYSTEM_PROMPT = """You are an expert product development coach helping employees develop product ideas that could benefit a wide audience. Your role is to help think through this idea as a scalable product for many users, not just the person submitting it.

When asking questions, focus on:
1. The broader market opportunity - who are the target users/customers at scale?
2. The problem being solved - is this a widespread pain point that many people face?
3. Market validation - how do we know others have this problem too?
4. Competitive landscape - what alternatives exist? What makes this different?
5. Business viability - how could this generate value for the company?
6. Scalability - how would this work for thousands or millions of users?

Important guidelines:
- Think of this as a product that would be built for external customers or a wide internal audience
- Avoid questions that assume the submitter is the only user (e.g., don't ask "what would YOU like it to do")
- Instead ask about target user segments, market size, user research, and broad use cases
- Help identify if this solves a real problem that many people have
- Be encouraging but also help stress-test the idea's broader appeal

Keep responses concise. Ask one or two questions at a time to keep the conversation focused."""

SUMMARIZE_SYSTEM_PROMPT = """You are a product development expert. Based on the conversation below between a user and an AI coach about a product idea, create a comprehensive summary of the refined product idea as a scalable product for a broad audience.

Structure your summary with these sections:
- **Problem Statement**: What widespread problem does this product solve? Who experiences this pain point?
- **Target Market**: Who are the target users/customers? What's the potential market size or reach?
- **Proposed Solution**: What is the product and how does it work at scale?
- **Key Features**: Main features or capabilities (bullet points)
- **Differentiation**: What makes this different from existing alternatives?
- **Success Metrics**: How will success be measured? What KPIs matter?
- **Risks & Challenges**: Key risks, challenges, or open questions to address

Focus on the broader market opportunity, not just individual use cases. Be concise but thorough."""


@dataclass(frozen=True)
class ChatTurn:
    """One message of the workshop conversation."""

    role: Role
    content: str


@dataclass(frozen=True)
class DevelopResult:
    """Coach reply plus the advisory finalize hint."""

    message: str
    should_finalize: bool


class CompletionClient(Protocol):
    """Narrow interface to a chat-completion backend."""

    async def complete(
        self, system_prompt: str, turns: Sequence[ChatTurn], *, max_tokens: int
    ) -> str:
        """Return the assistant's reply text for ``turns``."""
        ...


class AnthropicCompletionClient:
    """CompletionClient backed by the Anthropic Messages API.

    The SDK client is built on first use so that a missing API key surfaces
    as an upstream failure on the AI endpoints instead of breaking startup.
    Retries are disabled; a failed call is reported straight back.
    """

    def __init__(
        self,
        *,
        api_key: str | None = None,
        model: str | None = None,
        timeout_seconds: float | None = None,
    ) -> None:
        self.model = model or settings.ai_model
        self._api_key = api_key if api_key is not None else settings.anthropic_api_key
        self._timeout = timeout_seconds if timeout_seconds is not None else settings.ai_timeout_seconds
        self._client: anthropic.AsyncAnthropic | None = None

    def _get_client(self) -> anthropic.AsyncAnthropic:
        if self._client is None:
            self._client = anthropic.AsyncAnthropic(
                api_key=self._api_key,
                timeout=self._timeout,
                max_retries=0,
            )
            logger.info("Anthropic completion client ready (%s)", self.model)
        return self._client

    async def complete(
        self, system_prompt: str, turns: Sequence[ChatTurn], *, max_tokens: int
    ) -> str:
        try:
            response = await self._get_client().messages.create(
                model=self.model,
                max_tokens=max_tokens,
                system=system_prompt,
                messages=[{"role": turn.role, "content": turn.content} for turn in turns],
            )
        except anthropic.AnthropicError as err:
            logger.error("Completion request failed: %s", err)
            raise UpstreamFailure() from err

        blocks = getattr(response, "content", None) or []
        if not blocks:
            logger.error("Completion response carried no content blocks")
            raise UpstreamFailure()
        first = blocks[0]
        return first.text if getattr(first, "type", None) == "text" else ""


@lru_cache(maxsize=1)
def get_completion_client() -> CompletionClient:
    """Return the process-wide completion client."""
    return AnthropicCompletionClient()


def opening_turn(title: str, description: str) -> ChatTurn:
    """Build the first user message from an idea that has no conversation yet."""
    return ChatTurn(
        role="user",
        content=(
            "I have a product idea I'd like to develop. Here's my initial concept:\n\n"
            f"Title: {title}\n\n"
            f"Description: {description}\n\n"
            "Please help me refine this idea by asking clarifying questions."
        ),
    )


def render_transcript(turns: Sequence[ChatTurn]) -> str:
    """Flatten a conversation into ``User:`` / ``AI Coach:`` paragraphs."""
    return "\n\n".join(
        f"{'User' if turn.role == 'user' else 'AI Coach'}: {turn.content}" for turn in turns
    )


def should_finalize(prior_turns: int, reply: str) -> bool:
    """Advisory hint that the conversation has enough material for a summary."""
    lowered = reply.lower()
    return prior_turns >= FINALIZE_AFTER_TURNS or any(
        phrase in lowered for phrase in FINALIZE_PHRASES
    )


class AIWorkshopService:
    """Develop and summarize product ideas through a CompletionClient."""

    def __init__(self, client: CompletionClient) -> None:
        self.client = client

    async def develop(
        self,
        transcript: Sequence[ChatTurn],
        initial_title: str | None = None,
        initial_description: str | None = None,
    ) -> DevelopResult:
        """Ask the coach for its next reply.

        With an empty transcript the idea's title and description become the
        opening user turn; otherwise the transcript is forwarded unchanged.

        Raises:
            ValidationError: If there is neither a transcript nor an idea.
            UpstreamFailure: If the completion service fails.
        """
        if transcript:
            turns = list(transcript)
        elif initial_title is not None or initial_description is not None:
            turns = [opening_turn(initial_title or "", initial_description or "")]
        else:
            raise ValidationError("A conversation or an initial idea is required")

        reply = await self.client.complete(
            DEVELOP_SYSTEM_PROMPT, turns, max_tokens=settings.ai_develop_max_tokens
        )
        return DevelopResult(message=reply, should_finalize=should_finalize(len(transcript), reply))

    async def summarize(
        self, transcript: Sequence[ChatTurn], title: str, description: str
    ) -> str:
        """Return the coach's structured summary of the conversation as raw text."""
        prompt = (
            f"Original Idea Title: {title}\n\n"
            f"Original Description: {description}\n\n"
            f"Development Conversation:\n{render_transcript(transcript)}\n\n"
            "Please create a structured summary of this refined product idea."
        )
        return await self.client.complete(
            SUMMARIZE_SYSTEM_PROMPT,
            [ChatTurn(role="user", content=prompt)],
            max_tokens=settings.ai_summarize_max_tokens,
        )
