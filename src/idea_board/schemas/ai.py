"""Schemas for the AI workshop endpoints."""

from typing import Literal

from pydantic import Field

from .common import CamelModel


class ChatMessage(CamelModel):
    """One turn of the workshop conversation held by the client."""

    role: Literal["user", "assistant"]
    content: str


class IdeaDraft(CamelModel):
    """Title and description of the idea being workshopped."""

    title: str = ""
    description: str = ""


class DevelopRequest(CamelModel):
    """Conversation so far, plus the idea when the conversation is empty."""

    messages: list[ChatMessage] = Field(default_factory=list)
    initial_idea: IdeaDraft | None = None


class DevelopResponse(CamelModel):
    """Coach reply and an advisory hint that a summary could be drafted."""

    message: str
    should_finalize: bool


class SummarizeRequest(CamelModel):
    """Full conversation and the idea it refined."""

    messages: list[ChatMessage] = Field(default_factory=list)
    idea: IdeaDraft


class SummarizeResponse(CamelModel):
    """Structured summary text, unparsed."""

    summary: str
