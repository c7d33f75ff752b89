# src/idea_board/api/v1/endpoints/ai.py
"""AI workshop endpoints: develop an idea in conversation, then summarize it."""

from fastapi import APIRouter

from idea_board.api.v1.dependencies import AIWorkshopServiceDep, CurrentUserDep
from idea_board.schemas.ai import (
    ChatMessage,
    DevelopRequest,
    DevelopResponse,
    SummarizeRequest,
    SummarizeResponse,
)
from idea_board.services.ai_workshop import ChatTurn

router = APIRouter(prefix="/ai", tags=["ai"])


def _turns(messages: list[ChatMessage]) -> list[ChatTurn]:
    return [ChatTurn(role=message.role, content=message.content) for message in messages]


@router.post("/develop", response_model=DevelopResponse)
async def develop(
    payload: DevelopRequest,
    current_user: CurrentUserDep,
    service: AIWorkshopServiceDep,
) -> DevelopResponse:
    """Return the coach's next reply for the conversation so far.

    ``shouldFinalize`` only hints that a summary could be drafted; the
    conversation may continue regardless.
    """
    initial = payload.initial_idea
    result = await service.develop(
        _turns(payload.messages),
        initial_title=initial.title if initial else None,
        initial_description=initial.description if initial else None,
    )
    return DevelopResponse(message=result.message, should_finalize=result.should_finalize)


@router.post("/summarize", response_model=SummarizeResponse)
async def summarize(
    payload: SummarizeRequest,
    current_user: CurrentUserDep,
    service: AIWorkshopServiceDep,
) -> SummarizeResponse:
    """Return a structured summary of the conversation. Nothing is stored."""
    summary = await service.summarize(
        _turns(payload.messages), payload.idea.title, payload.idea.description
    )
    return SummarizeResponse(summary=summary)
