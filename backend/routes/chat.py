"""Transcript, chat input and command history endpoints."""

from fastapi import APIRouter, Depends

from mother.session import ChatSession

from .deps import get_session
from .models import ChatBody, ChatResult, TranscriptView

router = APIRouter()


def _transcript(session: ChatSession) -> dict:
    return {
        "messages": session.view(),
        "suggestions": session.suggestions,
        "processing": session.processing,
        "booting": session.state.boot_in_progress,
        "awaiting_model_selection": session.state.awaiting_model_selection,
    }


@router.get("/transcript", response_model=TranscriptView)
async def get_transcript(session: ChatSession = Depends(get_session)):
    """Current transcript as shown (partial text while a reply streams)."""
    return _transcript(session)


@router.post("/chat", response_model=ChatResult)
async def chat(body: ChatBody, session: ChatSession = Depends(get_session)):
    """Submit one line of crew input."""
    outcome = await session.submit(body.message)
    return {
        **_transcript(session),
        "intent": outcome.intent.value if outcome else None,
        "open_settings": bool(outcome and outcome.open_settings),
    }


@router.get("/history")
async def get_history(session: ChatSession = Depends(get_session)):
    """Recent distinct inputs, oldest first."""
    return session.history.entries
