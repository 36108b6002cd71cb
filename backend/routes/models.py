"""Pydantic request/response models for API endpoints."""

from typing import Any

from pydantic import BaseModel

from mother.models import MessageView


class ChatBody(BaseModel):
    message: str


class TranscriptView(BaseModel):
    messages: list[MessageView]
    suggestions: list[str]
    processing: bool
    booting: bool
    awaiting_model_selection: bool


class ChatResult(TranscriptView):
    intent: str | None = None
    open_settings: bool = False


class SearchHitView(BaseModel):
    kind: str
    record: dict[str, Any]
