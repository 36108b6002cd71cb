"""Provider gateway — one call contract over several chat-completion backends.

    send_message(text, settings) -> ProviderReply(content | error)
    fetch_models(settings)       -> list[ModelInfo]

Backends (selected by settings.ai_provider):

    "ollama"     — POST {ollama_url}/api/chat, no auth
                   Response: {"message": {"content": "..."}}
    "openai"     — POST https://api.openai.com/v1/chat/completions, Bearer auth
                   Response: {"choices": [{"message": {"content": "..."}}]}
    "google"     — POST .../v1beta/models/{model}:generateContent?key=...
                   Response: {"candidates": [{"content": {"parts": [{"text": "..."}]}}]}
    "anthropic"  — POST https://api.anthropic.com/v1/messages, x-api-key auth
                   Response: {"content": [{"text": "..."}]}

Every backend failure (missing key, unreachable host, non-2xx status,
malformed body) is raised inside the backend as ProviderError and turned
into ProviderReply.error at the gateway, so callers never see an exception
for an expected failure.
"""

from __future__ import annotations

import logging
from typing import Any, Protocol

import httpx

from mother.models import AIProvider, ModelInfo, ProviderReply, Settings

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are MU/TH/UR 6000, the AI mainframe of the USCSS Nostromo from the Alien franchise. "
    "Respond in a cold, logical manner. Keep responses brief and technical. "
    "Use terminology from the Alien universe when appropriate."
)

MAX_TOKENS = 500
TEMPERATURE = 0.7

OPENAI_URL = "https://api.openai.com/v1/chat/completions"
GOOGLE_URL = "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent"
ANTHROPIC_URL = "https://api.anthropic.com/v1/messages"
ANTHROPIC_VERSION = "2023-06-01"

# Hosted vendors expose no model listing we can use here
COMMON_MODELS: dict[str, list[str]] = {
    "openai": ["gpt-4", "gpt-3.5-turbo"],
    "google": ["gemini-pro", "gemini-pro-vision"],
    "anthropic": ["claude-3-sonnet-20240229", "claude-3-haiku-20240307"],
}


class ProviderError(RuntimeError):
    """Raised when a backend is misconfigured, unreachable or returns an error."""


# ---------------------------------------------------------------------------
# Backends
# ---------------------------------------------------------------------------

class ChatBackend(Protocol):
    label: str

    def build_request(self, message: str, settings: Settings) -> tuple[str, dict, dict, dict]:
        """Return (url, headers, params, body)."""
        ...

    def parse_response(self, data: dict) -> str: ...


class OllamaBackend:
    label = "Ollama"

    def build_request(self, message: str, settings: Settings) -> tuple[str, dict, dict, dict]:
        url = f"{settings.ollama_url.rstrip('/')}/api/chat"
        body = {
            "model": settings.current_model,
            "messages": [
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": message},
            ],
            "stream": False,
        }
        return url, {"Content-Type": "application/json"}, {}, body

    def parse_response(self, data: dict) -> str:
        message = data.get("message") or {}
        return message.get("content") or data.get("response") or "No response from Ollama"


class OpenAIBackend:
    label = "OpenAI"

    def build_request(self, message: str, settings: Settings) -> tuple[str, dict, dict, dict]:
        if not settings.openai_api_key:
            raise ProviderError("OpenAI API key not configured")
        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {settings.openai_api_key}",
        }
        body = {
            "model": settings.current_model or "gpt-3.5-turbo",
            "messages": [
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": message},
            ],
            "max_tokens": MAX_TOKENS,
            "temperature": TEMPERATURE,
        }
        return OPENAI_URL, headers, {}, body

    def parse_response(self, data: dict) -> str:
        choices = data.get("choices") or [{}]
        return (choices[0].get("message") or {}).get("content") or "No response from OpenAI"


class GoogleBackend:
    label = "Google"

    def build_request(self, message: str, settings: Settings) -> tuple[str, dict, dict, dict]:
        if not settings.google_api_key:
            raise ProviderError("Google API key not configured")
        url = GOOGLE_URL.format(model=settings.current_model or "gemini-pro")
        body = {
            "contents": [{"parts": [{"text": f"{SYSTEM_PROMPT}\n\nUser: {message}"}]}],
            "generationConfig": {
                "temperature": TEMPERATURE,
                "maxOutputTokens": MAX_TOKENS,
            },
        }
        return url, {"Content-Type": "application/json"}, {"key": settings.google_api_key}, body

    def parse_response(self, data: dict) -> str:
        try:
            return data["candidates"][0]["content"]["parts"][0]["text"] or "No response from Google"
        except (KeyError, IndexError, TypeError):
            return "No response from Google"


class AnthropicBackend:
    label = "Anthropic"

    def build_request(self, message: str, settings: Settings) -> tuple[str, dict, dict, dict]:
        if not settings.anthropic_api_key:
            raise ProviderError("Anthropic API key not configured")
        headers = {
            "Content-Type": "application/json",
            "x-api-key": settings.anthropic_api_key,
            "anthropic-version": ANTHROPIC_VERSION,
        }
        body = {
            "model": settings.current_model or "claude-3-sonnet-20240229",
            "system": SYSTEM_PROMPT,
            "messages": [{"role": "user", "content": message}],
            "max_tokens": MAX_TOKENS,
        }
        return ANTHROPIC_URL, headers, {}, body

    def parse_response(self, data: dict) -> str:
        content = data.get("content") or [{}]
        return content[0].get("text") or "No response from Anthropic"


BACKENDS: dict[AIProvider, ChatBackend] = {
    "ollama": OllamaBackend(),
    "openai": OpenAIBackend(),
    "google": GoogleBackend(),
    "anthropic": AnthropicBackend(),
}


# ---------------------------------------------------------------------------
# Gateway
# ---------------------------------------------------------------------------

class ProviderGateway:
    """Async HTTP gateway to the configured chat backend.

    Args:
        timeout:        HTTP timeout in seconds for chat calls. Defaults to 120.
        models_timeout: HTTP timeout for the model registry lookup. Defaults to 10.
    """

    def __init__(self, timeout: float = 120.0, models_timeout: float = 10.0) -> None:
        self._timeout = timeout
        self._models_timeout = models_timeout

    async def send_message(self, text: str, settings: Settings) -> ProviderReply:
        backend = BACKENDS[settings.ai_provider]
        try:
            content = await self._call(backend, text, settings)
        except ProviderError as e:
            logger.warning("provider=%s call failed: %s", settings.ai_provider, e)
            return ProviderReply(error=str(e))
        return ProviderReply(content=content)

    async def _call(self, backend: ChatBackend, text: str, settings: Settings) -> str:
        url, headers, params, body = backend.build_request(text, settings)
        logger.debug("provider call backend=%s url=%s text_len=%d", backend.label, url, len(text))

        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                resp = await client.post(url, json=body, headers=headers, params=params)
                resp.raise_for_status()
        except httpx.ConnectError as e:
            raise ProviderError(f"Cannot connect to {backend.label} at {url}") from e
        except httpx.HTTPStatusError as e:
            raise ProviderError(f"{backend.label} API error: {e.response.status_code}") from e
        except httpx.TimeoutException as e:
            raise ProviderError(f"{backend.label} timed out after {self._timeout}s") from e
        except httpx.HTTPError as e:
            raise ProviderError(f"{backend.label} transport failure: {e}") from e

        try:
            data: Any = resp.json()
        except ValueError as e:
            raise ProviderError(f"Unexpected response format from {backend.label}") from e
        if not isinstance(data, dict):
            raise ProviderError(f"Unexpected response format from {backend.label}")

        content = backend.parse_response(data)
        logger.debug("provider response backend=%s len=%d", backend.label, len(content))
        return content

    async def fetch_models(self, settings: Settings) -> list[ModelInfo]:
        """List selectable models. Never raises; returns [] on any failure."""
        if settings.ai_provider != "ollama":
            return [ModelInfo(name=name) for name in COMMON_MODELS.get(settings.ai_provider, [])]

        url = f"{settings.ollama_url.rstrip('/')}/api/tags"
        try:
            async with httpx.AsyncClient(timeout=self._models_timeout) as client:
                resp = await client.get(url)
                resp.raise_for_status()
            models = resp.json().get("models") or []
            return [
                ModelInfo(
                    name=m["name"],
                    size=m.get("size") or 0,
                    modified_at=m.get("modified_at") or "",
                )
                for m in models
            ]
        except (httpx.HTTPError, ValueError, KeyError, TypeError, AttributeError) as e:
            logger.warning("Failed to fetch Ollama models from %s: %s", url, e)
            return []
