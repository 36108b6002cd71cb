"""Command router — classifies one line of crew input and runs its handler.

Routes are tried in a fixed order and the first whose predicate accepts the
input wins. Inputs can satisfy several shapes ("1" is both a number and
free text), so the order is part of the contract:

  1. boot in progress       → rejected, nothing happens
  2. clear | cls            → reset transcript, history and reveal
  3. settings | config      → open the settings surface
  4. show models | list models
  5. <integer> while awaiting a model selection
  6. /wiki /planets /aliens /characters /organizations /spaceships /movies
  7. any other /command     → rejected with a fixed message
  8. anything else          → forwarded to the AI provider

Handlers are pure with respect to the session: they take the current
SessionState and return an Outcome holding the next state plus whatever
the session should do (reply text, clear, open settings, persist a model).
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from enum import Enum
from typing import Any, NamedTuple, Protocol

from pydantic import BaseModel, ConfigDict, Field

from mother.formatting import format_help, format_hits, format_listing, format_results
from mother.models import ModelInfo, ProviderReply, ReferenceKind, SessionState, Settings
from mother.reference import ReferenceStore
from mother.renderer import ACK_INTERVAL_MS, DEFAULT_INTERVAL_MS

logger = logging.getLogger(__name__)

REPLY_LATENCY_MS = 1000

SETTINGS_ACK = "OPENING SYSTEM CONFIGURATION..."
NO_MODELS = "NO MODELS DETECTED. SYSTEM ERROR."
INVALID_SELECTION = "INVALID SELECTION. OPERATION ABORTED."
INTERFACE_ERROR = "INTERFACE ERROR. PLEASE STAND BY."

REFERENCE_PREFIXES: dict[str, ReferenceKind | None] = {
    "/wiki": None,
    "/planets": ReferenceKind.PLANET,
    "/aliens": ReferenceKind.ALIEN,
    "/characters": ReferenceKind.CHARACTER,
    "/organizations": ReferenceKind.ORGANIZATION,
    "/spaceships": ReferenceKind.SPACESHIP,
    "/movies": ReferenceKind.MOVIE,
}


class Gateway(Protocol):
    async def send_message(self, text: str, settings: Settings) -> ProviderReply: ...

    async def fetch_models(self, settings: Settings) -> list[ModelInfo]: ...


class Intent(str, Enum):
    REJECTED = "rejected"
    CLEAR = "clear"
    OPEN_SETTINGS = "open_settings"
    LIST_MODELS = "list_models"
    SELECT_MODEL = "select_model"
    REFERENCE = "reference"
    UNKNOWN_COMMAND = "unknown_command"
    CHAT = "chat"


class Outcome(BaseModel):
    """What a handler decided. Applied to the session by ChatSession."""

    model_config = ConfigDict(frozen=True)

    intent: Intent
    state: SessionState
    reply: str | None = None
    interval_ms: float = DEFAULT_INTERVAL_MS
    delay_ms: float = 0  # "thinking" pause before the reply appears
    clear: bool = False
    open_settings: bool = False
    settings_update: dict[str, Any] = Field(default_factory=dict)


Handler = Callable[[str, SessionState, Settings], Awaitable[Outcome]]


class Route(NamedTuple):
    intent: Intent
    matches: Callable[[str, SessionState], bool]
    handler: Handler
    echo: bool = True  # append the user's line to the transcript
    shows_processing: bool = False


def _parse_int(text: str) -> int | None:
    try:
        return int(text.strip())
    except ValueError:
        return None


def _command_word(text: str) -> str:
    return text.strip().split(maxsplit=1)[0].lower() if text.strip() else ""


class CommandRouter:
    def __init__(self, store: ReferenceStore, gateway: Gateway) -> None:
        self._store = store
        self._gateway = gateway
        self.routes: list[Route] = [
            Route(Intent.REJECTED, self._is_booting, self._reject_booting, echo=False),
            Route(Intent.CLEAR, self._is_clear, self._clear, echo=False),
            Route(Intent.OPEN_SETTINGS, self._is_settings, self._open_settings),
            Route(Intent.LIST_MODELS, self._is_list_models, self._list_models),
            Route(Intent.SELECT_MODEL, self._is_selection, self._select_model),
            Route(Intent.REFERENCE, self._is_reference, self._reference),
            Route(Intent.UNKNOWN_COMMAND, self._is_unknown_command, self._unknown_command),
            Route(Intent.CHAT, lambda text, state: True, self._chat, shows_processing=True),
        ]

    # ── Classification ───────────────────────────────────

    def classify(self, text: str, state: SessionState) -> Route:
        for route in self.routes:
            if route.matches(text, state):
                logger.debug("classified input as %s", route.intent.value)
                return route
        raise AssertionError("chat route accepts every input")

    async def dispatch(self, text: str, state: SessionState, settings: Settings) -> Outcome:
        route = self.classify(text, state)
        return await route.handler(text, state, settings)

    @staticmethod
    def _is_booting(text: str, state: SessionState) -> bool:
        return state.boot_in_progress

    @staticmethod
    def _is_clear(text: str, state: SessionState) -> bool:
        return text.strip().lower() in ("clear", "cls")

    @staticmethod
    def _is_settings(text: str, state: SessionState) -> bool:
        return text.strip().lower() in ("settings", "config")

    @staticmethod
    def _is_list_models(text: str, state: SessionState) -> bool:
        return text.strip().lower() in ("show models", "list models")

    @staticmethod
    def _is_selection(text: str, state: SessionState) -> bool:
        return state.awaiting_model_selection and _parse_int(text) is not None

    @staticmethod
    def _is_reference(text: str, state: SessionState) -> bool:
        return _command_word(text) in REFERENCE_PREFIXES

    @staticmethod
    def _is_unknown_command(text: str, state: SessionState) -> bool:
        return text.strip().startswith("/")

    # ── Handlers ─────────────────────────────────────────

    @staticmethod
    def _idle(state: SessionState) -> SessionState:
        """State after any input that is not part of a model selection."""
        return state.model_copy(update={"awaiting_model_selection": False})

    async def _reject_booting(self, text: str, state: SessionState, settings: Settings) -> Outcome:
        return Outcome(intent=Intent.REJECTED, state=state)

    async def _clear(self, text: str, state: SessionState, settings: Settings) -> Outcome:
        return Outcome(intent=Intent.CLEAR, state=self._idle(state), clear=True)

    async def _open_settings(self, text: str, state: SessionState, settings: Settings) -> Outcome:
        return Outcome(
            intent=Intent.OPEN_SETTINGS,
            state=self._idle(state),
            reply=SETTINGS_ACK,
            interval_ms=ACK_INTERVAL_MS,
            open_settings=True,
        )

    async def _list_models(self, text: str, state: SessionState, settings: Settings) -> Outcome:
        models = await self._gateway.fetch_models(settings)
        if not models:
            return Outcome(
                intent=Intent.LIST_MODELS,
                state=state.model_copy(update={
                    "awaiting_model_selection": False, "available_models": [],
                }),
                reply=NO_MODELS,
            )
        listing = "\n".join(
            f"[{i}] {m.name} ({m.size / 1e9:.2f}GB)" for i, m in enumerate(models)
        )
        return Outcome(
            intent=Intent.LIST_MODELS,
            state=state.model_copy(update={
                "awaiting_model_selection": True, "available_models": models,
            }),
            reply=f"AVAILABLE NEURAL MODELS:\n{listing}\n\nENTER SELECTION NUMBER:",
        )

    async def _select_model(self, text: str, state: SessionState, settings: Settings) -> Outcome:
        index = _parse_int(text)
        models = state.available_models
        next_state = self._idle(state)
        if index is None or not 0 <= index < len(models):
            return Outcome(intent=Intent.SELECT_MODEL, state=next_state, reply=INVALID_SELECTION)
        selected = models[index].name
        logger.info("model selected: %s", selected)
        return Outcome(
            intent=Intent.SELECT_MODEL,
            state=next_state,
            reply=f"MODEL UPDATED: {selected.upper()}. NEURAL PROTOCOLS RECONFIGURED.",
            interval_ms=ACK_INTERVAL_MS,
            settings_update={"current_model": selected},
        )

    async def _reference(self, text: str, state: SessionState, settings: Settings) -> Outcome:
        parts = text.strip().split(maxsplit=1)
        prefix = parts[0].lower()
        query = parts[1].strip() if len(parts) > 1 else ""
        kind = REFERENCE_PREFIXES[prefix]

        if kind is None:
            if not query or query.lower() == "help":
                reply = format_help(self._store.counts())
            else:
                reply = format_hits(query, self._store.search_all(query))
        elif not query:
            reply = format_listing(kind, self._store.get_all(kind))
        else:
            reply = format_results(kind, query, self._store.search(kind, query))
        return Outcome(intent=Intent.REFERENCE, state=self._idle(state), reply=reply)

    async def _unknown_command(self, text: str, state: SessionState, settings: Settings) -> Outcome:
        word = _command_word(text).upper()
        return Outcome(
            intent=Intent.UNKNOWN_COMMAND,
            state=self._idle(state),
            reply=f"UNRECOGNIZED COMMAND: {word}. TYPE /WIKI HELP FOR AVAILABLE QUERIES.",
        )

    async def _chat(self, text: str, state: SessionState, settings: Settings) -> Outcome:
        try:
            result = await self._gateway.send_message(text, settings)
        except Exception as e:
            logger.exception("provider gateway failed")
            return Outcome(
                intent=Intent.CHAT,
                state=self._idle(state),
                reply=f"COMMUNICATION ERROR: {e}. CHECK LOGS FOR DETAILS.",
            )
        return Outcome(
            intent=Intent.CHAT,
            state=self._idle(state),
            reply=result.content or result.error or INTERFACE_ERROR,
            delay_ms=REPLY_LATENCY_MS,
        )
