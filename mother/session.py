"""Chat session — transcript, command history, boot sequence and reply timing.

A ChatSession applies router outcomes to the visible state:

    submit(line)
      → history.push (before classification)
      → route = router.classify(line, state)
      → echo the user's line (most routes)
      → outcome = await route.handler(...)
      → clear / open settings / persist model / append reply and reveal it

Timers (reveal ticks, boot steps, reply latency) all come from the injected
Clock and are cancelled on clear() and close(). Replies that settle after a
clear are dropped: every clear bumps a generation counter that pending work
checks before touching the transcript.
"""

from __future__ import annotations

import itertools
import logging
from collections.abc import Callable
from typing import Any, Protocol

from mother.clock import Clock, TimerHandle
from mother.models import Message, MessageView, SessionState, Settings
from mother.renderer import (
    BOOT_INTERVAL_MS,
    CURSOR,
    DEFAULT_INTERVAL_MS,
    ResponseRenderer,
    format_reply,
    suggest_followups,
)
from mother.router import CommandRouter, Intent, Outcome

logger = logging.getLogger(__name__)

BOOT_SEQUENCE: tuple[str, ...] = (
    "WEYLAND-YUTANI SYSTEMS",
    "NOSTROMO MAINFRAME BOOT SEQUENCE",
    "INITIALIZING MU/TH/UR 6000...",
    "LOADING NEURAL PROTOCOLS...",
    "ESTABLISHING SECURE CONNECTION...",
    "INTERFACE READY",
    "AWAITING CREW INPUT...",
)
BOOT_STEP_DELAY_MS = 800

HISTORY_LIMIT = 20


class SettingsSource(Protocol):
    def get(self) -> Settings: ...

    def update(self, fields: dict[str, Any]) -> Settings: ...


class MemorySettings:
    """SettingsSource that lives only as long as the process."""

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings or Settings()

    def get(self) -> Settings:
        return self._settings

    def update(self, fields: dict[str, Any]) -> Settings:
        self._settings = Settings.model_validate({**self._settings.model_dump(), **fields})
        return self._settings


class CommandHistory:
    """Most recent distinct inputs, oldest first, with a recall cursor."""

    def __init__(self, limit: int = HISTORY_LIMIT) -> None:
        self.limit = limit
        self.entries: list[str] = []
        self._cursor: int | None = None

    def push(self, line: str) -> None:
        line = line.strip()
        if not line:
            return
        if line in self.entries:
            self.entries.remove(line)
        self.entries.append(line)
        del self.entries[:-self.limit]
        self._cursor = None

    def previous(self) -> str | None:
        """Step back through history (like the up arrow). None when empty."""
        if not self.entries:
            return None
        if self._cursor is None:
            self._cursor = len(self.entries) - 1
        elif self._cursor > 0:
            self._cursor -= 1
        return self.entries[self._cursor]

    def next(self) -> str | None:
        """Step forward; returns "" once past the newest entry."""
        if self._cursor is None:
            return None
        if self._cursor < len(self.entries) - 1:
            self._cursor += 1
            return self.entries[self._cursor]
        self._cursor = None
        return ""

    def clear(self) -> None:
        self.entries.clear()
        self._cursor = None

    def __len__(self) -> int:
        return len(self.entries)


SoundHook = Callable[[str], None]


class ChatSession:
    """One crew member's conversation with MU/TH/UR.

    Args:
        router:           Classifies and handles input lines.
        settings:         Where provider/model/theme settings are read and written.
        clock:            Timer source for reveals, boot steps and latency.
        boot_lines:       Identity lines revealed one by one before input unlocks.
        boot_delay_ms:    Pause after each boot line finishes revealing.
        on_sound:         Called with "beep" or "boot" when sounds are enabled.
        on_open_settings: Called when the crew asks for the settings surface.
    """

    def __init__(
        self,
        *,
        router: CommandRouter,
        settings: SettingsSource,
        clock: Clock,
        boot_lines: tuple[str, ...] = BOOT_SEQUENCE,
        boot_delay_ms: float = BOOT_STEP_DELAY_MS,
        on_sound: SoundHook | None = None,
        on_open_settings: Callable[[], None] | None = None,
    ) -> None:
        self._router = router
        self._settings = settings
        self._clock = clock
        self._boot_lines = boot_lines
        self._boot_delay_ms = boot_delay_ms
        self._on_sound = on_sound
        self._on_open_settings = on_open_settings

        self.transcript: list[Message] = []
        self.history = CommandHistory()
        self.suggestions: list[str] = []
        self.state = SessionState()
        self.settings_requested = False

        self.renderer = ResponseRenderer(clock, on_complete=self._on_reveal_complete)
        self._ids = itertools.count(1)
        self._generation = 0
        self._boot_index = 0
        self._boot_handle: TimerHandle | None = None
        self._reply_handle: TimerHandle | None = None
        self._in_flight = 0  # handlers awaiting the provider

    # ── Read side ────────────────────────────────────────

    @property
    def settings(self) -> Settings:
        return self._settings.get()

    @property
    def processing(self) -> bool:
        """True while a provider call is in flight or its reply is still due."""
        return self._in_flight > 0 or self._reply_handle is not None

    @property
    def idle(self) -> bool:
        """True when nothing is booting, awaiting a provider, or revealing."""
        return not (
            self.state.boot_in_progress or self.processing or self.renderer.is_revealing()
        )

    def view(self) -> list[MessageView]:
        views = []
        for m in self.transcript:
            streaming = self.renderer.is_revealing(m.id)
            text = self.renderer.visible(m.id, m.content)
            views.append(MessageView(
                id=m.id,
                sender=m.sender,
                content=text + CURSOR if streaming else text,
                timestamp=m.timestamp,
                streaming=streaming,
                copyable=m.sender == "mother" and not streaming,
            ))
        return views

    # ── Boot ─────────────────────────────────────────────

    def start_boot(self) -> None:
        """(Re)run the boot announcements. Input is rejected until they finish."""
        self._generation += 1
        self._cancel_boot()
        self._cancel_reply()
        self.renderer.cancel()
        self._boot_index = 0
        self.state = self.state.model_copy(update={"boot_in_progress": True})
        logger.debug("boot sequence started lines=%d", len(self._boot_lines))
        self._boot_step()

    def _boot_step(self) -> None:
        self._boot_handle = None
        if self._boot_index >= len(self._boot_lines):
            self.state = self.state.model_copy(update={"boot_in_progress": False})
            logger.info("boot sequence complete")
            return
        index = self._boot_index
        self._boot_index += 1
        self._sound("boot")
        message = Message(
            id=f"boot-{next(self._ids)}", content=self._boot_lines[index], sender="mother"
        )
        self.transcript.append(message)
        self.renderer.start(message.id, message.content, BOOT_INTERVAL_MS)

    def _cancel_boot(self) -> None:
        if self._boot_handle is not None:
            self._boot_handle.cancel()
            self._boot_handle = None

    def _cancel_reply(self) -> None:
        if self._reply_handle is not None:
            self._reply_handle.cancel()
            self._reply_handle = None

    def _on_reveal_complete(self, message_id: str, text: str) -> None:
        self.suggestions = suggest_followups(text)
        if self.state.boot_in_progress and message_id.startswith("boot-"):
            self._boot_handle = self._clock.call_later(self._boot_delay_ms, self._boot_step)

    # ── Input ────────────────────────────────────────────

    async def submit(self, line: str) -> Outcome | None:
        """Handle one line of crew input. Returns the router outcome, or None for blank input."""
        if not line.strip():
            return None
        if not self.state.boot_in_progress:
            self.history.push(line)

        route = self._router.classify(line, self.state)
        if route.intent is Intent.REJECTED:
            return await route.handler(line, self.state, self.settings)

        if route.echo:
            self._sound("beep")
            self._append(line, "user")

        generation = self._generation
        if route.shows_processing:
            self._in_flight += 1
        try:
            outcome = await route.handler(line, self.state, self.settings)
        finally:
            if route.shows_processing:
                self._in_flight -= 1

        if generation != self._generation:
            logger.debug("dropping %s outcome that settled after a clear", outcome.intent.value)
            return outcome
        self._apply(outcome)
        return outcome

    def _apply(self, outcome: Outcome) -> None:
        if outcome.clear:
            self.clear()
            self.state = outcome.state
            return

        self.state = outcome.state
        if outcome.settings_update:
            self._settings.update(outcome.settings_update)
        if outcome.open_settings:
            self.settings_requested = True
            if self._on_open_settings:
                self._on_open_settings()

        if outcome.reply is None:
            return
        if outcome.delay_ms > 0:
            generation = self._generation
            self._reply_handle = self._clock.call_later(
                outcome.delay_ms,
                lambda: self._deliver(generation, outcome.reply, outcome.interval_ms),
            )
        else:
            self._emit(outcome.reply, outcome.interval_ms)

    def _deliver(self, generation: int, reply: str, interval_ms: float) -> None:
        self._reply_handle = None
        if generation != self._generation:
            return
        self._emit(reply, interval_ms)

    def _emit(self, reply: str, interval_ms: float = DEFAULT_INTERVAL_MS) -> Message:
        message = self._append(format_reply(reply), "mother")
        self.suggestions = []
        self.renderer.start(message.id, message.content, interval_ms)
        return message

    def _append(self, content: str, sender: str) -> Message:
        message = Message(id=str(next(self._ids)), content=content, sender=sender)
        self.transcript.append(message)
        return message

    def _sound(self, name: str) -> None:
        if self._on_sound and self.settings.enable_sounds:
            self._on_sound(name)

    # ── Reset / teardown ─────────────────────────────────

    def clear(self) -> None:
        """Empty the transcript and history and stop anything in flight."""
        self._generation += 1
        self._cancel_boot()
        self._cancel_reply()
        self.renderer.cancel()
        self.transcript.clear()
        self.history.clear()
        self.suggestions = []
        self.state = self.state.model_copy(update={
            "boot_in_progress": False, "awaiting_model_selection": False,
        })
        logger.debug("session cleared")

    def close(self) -> None:
        """Cancel every pending timer. The session stays readable."""
        self._generation += 1
        self._cancel_boot()
        self._cancel_reply()
        self.renderer.cancel()
