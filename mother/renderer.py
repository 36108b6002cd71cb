"""Typewriter reveal of reply text.

One reply streams at a time. The renderer is a small state machine driven
by a Clock:

    IDLE ──start()──▶ REVEALING ──last char──▶ DONE
      ▲                   │
      └────cancel()───────┘

Each tick advances the visible prefix by one character. Ticks carry the id
of the message they were scheduled for; a tick whose id is no longer the
active reveal does nothing.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from functools import partial

from mother.clock import Clock, TimerHandle

logger = logging.getLogger(__name__)

CURSOR = "█"

DEFAULT_INTERVAL_MS = 30
BOOT_INTERVAL_MS = 15
ACK_INTERVAL_MS = 20

_LIST_MARKER = re.compile(r"[ \t]+(?=\d+\. )")


def format_reply(text: str) -> str:
    """Put each enumerated item ("1. ", "12. ") on its own line."""
    return _LIST_MARKER.sub("\n", text)


# ── Follow-up suggestions ────────────────────────────────

# First matching category wins
SUGGESTION_RULES: tuple[tuple[tuple[str, ...], tuple[str, ...]], ...] = (
    (("planet",), (
        "/planets lv-426",
        "WHAT IS THE ATMOSPHERE COMPOSITION?",
        "ARE THERE ANY COLONIES NEARBY?",
    )),
    (("alien", "xenomorph", "hybrid"), (
        "/aliens xenomorph",
        "DESCRIBE THE ORGANISM LIFE CYCLE",
        "WHAT ARE ITS WEAKNESSES?",
    )),
    (("directive",), (
        "WHAT IS SPECIAL ORDER 937?",
        "WHO ISSUED THE DIRECTIVE?",
        "IS THE CREW EXPENDABLE?",
    )),
    (("system", "status"), (
        "SHOW MODELS",
        "/wiki",
        "REPORT SHIP STATUS",
    )),
)


def suggest_followups(text: str) -> list[str]:
    lowered = text.lower()
    for keywords, suggestions in SUGGESTION_RULES:
        if any(k in lowered for k in keywords):
            return list(suggestions)
    return []


# ── State machine ────────────────────────────────────────


class RevealPhase(str, Enum):
    IDLE = "idle"
    REVEALING = "revealing"
    DONE = "done"


@dataclass
class Reveal:
    message_id: str
    text: str
    interval_ms: float
    position: int = 0


CompleteHook = Callable[[str, str], None]


class ResponseRenderer:
    """Reveals one message at a time, one character per tick.

    Args:
        clock:       Timer source for the ticks.
        on_complete: Called with (message_id, text) when a reveal finishes.
                     Not called for cancelled reveals.
    """

    def __init__(self, clock: Clock, on_complete: CompleteHook | None = None) -> None:
        self._clock = clock
        self._on_complete = on_complete
        self._reveal: Reveal | None = None
        self._handle: TimerHandle | None = None
        self.phase = RevealPhase.IDLE

    @property
    def active_id(self) -> str | None:
        return self._reveal.message_id if self._reveal else None

    @property
    def position(self) -> int:
        return self._reveal.position if self._reveal else 0

    def is_revealing(self, message_id: str | None = None) -> bool:
        if self.phase is not RevealPhase.REVEALING:
            return False
        return message_id is None or message_id == self.active_id

    def start(self, message_id: str, text: str, interval_ms: float = DEFAULT_INTERVAL_MS) -> None:
        """Begin revealing `text`. Any reveal already in flight is abandoned."""
        self.cancel()
        self._reveal = Reveal(message_id=message_id, text=text, interval_ms=interval_ms)
        self.phase = RevealPhase.REVEALING
        logger.debug("reveal start id=%s len=%d interval=%s", message_id, len(text), interval_ms)
        if not text:
            self._finish()
            return
        self._schedule()

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
        self._handle = None
        self._reveal = None
        self.phase = RevealPhase.IDLE

    def visible(self, message_id: str, full_text: str) -> str:
        """Text currently shown for a message: a prefix while revealing, else all of it."""
        if self.is_revealing(message_id):
            return full_text[:self.position]
        return full_text

    def _schedule(self) -> None:
        reveal = self._reveal
        self._handle = self._clock.call_later(
            reveal.interval_ms, partial(self._tick, reveal.message_id)
        )

    def _tick(self, message_id: str) -> None:
        reveal = self._reveal
        if reveal is None or reveal.message_id != message_id or self.phase is not RevealPhase.REVEALING:
            return
        reveal.position += 1
        if reveal.position >= len(reveal.text):
            self._finish()
        else:
            self._schedule()

    def _finish(self) -> None:
        reveal = self._reveal
        self._handle = None
        self.phase = RevealPhase.DONE
        logger.debug("reveal done id=%s", reveal.message_id)
        if self._on_complete:
            self._on_complete(reveal.message_id, reveal.text)
