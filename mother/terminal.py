"""Interactive terminal front-end.

Streams the session's transcript to a rich Console as the renderer reveals
it, so replies type themselves out in the theme colour. Input is read on a
worker thread; the prompt only returns once the session is idle again.
"""

from __future__ import annotations

import asyncio
import logging

from rich.console import Console
from rich.table import Table

from mother.models import Settings
from mother.session import ChatSession

logger = logging.getLogger(__name__)

THEME_COLORS: dict[str, str] = {
    "green": "#00ff41",
    "yellow": "#ffaa00",
    "blue": "#00aaff",
    "red": "#ff0040",
    "purple": "#aa00ff",
    "cyan": "#00ffaa",
    "alienEarth": "#ffb86c",
}

PROMPT = "CREW > "
POLL_SECONDS = 0.01
EXIT_COMMANDS = ("/quit", "/exit")


class TranscriptPrinter:
    """Prints whatever part of the transcript has not been printed yet."""

    def __init__(self, console: Console) -> None:
        self.console = console
        self._printed: dict[str, int] = {}
        self._finished: set[str] = set()

    def reset(self) -> None:
        self._printed.clear()
        self._finished.clear()

    def flush(self, session: ChatSession) -> None:
        if len(self._printed) > len(session.transcript):
            # transcript was cleared underneath us
            self.console.clear()
            self.reset()
        style = THEME_COLORS[session.settings.color_theme]
        for message in session.transcript:
            if message.id in self._finished:
                continue
            if message.sender == "user":
                # the crew member already sees what they typed
                self._finished.add(message.id)
                self._printed[message.id] = len(message.content)
                continue
            visible = session.renderer.visible(message.id, message.content)
            done = self._printed.get(message.id, 0)
            if message.id not in self._printed:
                self.console.print("[MOTHER] > ", end="", style=f"dim {style}", markup=False, highlight=False)
            if len(visible) > done:
                self.console.print(visible[done:], end="", style=f"bold {style}", markup=False, highlight=False)
            self._printed[message.id] = len(visible)
            if not session.renderer.is_revealing(message.id):
                self.console.print()
                self._finished.add(message.id)


def settings_table(settings: Settings) -> Table:
    table = Table(title="SYSTEM CONFIGURATION", show_header=False)
    table.add_column("SETTING", style="dim")
    table.add_column("VALUE")
    for key, value in settings.model_dump().items():
        if key.endswith("_api_key"):
            value = "CONFIGURED" if value else "NOT SET"
        table.add_row(key.upper(), str(value).upper())
    table.caption = "CHANGE VALUES WITH PATCH /api/settings OR EDIT data/settings.json"
    return table


async def drain(session: ChatSession, printer: TranscriptPrinter) -> None:
    """Keep printing until the session has nothing more in flight."""
    status = None
    while True:
        printer.flush(session)
        if session.processing and status is None:
            status = printer.console.status("PROCESSING", spinner="dots")
            status.start()
        elif not session.processing and status is not None:
            status.stop()
            status = None
        if session.idle:
            break
        await asyncio.sleep(POLL_SECONDS)
    if status is not None:
        status.stop()
    printer.flush(session)


async def run_terminal(session: ChatSession, console: Console | None = None) -> None:
    console = console or Console(highlight=False)
    printer = TranscriptPrinter(console)
    loop = asyncio.get_running_loop()

    session.start_boot()
    await drain(session, printer)
    try:
        while True:
            if session.suggestions:
                console.print("  ".join(f"[{s}]" for s in session.suggestions), style="dim", markup=False)
            try:
                line = await loop.run_in_executor(None, console.input, PROMPT)
            except (EOFError, KeyboardInterrupt):
                console.print()
                break
            if line.strip().lower() in EXIT_COMMANDS:
                break
            await session.submit(line)
            await drain(session, printer)
            if session.settings_requested:
                session.settings_requested = False
                console.print(settings_table(session.settings))
    finally:
        session.close()
        logger.debug("terminal session closed")
