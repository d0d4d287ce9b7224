"""The display surface the countdown draws on."""

from __future__ import annotations

import logging
import shutil
from typing import Optional

from rich.console import Console

from termtimer import display
from termtimer.models import DEFAULT_VIEWPORT, Viewport

log = logging.getLogger(__name__)


class Terminal:
    """Thin wrapper over a Rich console exposing only what the driver needs."""

    def __init__(self, console: Optional[Console] = None) -> None:
        self.console = console if console is not None else display.console

    def write(self, text: str) -> None:
        self.console.out(text, end="", highlight=False)

    def size(self) -> Viewport:
        """Current dimensions, falling back to 80x24 when they cannot be read."""
        fallback = (DEFAULT_VIEWPORT.columns, DEFAULT_VIEWPORT.rows)
        try:
            columns, rows = shutil.get_terminal_size(fallback=fallback)
        except (OSError, ValueError):
            columns, rows = fallback
        if columns < 1 or rows < 1 or (columns, rows) == fallback:
            log.debug("Terminal size unknown, using %dx%d", *fallback)
            return DEFAULT_VIEWPORT
        return Viewport(columns=columns, rows=rows)

    def show_cursor(self, show: bool = True) -> None:
        self.console.show_cursor(show)

    def clear(self) -> None:
        """Clear the whole screen and move the cursor home."""
        self.console.clear(home=True)

    def bell(self) -> None:
        # Rich drops control codes when not writing to a terminal.
        self.console.file.write("\a")
        self.console.file.flush()
