"""Pure layout functions that turn timer state into screen text.

Nothing here touches the terminal. Every frame is recomputed from the
elapsed fraction, the remaining time and the current viewport, so a
resize is handled by simply rendering again.
"""

from __future__ import annotations

import math

from termtimer.glyphs import FILL, GLYPH_SIZE, glyph_for
from termtimer.models import TimerState, Viewport

MARGIN: int = 4
MIN_BAR_WIDTH: int = 10
BAR_FILLED: str = "█"
BAR_EMPTY: str = "░"

# Rows kept free for the bar line and spacing when sizing the digits.
RESERVED_ROWS: int = 4
# Estimated width of "MM:SS" at scale 1, including separators.
BASE_READOUT_WIDTH: int = 35


def format_mm_ss(minutes: int, seconds: int) -> str:
    return f"{minutes:02d}:{seconds:02d}"


def center(line: str, columns: int) -> str:
    """Left-pad *line* so it sits in the middle of *columns* cells."""
    padding = max(0, (columns - len(line)) // 2)
    return " " * padding + line


def bar_width(columns: int) -> int:
    """Number of cells between the brackets for a terminal *columns* wide."""
    return max(MIN_BAR_WIDTH, columns - 2 * MARGIN - 2)


def filled_cells(width: int, elapsed_fraction: float) -> int:
    """Filled cell count, clamped to ``[0, width]``."""
    return max(0, min(width, round(width * elapsed_fraction)))


def render_bar(elapsed_fraction: float, columns: int) -> str:
    width = bar_width(columns)
    filled = filled_cells(width, elapsed_fraction)
    bar = "[" + BAR_FILLED * filled + BAR_EMPTY * (width - filled) + "]"
    return center(bar, columns)


def scale_factor(viewport: Viewport) -> int:
    """Largest integer glyph scale that fits the viewport, never below 1."""
    vertical = math.floor((viewport.rows - RESERVED_ROWS) / GLYPH_SIZE)
    horizontal = math.floor(viewport.columns / BASE_READOUT_WIDTH)
    return max(1, min(vertical, horizontal))


def scale_glyph(char: str, scale: int) -> list[str]:
    """Render one character as ``5*scale`` rows of ``5*scale`` cells."""
    rows: list[str] = []
    for cells in glyph_for(char):
        line = "".join((FILL if filled else " ") * scale for filled in cells)
        rows.extend([line] * scale)
    return rows


def render_digits(text: str, scale: int) -> list[str]:
    """Lay the glyphs for *text* side by side, ``2*scale`` spaces apart."""
    blocks = [scale_glyph(char, scale) for char in text]
    separator = " " * (2 * scale)
    return [separator.join(block[row] for block in blocks) for row in range(GLYPH_SIZE * scale)]


def render(elapsed_fraction: float, minutes: int, seconds: int, viewport: Viewport) -> str:
    """Compose a full frame: progress bar, a blank line, then the big readout."""
    bar = render_bar(elapsed_fraction, viewport.columns)
    digits = render_digits(format_mm_ss(minutes, seconds), scale_factor(viewport))
    lines = [bar, ""] + [center(row, viewport.columns) for row in digits]
    return "\n".join(lines)


def frame_for(state: TimerState, viewport: Viewport) -> str:
    return render(state.elapsed_fraction, state.minutes, state.seconds, viewport)
