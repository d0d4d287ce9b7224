"""5x5 block glyphs for the large time readout."""

from __future__ import annotations

GLYPH_SIZE: int = 5
FILL: str = "█"

# Each row is five cells; "#" is filled, anything else is empty.
_PATTERNS: dict[str, tuple[str, ...]] = {
    "0": ("#####", "#   #", "#   #", "#   #", "#####"),
    "1": ("  #  ", " ##  ", "  #  ", "  #  ", " ### "),
    "2": ("#####", "    #", "#####", "#    ", "#####"),
    "3": ("#####", "    #", " ####", "    #", "#####"),
    "4": ("#   #", "#   #", "#####", "    #", "    #"),
    "5": ("#####", "#    ", "#####", "    #", "#####"),
    "6": ("#####", "#    ", "#####", "#   #", "#####"),
    "7": ("#####", "    #", "   # ", "  #  ", "  #  "),
    "8": ("#####", "#   #", "#####", "#   #", "#####"),
    "9": ("#####", "#   #", "#####", "    #", "#####"),
    ":": ("     ", "  #  ", "     ", "  #  ", "     "),
}

GLYPHS: dict[str, tuple[tuple[bool, ...], ...]] = {
    char: tuple(tuple(cell == "#" for cell in row) for row in rows)
    for char, rows in _PATTERNS.items()
}


def glyph_for(char: str) -> tuple[tuple[bool, ...], ...]:
    """Return the cell grid for *char*, using the colon glyph for unknown characters."""
    return GLYPHS.get(char, GLYPHS[":"])
