"""Terminal countdown timer with a responsive progress bar and block digits."""

__version__ = "0.1.0"
