"""Pydantic models — single source of truth for all data types."""

from __future__ import annotations

import enum

from pydantic import BaseModel, ConfigDict, Field, model_validator


class TimerPhase(str, enum.Enum):
    """Countdown lifecycle states."""

    STARTING = "starting"
    RUNNING = "running"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

    @property
    def is_terminal(self) -> bool:
        return self in (TimerPhase.COMPLETED, TimerPhase.CANCELLED)


class TimerState(BaseModel):
    """Total and remaining duration of one countdown, in whole seconds."""

    model_config = ConfigDict(frozen=True)

    total_seconds: int = Field(gt=0)
    remaining_seconds: int = Field(ge=0)

    @model_validator(mode="after")
    def _remaining_within_total(self) -> TimerState:
        if self.remaining_seconds > self.total_seconds:
            raise ValueError("remaining_seconds cannot exceed total_seconds")
        return self

    @classmethod
    def start(cls, total_seconds: int) -> TimerState:
        return cls(total_seconds=total_seconds, remaining_seconds=total_seconds)

    @property
    def elapsed_fraction(self) -> float:
        if self.total_seconds == 0:
            return 0.0
        return (self.total_seconds - self.remaining_seconds) / self.total_seconds

    @property
    def minutes(self) -> int:
        return self.remaining_seconds // 60

    @property
    def seconds(self) -> int:
        return self.remaining_seconds % 60

    @property
    def is_done(self) -> bool:
        return self.remaining_seconds == 0

    def ticked(self) -> TimerState:
        """Return the state one second later, clamped at zero."""
        return self.model_copy(update={"remaining_seconds": max(0, self.remaining_seconds - 1)})


class Viewport(BaseModel):
    """Terminal dimensions in character cells."""

    model_config = ConfigDict(frozen=True)

    columns: int = Field(ge=1)
    rows: int = Field(ge=1)


DEFAULT_VIEWPORT = Viewport(columns=80, rows=24)


class EventKind(str, enum.Enum):
    """External inputs the countdown reacts to."""

    BEGIN = "begin"  # grace delay elapsed
    TICK = "tick"
    RESIZE = "resize"
    INTERRUPT = "interrupt"


class EffectKind(str, enum.Enum):
    """Side effects a transition asks the driver to perform."""

    WRITE = "write"
    CLEAR = "clear"
    HIDE_CURSOR = "hide_cursor"
    SHOW_CURSOR = "show_cursor"
    BELL = "bell"
    START_TICKS = "start_ticks"
    STOP_TICKS = "stop_ticks"
    UNSUBSCRIBE_RESIZE = "unsubscribe_resize"
    EXIT = "exit"


class Effect(BaseModel):
    """One side effect; ``text`` is only meaningful for WRITE."""

    model_config = ConfigDict(frozen=True)

    kind: EffectKind
    text: str = ""


class Transition(BaseModel):
    """Result of feeding one event into the state machine."""

    model_config = ConfigDict(frozen=True)

    phase: TimerPhase
    state: TimerState
    effects: tuple[Effect, ...] = ()


class AppConfig(BaseModel):
    """Application configuration (persisted to ~/.config/termtimer/config.json)."""

    default_minutes: int = Field(default=25, gt=0, le=1440)
    bell: bool = True
