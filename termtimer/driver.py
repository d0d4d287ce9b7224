"""Countdown driver: owns the timer and reacts to ticks, resizes and Ctrl-C.

Event sources come from an injected scheduler. In production that is an
``asyncio`` event loop, so the tick, resize and interrupt handlers all run
on one thread and never interleave.
"""

from __future__ import annotations

import asyncio
import logging
import signal
import sys
from typing import Callable, Optional, Protocol

from termtimer import machine
from termtimer.layout import format_mm_ss
from termtimer.models import (
    Effect,
    EffectKind,
    EventKind,
    TimerPhase,
    TimerState,
    Viewport,
)
from termtimer.terminal import Terminal

log = logging.getLogger(__name__)

GRACE_DELAY: float = 1.0
TICK_PERIOD: float = 1.0
EXIT_OK: int = 0

RESIZE_SIGNAL: Optional[int] = getattr(signal, "SIGWINCH", None)


class Handle(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    """The subset of ``asyncio.AbstractEventLoop`` the driver relies on."""

    def call_later(self, delay: float, callback: Callable[[], object]) -> Handle: ...

    def add_signal_handler(self, sig: int, callback: Callable[[], object]) -> None: ...

    def remove_signal_handler(self, sig: int) -> bool: ...

    def stop(self) -> None: ...


class Surface(Protocol):
    def write(self, text: str) -> None: ...

    def size(self) -> Viewport: ...

    def show_cursor(self, show: bool = True) -> None: ...

    def clear(self) -> None: ...

    def bell(self) -> None: ...


def starting_message(total_seconds: int) -> str:
    minutes, seconds = divmod(total_seconds, 60)
    if seconds:
        duration = format_mm_ss(minutes, seconds)
    else:
        duration = f"{minutes} minute{'s' if minutes != 1 else ''}"
    return f"Starting timer for {duration}. Press Ctrl+C to exit."


class CountdownDriver:
    """Runs one countdown against a surface and a scheduler."""

    def __init__(
        self,
        total_seconds: int,
        surface: Surface,
        scheduler: Scheduler,
        bell: bool = True,
        grace_delay: float = GRACE_DELAY,
        tick_period: float = TICK_PERIOD,
    ) -> None:
        self.state = TimerState.start(total_seconds)
        self.phase = TimerPhase.STARTING
        self.surface = surface
        self.scheduler = scheduler
        self.bell = bell
        self.grace_delay = grace_delay
        self.tick_period = tick_period
        self.ticks_processed = 0
        self.exit_code: Optional[int] = None
        self._grace_handle: Optional[Handle] = None
        self._tick_handle: Optional[Handle] = None
        self._signals: list[int] = []

    @property
    def finished(self) -> bool:
        return self.phase.is_terminal

    def start(self) -> None:
        """Announce the duration, hook up signals and schedule the first frame."""
        self.surface.write(starting_message(self.state.total_seconds) + "\n")
        self._listen(signal.SIGINT, self.interrupt)
        if RESIZE_SIGNAL is not None:
            self._listen(RESIZE_SIGNAL, self.resize)
        self._grace_handle = self.scheduler.call_later(self.grace_delay, self._begin)

    # ------------------------------------------------------------------
    # Event handlers
    # ------------------------------------------------------------------

    def _begin(self) -> None:
        self._grace_handle = None
        self.dispatch(EventKind.BEGIN)

    def tick(self) -> None:
        self._tick_handle = None
        if self.phase is not TimerPhase.RUNNING:
            return
        # Next tick is queued before this one is processed.
        self._tick_handle = self.scheduler.call_later(self.tick_period, self.tick)
        self.ticks_processed += 1
        self.dispatch(EventKind.TICK)

    def resize(self) -> None:
        self.dispatch(EventKind.RESIZE)

    def interrupt(self) -> None:
        self.dispatch(EventKind.INTERRUPT)

    def dispatch(self, event: EventKind) -> None:
        result = machine.transition(self.phase, self.state, event, self.surface.size(), bell=self.bell)
        if result.phase is not self.phase:
            log.debug("%s -> %s on %s", self.phase.value, result.phase.value, event.value)
        elif event is EventKind.TICK:
            log.debug("tick: %d seconds remaining", result.state.remaining_seconds)
        elif event is EventKind.RESIZE and result.effects:
            log.debug("resize: redrawing at %d seconds remaining", result.state.remaining_seconds)
        self.phase = result.phase
        self.state = result.state
        for effect in result.effects:
            self._apply(effect)

    # ------------------------------------------------------------------
    # Effects
    # ------------------------------------------------------------------

    def _apply(self, effect: Effect) -> None:
        kind = effect.kind
        if kind is EffectKind.WRITE:
            self.surface.write(effect.text)
        elif kind is EffectKind.CLEAR:
            self.surface.clear()
        elif kind is EffectKind.HIDE_CURSOR:
            self.surface.show_cursor(False)
        elif kind is EffectKind.SHOW_CURSOR:
            self.surface.show_cursor(True)
        elif kind is EffectKind.BELL:
            self.surface.bell()
        elif kind is EffectKind.START_TICKS:
            self._tick_handle = self.scheduler.call_later(self.tick_period, self.tick)
        elif kind is EffectKind.STOP_TICKS:
            self._stop_ticks()
        elif kind is EffectKind.UNSUBSCRIBE_RESIZE:
            if RESIZE_SIGNAL is not None:
                self._unlisten(RESIZE_SIGNAL)
        elif kind is EffectKind.EXIT:
            self._unlisten(signal.SIGINT)
            self.exit_code = EXIT_OK
            self.scheduler.stop()

    def _stop_ticks(self) -> None:
        for handle in (self._grace_handle, self._tick_handle):
            if handle is not None:
                handle.cancel()
        self._grace_handle = None
        self._tick_handle = None

    def _listen(self, sig: int, callback: Callable[[], None]) -> None:
        try:
            self.scheduler.add_signal_handler(sig, callback)
        except (NotImplementedError, RuntimeError, ValueError):
            # e.g. Windows event loops; Ctrl-C then arrives as KeyboardInterrupt.
            log.debug("Cannot watch signal %s on this platform", sig)
            return
        self._signals.append(sig)

    def _unlisten(self, sig: int) -> None:
        if sig in self._signals:
            self.scheduler.remove_signal_handler(sig)
            self._signals.remove(sig)


def run(total_seconds: int, bell: bool = True) -> None:
    """Count down *total_seconds* on the real terminal, then exit the process."""
    loop = asyncio.new_event_loop()
    surface = Terminal()
    driver = CountdownDriver(total_seconds, surface, loop, bell=bell)
    try:
        driver.start()
        try:
            loop.run_forever()
        except KeyboardInterrupt:
            driver.interrupt()
    finally:
        if not driver.finished:
            surface.show_cursor(True)
        loop.close()
    sys.exit(driver.exit_code if driver.exit_code is not None else EXIT_OK)
