"""Countdown state machine.

``transition`` is a pure function: it takes the current phase and timer
state plus one event and returns the next phase, the next state and the
ordered list of effects the driver must carry out. Rendering happens here
so it can be tested without a terminal, a clock or signals.
"""

from __future__ import annotations

from termtimer.layout import frame_for
from termtimer.models import (
    Effect,
    EffectKind,
    EventKind,
    TimerPhase,
    TimerState,
    Transition,
    Viewport,
)

COMPLETED_MESSAGE: str = "Time's up! Take a break."
CANCELLED_MESSAGE: str = "Timer cancelled. Goodbye!"


def _write(text: str) -> Effect:
    return Effect(kind=EffectKind.WRITE, text=text)


def _effect(kind: EffectKind) -> Effect:
    return Effect(kind=kind)


def _redraw(state: TimerState, viewport: Viewport) -> list[Effect]:
    return [_effect(EffectKind.CLEAR), _write(frame_for(state, viewport))]


def _begin(state: TimerState, viewport: Viewport) -> Transition:
    effects = [_effect(EffectKind.HIDE_CURSOR), *_redraw(state, viewport), _effect(EffectKind.START_TICKS)]
    return Transition(phase=TimerPhase.RUNNING, state=state, effects=tuple(effects))


def _tick(state: TimerState, viewport: Viewport, bell: bool) -> Transition:
    state = state.ticked()
    if not state.is_done:
        return Transition(phase=TimerPhase.RUNNING, state=state, effects=tuple(_redraw(state, viewport)))

    effects = [
        _effect(EffectKind.STOP_TICKS),
        _effect(EffectKind.UNSUBSCRIBE_RESIZE),
        *_redraw(state, viewport),
        _effect(EffectKind.SHOW_CURSOR),
        _write(f"\n{COMPLETED_MESSAGE}"),
    ]
    if bell:
        effects.append(_effect(EffectKind.BELL))
    effects += [_write("\n"), _effect(EffectKind.EXIT)]
    return Transition(phase=TimerPhase.COMPLETED, state=state, effects=tuple(effects))


def _cancel(state: TimerState) -> Transition:
    effects = (
        _effect(EffectKind.STOP_TICKS),
        _effect(EffectKind.UNSUBSCRIBE_RESIZE),
        _effect(EffectKind.SHOW_CURSOR),
        _write(f"\n{CANCELLED_MESSAGE}\n"),
        _effect(EffectKind.EXIT),
    )
    return Transition(phase=TimerPhase.CANCELLED, state=state, effects=effects)


def transition(
    phase: TimerPhase,
    state: TimerState,
    event: EventKind,
    viewport: Viewport,
    bell: bool = True,
) -> Transition:
    """Apply *event* to ``(phase, state)``.

    Events that do not apply to the current phase leave everything
    unchanged and produce no effects. Completed and cancelled are final.
    """
    unchanged = Transition(phase=phase, state=state)
    if phase.is_terminal:
        return unchanged

    if event is EventKind.INTERRUPT:
        return _cancel(state)

    if phase is TimerPhase.STARTING:
        if event is EventKind.BEGIN:
            return _begin(state, viewport)
        return unchanged

    # Running
    if event is EventKind.TICK:
        return _tick(state, viewport, bell)
    if event is EventKind.RESIZE:
        return Transition(phase=phase, state=state, effects=tuple(_redraw(state, viewport)))
    return unchanged
