"""Termtimer CLI -- a full-screen countdown with a progress bar and big digits."""

from __future__ import annotations

import re
from typing import Optional

import click
import typer
from pydantic import ValidationError
from typer.core import TyperGroup

from termtimer import config as cfg
from termtimer import display


class _StartByDefault(TyperGroup):
    """Treat an unknown first word as the minutes argument of ``start``."""

    def resolve_command(self, ctx: click.Context, args: list[str]):
        if args and args[0] not in self.commands and not args[0].startswith("-"):
            args = ["start", *args]
        return super().resolve_command(ctx, args)


app = typer.Typer(
    name="termtimer",
    cls=_StartByDefault,
    help="Count down in the terminal with a progress bar and a large readout.",
)

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def resolve_duration(raw: Optional[str], default_minutes: int) -> int:
    """Turn a minutes argument into total seconds.

    Only the leading integer is read, so ``"10min"`` means 10. Missing,
    non-numeric and non-positive values fall back to *default_minutes*;
    a warning is printed only when a value was given.
    """
    if raw is not None:
        match = _LEADING_INT.match(raw)
        minutes = int(match.group(1)) if match else 0
        if minutes > 0:
            return minutes * 60
        display.print_warning(f'Invalid duration: "{raw}". Using default of {default_minutes} minutes.')
    return default_minutes * 60


def _start(minutes: Optional[str]) -> None:
    cfg.configure_debug_logging()
    settings = cfg.load_config()
    total_seconds = resolve_duration(minutes, settings.default_minutes)

    from termtimer.driver import run

    run(total_seconds, bell=settings.bell)


@app.callback(invoke_without_command=True)
def main(ctx: typer.Context) -> None:
    """Start a countdown with the default duration when no command is given."""
    if ctx.invoked_subcommand is None:
        _start(None)


@app.command()
def start(
    minutes: Optional[str] = typer.Argument(None, help="Duration in minutes (default from config, 25)"),
) -> None:
    """Start a countdown. Press Ctrl+C to cancel."""
    _start(minutes)


@app.command()
def config(
    default_minutes: Optional[int] = typer.Option(
        None, "--default-minutes",
        help="Duration used when none is given",
    ),
    bell: Optional[bool] = typer.Option(
        None, "--bell/--no-bell",
        help="Ring the terminal bell when time is up",
    ),
    reset: bool = typer.Option(False, "--reset", help="Reset all settings"),
    show: bool = typer.Option(False, "--show", help="Show current config"),
) -> None:
    """View or change settings."""
    if default_minutes is not None:
        try:
            result = cfg.set_default_minutes(default_minutes)
        except ValidationError:
            display.print_warning(f"Default must be between 1 and 1440 minutes, got {default_minutes}.")
            raise typer.Exit(1)
        display.print_success(f"Default duration set to {result.default_minutes} minutes.")
    elif bell is not None:
        cfg.set_bell(bell)
        display.print_success(f"Bell {'enabled' if bell else 'disabled'}.")
    elif reset:
        cfg.reset_config()
        display.print_success("Settings reset to defaults.")
    elif show:
        current = cfg.load_config()
        display.print_info(f"Default duration: {current.default_minutes} minutes")
        display.print_info(f"Bell: {'on' if current.bell else 'off'}")
    else:
        display.print_info("Use --default-minutes, --bell/--no-bell, --reset, or --show.")
