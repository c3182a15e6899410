"""Command-line interface for the agenda reminder."""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

import typer

from .clock import ClockAccelerator, SimulatedClock
from .config import ReminderSettings
from .console import TerminalConsole, TerminalSetupError, prompt_speed_factor
from .models import TimeOfDay
from .paths import get_log_path
from .schedule import ScheduleError, load_schedule

app = typer.Typer(help="Daily activity reminder running on a simulated clock.")

logger = logging.getLogger(__name__)


@app.callback(no_args_is_help=True)
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logs."),
    log_file: Optional[Path] = typer.Option(
        None,
        "--log-file",
        path_type=Path,
        help="Where to write logs (defaults to the per-user data directory).",
    ),
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
        filename=str(log_file or get_log_path()),
    )


@app.command()
def run(
    speed: Optional[int] = typer.Option(
        None,
        "--speed",
        min=1,
        max=30,
        help="Simulated seconds per real second. Prompted for when omitted.",
    ),
    schedule_path: Optional[Path] = typer.Option(
        None,
        "--schedule",
        path_type=Path,
        help="JSON schedule file to use instead of the built-in agenda.",
    ),
    tick_seconds: float = typer.Option(
        0.1,
        "--tick",
        min=0.01,
        help="Real seconds between clock ticks and schedule polls.",
    ),
    clear_screen: bool = typer.Option(
        True,
        "--clear/--no-clear",
        help="Clear the terminal after each reminder.",
    ),
) -> None:
    """Remind about activities until the simulated day ends."""
    from .runner import AgendaRunner
    from .state import SchedulerState

    try:
        activities = load_schedule(schedule_path)
    except ScheduleError as exc:
        logger.error("Cannot load schedule: %s", exc)
        typer.echo(f"Cannot load schedule: {exc}", err=True)
        raise typer.Exit(code=1)

    settings = ReminderSettings.from_options(tick_seconds=tick_seconds)
    console = TerminalConsole(clear_screen=clear_screen)
    if speed is None:
        try:
            speed = prompt_speed_factor(console, settings)
        except EOFError:
            raise typer.Exit(code=1)

    clock = SimulatedClock(flush_threshold=settings.flush_threshold)
    try:
        console.enter()
    except TerminalSetupError as exc:
        logger.error("Terminal setup failed: %s", exc)
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=1)

    accelerator = ClockAccelerator(clock, speed, settings.tick_interval)
    accelerator.start()
    runner = AgendaRunner(SchedulerState(activities), clock, console, settings)
    try:
        exit_code = runner.run()
    except (KeyboardInterrupt, EOFError):
        logger.info("Agenda interrupted.")
        exit_code = 0
    finally:
        accelerator.stop()
        console.restore()
    raise typer.Exit(code=exit_code)


@app.command()
def schedule(
    schedule_path: Optional[Path] = typer.Option(
        None,
        "--schedule",
        path_type=Path,
        help="JSON schedule file to show instead of the built-in agenda.",
    ),
    at: Optional[str] = typer.Option(
        None,
        "--at",
        help="Time (HH:MM) to report the activity in progress for.",
    ),
) -> None:
    """Print the day's activities."""
    from .reporting import SchedulePrinter
    from .state import SchedulerState

    try:
        activities = load_schedule(schedule_path)
    except ScheduleError as exc:
        typer.echo(f"Cannot load schedule: {exc}", err=True)
        raise typer.Exit(code=1)

    moment = None
    if at:
        try:
            parsed = TimeOfDay.parse(at)
        except ValueError as exc:
            raise typer.BadParameter(str(exc), param_hint="--at") from exc
        moment = datetime.now().replace(hour=parsed.hour, minute=parsed.minute)
    SchedulePrinter().print_schedule(SchedulerState(activities), at=moment)
