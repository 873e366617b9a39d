"""CLI commands for the session timer using Typer."""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timezone
from pathlib import Path

import typer
from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.live import Live
from rich.text import Text

from session_timer import __version__
from session_timer.activity import ActivityDraft
from session_timer.core.config import AppSettings, get_config
from session_timer.live_display.controller import (
    NullLiveDisplayController,
    StatusFileLiveDisplayController,
)
from session_timer.timer.configuration import BREAK_PRESETS, FOCUS_PRESETS, TimerConfiguration
from session_timer.timer.configuration_store import YamlConfigurationStore
from session_timer.timer.engine import SessionTimerEngine
from session_timer.timer.snapshot import SessionTimerSnapshot

app = typer.Typer(
    name="session-timer",
    help="Continuous and Pomodoro session timer.",
    add_completion=False,
)

console = Console()


def setup_logging(log_level: str, log_file: Path | None = None) -> None:
    """Configure logging for the application."""
    level = getattr(logging, log_level.upper(), logging.INFO)

    handlers: list[logging.Handler] = [logging.StreamHandler()]

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=handlers,
    )


def build_engine(config: AppSettings, live_display: bool = True) -> SessionTimerEngine:
    """Wire an engine to the configured store and live display."""
    store = YamlConfigurationStore(config.timer_config_file)
    if live_display and config.live_display.enabled:
        controller = StatusFileLiveDisplayController(config.status_file)
    else:
        controller = NullLiveDisplayController()
    return SessionTimerEngine(
        controller,
        store,
        min_monitor_sleep=config.timer.min_monitor_sleep_seconds,
    )


def render_snapshot(snapshot: SessionTimerSnapshot, elapsed: str) -> Panel:
    """Render a timer snapshot as a Rich panel."""
    style = "green" if snapshot.counts_down else "cyan"
    body = [Text(snapshot.value_text, style=f"bold {style}", justify="center")]
    if snapshot.detail_text:
        body.append(Text(snapshot.detail_text, style="dim", justify="center"))
    body.append(Text(f"Elapsed {elapsed}", style="dim", justify="center"))
    return Panel(Group(*body), title=snapshot.title, border_style=style)


def _apply_configuration(engine: SessionTimerEngine, configuration: TimerConfiguration) -> None:
    engine.timer_configuration = configuration
    console.print(f"[green]Timer mode:[/green] {configuration.summary_text}")


@app.command()
def run(
    log_level: str = typer.Option(
        None,
        "--log-level",
        "-l",
        help="Log level (DEBUG, INFO, WARNING, ERROR), defaults to the log_level setting",
    ),
    no_display: bool = typer.Option(
        False,
        "--no-display",
        help="Don't write the live display status file",
    ),
) -> None:
    """Run a session in the foreground until Ctrl+C."""
    config = get_config()
    setup_logging(log_level or config.log_level, config.log_dir / "session-timer.log")

    engine = build_engine(config, live_display=not no_display)
    drafts: list[ActivityDraft] = []
    engine.on_session_stopped = lambda result: drafts.append(ActivityDraft.from_stop_result(result))

    console.print(f"[green]Starting session:[/green] {engine.timer_configuration.summary_text}")
    console.print("Press Ctrl+C to stop\n")

    async def run_session() -> None:
        engine.start_session()
        try:
            with Live(console=console, refresh_per_second=4, transient=True) as live:
                while engine.is_running:
                    now = datetime.now(timezone.utc)
                    snapshot = engine.timer_snapshot(now)
                    if snapshot:
                        live.update(render_snapshot(snapshot, engine.elapsed_time_string(now)))
                    await asyncio.sleep(config.timer.refresh_seconds)
        except (KeyboardInterrupt, asyncio.CancelledError):
            pass
        finally:
            await engine.shutdown()

    try:
        asyncio.run(run_session())
    except KeyboardInterrupt:
        pass

    if drafts:
        draft = drafts[0]
        console.print(f"[bold]Session logged:[/bold] {draft.format_duration()}")
        console.print(f"  Started: {draft.started_at.astimezone():%Y-%m-%d %H:%M:%S}")
    else:
        console.print("[yellow]Session discarded (no time recorded)[/yellow]")


@app.command()
def config_show() -> None:
    """Show current configuration."""
    config = get_config()
    configuration = build_engine(config, live_display=False).timer_configuration

    table = Table(title="Session Timer Configuration", show_header=True, header_style="bold cyan")
    table.add_column("Setting")
    table.add_column("Value")

    # Timer
    table.add_row("[bold]Timer[/bold]", "")
    table.add_row("  Mode", configuration.mode.type)
    if configuration.is_pomodoro:
        table.add_row("  Focus", f"{configuration.default_pomodoro_focus_minutes}m")
        table.add_row("  Break", f"{configuration.default_pomodoro_break_minutes}m")
    table.add_row("  Summary", configuration.summary_text)

    # Paths
    table.add_row("[bold]Paths[/bold]", "")
    table.add_row("  Settings File", str(config.config_file))
    table.add_row("  Timer File", str(config.timer_config_file))
    table.add_row("  Status File", str(config.status_file))
    table.add_row("  Log Directory", str(config.log_dir))

    # Live display
    table.add_row("[bold]Live Display[/bold]", "")
    table.add_row("  Enabled", "Yes" if config.live_display.enabled else "No")

    console.print(table)


@app.command()
def config_continuous() -> None:
    """Switch to the continuous timer."""
    engine = build_engine(get_config(), live_display=False)
    _apply_configuration(engine, engine.timer_configuration.with_continuous())


@app.command()
def config_pomodoro(
    focus: int = typer.Option(
        None,
        "--focus",
        "-f",
        min=0,
        help=f"Focus minutes (presets: {', '.join(map(str, FOCUS_PRESETS))})",
    ),
    rest: int = typer.Option(
        None,
        "--break",
        "-b",
        min=0,
        help=f"Break minutes (presets: {', '.join(map(str, BREAK_PRESETS))})",
    ),
) -> None:
    """Switch to Pomodoro, keeping current minutes unless given."""
    engine = build_engine(get_config(), live_display=False)
    updated = engine.timer_configuration.with_pomodoro()
    if focus is not None:
        updated = updated.with_focus_minutes(focus)
    if rest is not None:
        updated = updated.with_break_minutes(rest)
    _apply_configuration(engine, updated)


@app.command()
def status() -> None:
    """Show the live display status written by a running session."""
    config = get_config()
    data = StatusFileLiveDisplayController(config.status_file).read_status()

    if not data.get("active"):
        console.print("[dim]No session running[/dim]")
        return

    table = Table(show_header=False, box=None)
    table.add_column("Field", style="bold")
    table.add_column("Value")
    table.add_row("Title", data.get("title", ""))
    if data.get("detail"):
        table.add_row("Detail", data["detail"])
    table.add_row("Counts down", "yes" if data.get("counts_down") else "no")
    start, end = data.get("time_range", ["", ""])
    table.add_row("From", start)
    table.add_row("Until", end)
    console.print(Panel(table, title="Live Session", border_style="green"))


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"session-timer v{__version__}")


@app.callback()
def main_callback() -> None:
    """Session timer - continuous and Pomodoro sessions with a live display."""
    pass


if __name__ == "__main__":
    app()
