"""swarmcompat command line interface.

Each UI command probes the terminal first and either hands over to the
interactive UI process or renders the text fallback.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
import signal
from typing import Iterator, Optional

import click
from pydantic import ValidationError
from rich.console import Console

from . import __version__
from .errors import ConfigError
from .logging_config import configure_logging
from .models import ExecutionOptions, Strategy, UIKind
from .runs import RunStore
from .settings import AppSettings
from .simulation import ProgressSimulator, generate_task_plan
from .ui import EnvironmentProbe, FallbackRenderer, UILauncher, UIScriptLocator, show_diagnostics

logger = logging.getLogger(__name__)
console = Console(highlight=False)


def _load_settings(**overrides) -> AppSettings:
    try:
        return AppSettings().with_overrides(**overrides)
    except ValidationError as e:
        problems = [f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in e.errors()]
        raise ConfigError(f"{e.error_count()} invalid setting(s)", problems) from e


def build_launcher(settings: AppSettings, out: Optional[Console] = None) -> UILauncher:
    """Wire probe, run store, renderer and launcher from settings."""
    out = out or console
    probe = EnvironmentProbe()
    run_store = RunStore(settings.runs_dir)
    fallback = FallbackRenderer(
        run_store,
        console=out,
        probe=probe,
        simulator=ProgressSimulator(console=out),
        monitor_interval=settings.monitor_interval_seconds,
        recent_limit=settings.recent_runs_limit,
        show_progress=settings.show_progress,
        interrupt_guard=interrupt_sets,
    )
    return UILauncher(
        probe,
        UIScriptLocator(settings.ui_dir, settings.ui_runtime),
        fallback,
        console=out,
        fallback_to_text=settings.fallback_to_text,
        enable_monitoring=settings.enable_monitoring,
    )


@contextlib.contextmanager
def interrupt_sets(stop: asyncio.Event) -> Iterator[None]:
    """While the block runs, SIGINT/SIGTERM set ``stop`` instead of raising.

    Only the live monitor loop is wrapped in this; everywhere else an
    interrupt keeps its default behaviour and ends the process.
    """
    loop = asyncio.get_running_loop()
    installed = []
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, stop.set)
            installed.append(sig)
        except (NotImplementedError, RuntimeError, ValueError) as e:
            # Windows event loops and non-main threads cannot install handlers
            logger.debug(f"Signal handler for {sig} unavailable: {e}")
    try:
        yield
    finally:
        for sig in installed:
            loop.remove_signal_handler(sig)


def _launch(ctx: click.Context, kind: UIKind, args=(), **kwargs) -> None:
    launcher = build_launcher(ctx.obj["settings"])
    asyncio.run(launcher.launch(kind, args, **kwargs))


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(__version__, prog_name="swarmcompat")
@click.option("--log-level", default=None, help="Log level (override env)")
@click.option("--log-format", type=click.Choice(["json", "text"]), default=None)
@click.option(
    "--no-fallback",
    is_flag=True,
    default=False,
    help="Fail instead of falling back to the text interface",
)
@click.pass_context
def main(ctx: click.Context, log_level: Optional[str], log_format: Optional[str], no_fallback: bool) -> None:
    """swarmcompat - interactive swarm UIs with text-mode fallback."""
    settings = _load_settings(
        log_level=log_level,
        log_format=log_format,
        fallback_to_text=False if no_fallback else None,
    )
    configure_logging(settings.log_level, settings.log_format)
    ctx.ensure_object(dict)
    ctx.obj["settings"] = settings


@main.command()
@click.argument("objective", required=False)
@click.option(
    "--strategy",
    type=click.Choice([s.value for s in Strategy]),
    default=Strategy.AUTO.value,
    show_default=True,
)
@click.option("--max-agents", type=click.IntRange(min=1), default=5, show_default=True)
@click.option("--timeout", "timeout_minutes", type=click.IntRange(min=1), default=60, show_default=True,
              help="Timeout in minutes")
@click.option("--monitor", is_flag=True, default=False, help="Keep monitoring after the run listing")
@click.pass_context
def swarm(ctx: click.Context, objective: Optional[str], strategy: str, max_agents: int,
          timeout_minutes: int, monitor: bool) -> None:
    """🐝 Swarm UI: run OBJECTIVE, or list recent runs when omitted."""
    if monitor:
        ctx.obj["settings"] = ctx.obj["settings"].with_overrides(enable_monitoring=True)
    options = ExecutionOptions(strategy=strategy, max_agents=max_agents, timeout_minutes=timeout_minutes)
    args = []
    if objective:
        args = [objective, "--strategy", strategy, "--max-agents", str(max_agents),
                "--timeout", str(timeout_minutes)]
    _launch(ctx, UIKind.SWARM, args, objective=objective, options=options)


@main.command()
@click.pass_context
def monitor(ctx: click.Context) -> None:
    """📊 Live monitor (Ctrl+C to stop)."""
    _launch(ctx, UIKind.MONITOR)
    ctx.exit(0)


@main.command()
@click.pass_context
def dashboard(ctx: click.Context) -> None:
    """📈 System dashboard."""
    _launch(ctx, UIKind.DASHBOARD)


@main.command()
def diagnose() -> None:
    """🔍 Show terminal diagnostics and UI support."""
    show_diagnostics(console=console)


@main.command()
@click.argument("objective")
@click.option(
    "--strategy",
    type=click.Choice([s.value for s in Strategy]),
    default=Strategy.AUTO.value,
    show_default=True,
)
def plan(objective: str, strategy: str) -> None:
    """📋 Print the task breakdown for OBJECTIVE without running it."""
    tasks = generate_task_plan(objective, strategy)
    for index, task in enumerate(tasks, start=1):
        console.print(f"{index}. {task.type}: {task.description}", markup=False)


if __name__ == "__main__":
    main()
