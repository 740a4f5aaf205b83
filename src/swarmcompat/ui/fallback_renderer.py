"""Plain text renderer - the degraded-mode counterpart of every interactive UI."""

from __future__ import annotations

import asyncio
import contextlib
import logging
import os
import platform
import time
from typing import Callable, ContextManager, Optional

import psutil
from rich.console import Console

from ..errors import RunLookupError
from ..models import ExecutionOptions
from ..runs import RunStore
from ..simulation import ProgressSimulator, generate_task_plan
from .terminal_capabilities import EnvironmentProbe
from .text_monitor import TextMonitor

logger = logging.getLogger(__name__)

RULE_WIDTH = 50

SWARM_COMMANDS = (
    'swarmcompat swarm "<objective>" - Create new swarm',
    "swarmcompat swarm - List active swarms",
    "swarmcompat dashboard - Show system status",
    "swarmcompat monitor - Monitor system activity",
    "swarmcompat diagnose - Check terminal compatibility",
)

EXECUTION_PLAN = (
    "Initialize swarm coordination system",
    "Create task breakdown based on strategy",
    "Spawn agents for parallel execution",
    "Monitor progress and collect results",
    "Generate final report",
)


class FallbackRenderer:
    """Text renderings of the swarm, monitor and dashboard views.

    The swarm and monitor views may enter the live monitor loop; that loop
    runs until its ``stop`` token is set. ``interrupt_guard`` is entered
    around the loop only, so the host can map interrupts onto the token there.
    """

    def __init__(
        self,
        run_store: RunStore,
        console: Optional[Console] = None,
        probe: Optional[EnvironmentProbe] = None,
        simulator: Optional[ProgressSimulator] = None,
        monitor_interval: float = 5.0,
        recent_limit: int = 5,
        show_progress: bool = True,
        interrupt_guard: Optional[Callable[[asyncio.Event], ContextManager[None]]] = None,
    ):
        self.run_store = run_store
        self.console = console or Console(highlight=False)
        self.probe = probe or EnvironmentProbe()
        self.simulator = simulator or ProgressSimulator(console=self.console)
        self.monitor_interval = monitor_interval
        self.recent_limit = recent_limit
        self.show_progress = show_progress
        self.interrupt_guard = interrupt_guard

    def _banner(self, title: str, width: int = RULE_WIDTH) -> None:
        self.console.print(title)
        self.console.print("═" * width)

    # ------------------------------------------------------------------ #
    #  Swarm
    # ------------------------------------------------------------------ #
    async def render_swarm_text(self, monitor: bool = False, stop: Optional[asyncio.Event] = None) -> None:
        self._banner("🐝 Swarm - Text Interface")
        self.show_run_status()

        self.console.print("\n📋 Available Commands:")
        for command in SWARM_COMMANDS:
            self.console.print(f"  • {command}", markup=False)

        self.console.print("\n💡 For real-time monitoring, use:")
        self.console.print("  swarmcompat monitor")

        if monitor:
            await self._monitor(stop)

    def show_run_status(self) -> int:
        """List the most recent runs; returns how many runs were found."""
        try:
            run_ids = self.run_store.list_run_ids()
        except RunLookupError as e:
            logger.debug(f"Run listing unavailable: {e}")
            self.console.print("📋 No swarm runs directory found")
            return 0

        if not run_ids:
            self.console.print("📋 No active swarms found")
            return 0

        self.console.print(f"\n🐝 Active Swarms ({len(run_ids)}):")
        self.console.print("─" * RULE_WIDTH)

        # Malformed records still occupy one of the visible slots
        for run_id in run_ids[: self.recent_limit]:
            try:
                record = self.run_store.read_record(run_id)
            except RunLookupError as e:
                logger.debug(f"Skipping run {run_id}: {e}")
                continue
            started = record.start_time.astimezone().strftime("%Y-%m-%d %H:%M:%S")
            self.console.print(f"  🆔 {record.swarm_id}", markup=False)
            self.console.print(f"     📝 {record.objective}", markup=False)
            self.console.print(f"     ⏰ Started: {started}")
            self.console.print(f"     🎯 Strategy: {record.strategy}", markup=False)
            self.console.print()

        if len(run_ids) > self.recent_limit:
            self.console.print(f"     ... and {len(run_ids) - self.recent_limit} more")
        return len(run_ids)

    async def render_swarm_execution(self, objective: str, options: Optional[ExecutionOptions] = None) -> None:
        """Degraded-mode swarm run: show the plan and simulate its progress."""
        options = options or ExecutionOptions()
        width = 60
        self._banner("🐝 Swarm - Compatible Mode", width)
        self.console.print(f"📋 Objective: {objective}", markup=False)
        self.console.print(f"🎯 Strategy: {options.strategy.value}")
        self.console.print(f"🤖 Max Agents: {options.max_agents}")
        self.console.print(f"⏱️  Timeout: {options.timeout_minutes} minutes")
        self.console.print("═" * width)

        verdict = self.probe.detect()
        wsl_distro = self.probe.environ.get("WSL_DISTRO_NAME")
        self.console.print("\n📊 Environment Information:")
        self.console.print(f"  • Platform: {platform.system()}")
        self.console.print(f"  • WSL: {f'Yes ({wsl_distro})' if wsl_distro else 'No'}", markup=False)
        self.console.print(f"  • TTY: {'Yes' if self.probe.is_tty() else 'No'}")
        self.console.print(f"  • Raw Mode: {'Supported' if verdict.supported else 'Not Supported'}")

        self.console.print("\n🚀 Swarm Execution Plan:")
        for index, step in enumerate(EXECUTION_PLAN, start=1):
            self.console.print(f"  {index}. {step}")

        if self.show_progress:
            self.console.print("\n🔄 Simulating swarm execution...")
            plan = generate_task_plan(objective, options.strategy)
            self.simulator.show_breakdown(plan)
            await self.simulator.run(plan)

        self.console.print("\n✅ Swarm execution completed successfully")
        self.console.print("\n💡 To run actual swarm execution:")
        self.console.print("  • Use an external terminal (not VS Code integrated)")
        self.console.print("  • Run: swarmcompat diagnose to check terminal support")

    # ------------------------------------------------------------------ #
    #  Monitor
    # ------------------------------------------------------------------ #
    async def render_monitor_text(self, stop: Optional[asyncio.Event] = None) -> None:
        self._banner("📊 Monitor - Text Interface")
        await self._monitor(stop)

    async def _monitor(self, stop: Optional[asyncio.Event]) -> None:
        stop = stop or asyncio.Event()
        monitor = TextMonitor(self.run_store, console=self.console, interval=self.monitor_interval)
        guard = self.interrupt_guard(stop) if self.interrupt_guard else contextlib.nullcontext()
        with guard:
            await monitor.run(stop)

    # ------------------------------------------------------------------ #
    #  Dashboard
    # ------------------------------------------------------------------ #
    async def render_dashboard_text(self) -> None:
        self._banner("📈 Dashboard - Text Interface")

        process = psutil.Process(os.getpid())
        memory_mb = process.memory_info().rss / 1024 / 1024
        uptime = time.time() - process.create_time()

        self.console.print("\n📊 System Status:")
        self.console.print("─" * 30)
        self.console.print(f"  🖥️  Platform: {platform.system()}")
        self.console.print(f"  🐍 Python: {platform.python_version()}")
        self.console.print(f"  💾 Memory: {round(memory_mb)}MB")
        self.console.print(f"  ⏱️  Uptime: {round(uptime)}s")

        self.console.print("\n🔄 Active Components:")
        self.console.print("  • CLI: ✅ Running")
        self.console.print("  • Orchestrator: ⚠️  Not started")
        self.console.print("  • MCP Server: ⚠️  Not started")
        self.console.print("  • Web UI: ⚠️  Not started")

        self.console.print("\n💡 To start components:")
        self.console.print("  swarmcompat swarm \"<objective>\"")

    async def render_unknown(self, kind: str) -> None:
        self.console.print(f"📋 Text interface for {kind} not implemented", markup=False)
        self.console.print("💡 Use standard CLI commands instead")
