"""Text-mode live monitor.

A three-state loop: IDLE until started, POLLING while a fixed-interval timer
prints one ``MonitorTick`` per interval, STOPPED once the host sets the stop
token. The timer task is the only resource and is cancelled exactly once on
the way to STOPPED.
"""

from __future__ import annotations

import asyncio
import logging
import os
from datetime import datetime
from enum import Enum
from typing import Callable, Optional

import psutil
from rich.console import Console

from ..models import MonitorTick
from ..runs import RunStore

logger = logging.getLogger(__name__)


class MonitorState(Enum):
    IDLE = "idle"
    POLLING = "polling"
    STOPPED = "stopped"


def process_memory_mb() -> float:
    """Resident memory of this process in MB."""
    process = psutil.Process(os.getpid())
    return process.memory_info().rss / 1024 / 1024


class TextMonitor:
    """Prints periodic system checks until the stop token is set.

    Args:
        run_store: source of the active-run count
        console: output target
        interval: seconds between ticks
        memory_probe: returns current memory usage in MB
        on_tick: optional hook called with every tick after it is printed
    """

    def __init__(
        self,
        run_store: RunStore,
        console: Optional[Console] = None,
        interval: float = 5.0,
        memory_probe: Callable[[], float] = process_memory_mb,
        on_tick: Optional[Callable[[MonitorTick], None]] = None,
    ):
        self.run_store = run_store
        self.console = console or Console(highlight=False)
        self.interval = interval
        self.memory_probe = memory_probe
        self.on_tick = on_tick
        self.state = MonitorState.IDLE
        self.ticks_emitted = 0
        self._timer: Optional[asyncio.Task] = None

    def sample(self) -> MonitorTick:
        return MonitorTick(
            timestamp=datetime.now(),
            memory_mb=self.memory_probe(),
            active_run_count=self.run_store.count_runs(),
        )

    def print_tick(self, tick: MonitorTick) -> None:
        self.console.print(f"\n[{tick.timestamp.strftime('%H:%M:%S')}] System Check:", markup=False)
        self.console.print(f"  💾 Memory: {round(tick.memory_mb)}MB")
        self.console.print(f"  🐝 Active swarms: {tick.active_run_count}")
        self.console.print(f"  ⏰ Next check in {self.interval:g} seconds...")

    async def run(self, stop: asyncio.Event) -> None:
        """Poll until ``stop`` is set. Never returns on its own."""
        if self.state is not MonitorState.IDLE:
            raise RuntimeError(f"monitor already {self.state.value}")

        self.console.print("\n👀 Starting text monitoring (Ctrl+C to stop)...")
        self.console.print("─" * 50)
        self.state = MonitorState.POLLING
        self._timer = asyncio.create_task(self._tick_forever())
        try:
            await stop.wait()
        finally:
            await self._stop_timer()

    async def _tick_forever(self) -> None:
        while True:
            await asyncio.sleep(self.interval)
            try:
                self._tick()
            except Exception as e:
                # A failed check skips one tick; polling goes on until stopped
                logger.warning(f"Monitor check failed: {e}")

    def _tick(self) -> None:
        tick = self.sample()
        self.print_tick(tick)
        self.ticks_emitted += 1
        if self.on_tick:
            self.on_tick(tick)

    async def _stop_timer(self) -> None:
        timer, self._timer = self._timer, None
        if timer is None:
            return
        timer.cancel()
        try:
            await timer
        except asyncio.CancelledError:
            pass
        finally:
            self.state = MonitorState.STOPPED
            logger.debug(f"Monitor stopped after {self.ticks_emitted} ticks")
            self.console.print("\n\n👋 Monitoring stopped")
