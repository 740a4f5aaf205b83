"""Sequential stand-in for real swarm execution feedback.

Each task gets a "starting" event, a randomized pause and a "completed"
event before the next task begins. There is no cancellation hook; an
interrupt during simulation ends the host process.
"""

from __future__ import annotations

import asyncio
import logging
import random
from dataclasses import dataclass
from enum import Enum
from typing import Awaitable, Callable, Optional

from rich.console import Console

from ..models import SimulationSummary, TaskDescriptor, TaskPlan

logger = logging.getLogger(__name__)

# Reported total time per task, independent of the real pauses
SIMULATED_SECONDS_PER_TASK = 1.5

DelayFn = Callable[[int], float]
SleepFn = Callable[[float], Awaitable[None]]


class ProgressPhase(Enum):
    STARTING = "starting"
    COMPLETED = "completed"


@dataclass(frozen=True)
class ProgressEvent:
    phase: ProgressPhase
    index: int
    agent_id: str
    task: TaskDescriptor


def uniform_delay(rng: Optional[random.Random] = None, low: float = 1.0, high: float = 3.0) -> DelayFn:
    """Delay generator drawing uniformly from [low, high) seconds."""
    rng = rng or random.Random()

    def _next_delay(index: int) -> float:
        return low + rng.random() * (high - low)

    return _next_delay


class ProgressSimulator:
    """Renders a task plan as a single-worker timeline."""

    def __init__(
        self,
        console: Optional[Console] = None,
        delay: Optional[DelayFn] = None,
        sleep: SleepFn = asyncio.sleep,
        on_event: Optional[Callable[[ProgressEvent], None]] = None,
    ):
        self.console = console or Console(highlight=False)
        self.delay = delay or uniform_delay()
        self.sleep = sleep
        self.on_event = on_event

    def show_breakdown(self, plan: TaskPlan) -> None:
        self.console.print(f"\n📋 Task Breakdown ({len(plan)} tasks):")
        for index, task in enumerate(plan, start=1):
            self.console.print(f"  {index}. {task.type}: {task.description}", markup=False)

    async def run(self, plan: TaskPlan) -> SimulationSummary:
        """Simulate ``plan`` strictly in order and print the execution summary."""
        self.console.print("\n🤖 Agent Execution:")
        for index, task in enumerate(plan):
            agent_id = f"agent-{index + 1}"
            self._emit(ProgressEvent(ProgressPhase.STARTING, index, agent_id, task))
            await self.sleep(self.delay(index))
            self._emit(ProgressEvent(ProgressPhase.COMPLETED, index, agent_id, task))

        summary = SimulationSummary(
            tasks_completed=len(plan),
            total_tasks=len(plan),
            success_rate=100,
            simulated_seconds=SIMULATED_SECONDS_PER_TASK * len(plan),
        )
        self.console.print("\n📊 Execution Summary:")
        self.console.print(f"  • Tasks completed: {summary.tasks_completed}/{summary.total_tasks}")
        self.console.print(f"  • Success rate: {summary.success_rate}%")
        self.console.print(f"  • Total time: {summary.simulated_seconds:g}s (simulated)")
        return summary

    def _emit(self, event: ProgressEvent) -> None:
        icon = "🔄" if event.phase is ProgressPhase.STARTING else "✅"
        self.console.print(
            f"  {icon} {event.agent_id} {event.phase.value}: {event.task.type}", markup=False
        )
        logger.debug(f"{event.agent_id} {event.phase.value} task {event.index}")
        if self.on_event:
            self.on_event(event)
