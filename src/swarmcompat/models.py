"""Core data models shared by the probe, the simulators and the renderers.

Everything here is created per invocation and discarded on exit:

- ``SupportVerdict``: outcome of one environment probe
- ``ExecutionOptions``: caller supplied swarm options (read-only)
- ``TaskDescriptor`` / ``TaskPlan``: the simulated task breakdown
- ``MonitorTick``: one sample printed by the text monitor
- ``RunRecord``: the ``config.json`` of a stored swarm run
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


class Strategy(str, Enum):
    AUTO = "auto"
    RESEARCH = "research"
    DEVELOPMENT = "development"
    ANALYSIS = "analysis"


class UIKind(str, Enum):
    SWARM = "swarm"
    MONITOR = "monitor"
    DASHBOARD = "dashboard"


@dataclass(frozen=True)
class SupportVerdict:
    """Whether the interactive UI can run here, and what to do if not."""

    supported: bool
    reason: Optional[str] = None
    suggestions: Tuple[str, ...] = ()


class ExecutionOptions(BaseModel):
    model_config = ConfigDict(frozen=True)

    strategy: Strategy = Strategy.AUTO
    max_agents: int = Field(default=5, ge=1, description="Maximum concurrent agents")
    timeout_minutes: int = Field(default=60, ge=1, description="Swarm timeout in minutes")


@dataclass(frozen=True)
class TaskDescriptor:
    type: str
    description: str


TaskPlan = Tuple[TaskDescriptor, ...]


@dataclass(frozen=True)
class SimulationSummary:
    tasks_completed: int
    total_tasks: int
    success_rate: int = 100
    simulated_seconds: float = 0.0


@dataclass(frozen=True)
class MonitorTick:
    timestamp: datetime
    memory_mb: float
    active_run_count: int = 0


class RunOptions(BaseModel):
    strategy: Optional[str] = None


class RunRecord(BaseModel):
    """A stored swarm run, as written to ``<runs_dir>/<run_id>/config.json``."""

    model_config = ConfigDict(populate_by_name=True)

    swarm_id: str = Field(alias="swarmId")
    objective: str
    start_time: datetime = Field(alias="startTime")
    options: RunOptions = Field(default_factory=RunOptions)

    @property
    def strategy(self) -> str:
        return self.options.strategy or Strategy.AUTO.value
