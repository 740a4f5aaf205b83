"""Simulated swarm execution used when no live backend is available."""

from .progress_simulator import ProgressEvent, ProgressPhase, ProgressSimulator, uniform_delay
from .task_plan import generate_task_plan

__all__ = [
    'ProgressEvent',
    'ProgressPhase',
    'ProgressSimulator',
    'generate_task_plan',
    'uniform_delay',
]
