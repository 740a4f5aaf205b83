"""
Tests for the sequential progress simulator.
"""

import random

import pytest

from swarmcompat.simulation import ProgressPhase, ProgressSimulator, generate_task_plan, uniform_delay


class RecordingSleep:
    """Async sleep replacement that records requested durations."""

    def __init__(self, log=None):
        self.durations = []
        self.log = log

    async def __call__(self, seconds):
        self.durations.append(seconds)
        if self.log is not None:
            self.log.append(("sleep", seconds))


@pytest.mark.asyncio
async def test_events_strictly_sequential(output):
    plan = generate_task_plan("ship it", "development")
    log = []
    simulator = ProgressSimulator(
        console=output.console,
        delay=lambda index: 0.1 * (index + 1),
        sleep=RecordingSleep(log),
        on_event=lambda event: log.append((event.phase, event.index)),
    )

    await simulator.run(plan)

    expected = []
    for index in range(len(plan)):
        expected += [
            (ProgressPhase.STARTING, index),
            ("sleep", pytest.approx(0.1 * (index + 1))),
            (ProgressPhase.COMPLETED, index),
        ]
    assert log == expected


@pytest.mark.asyncio
async def test_summary_and_output(output):
    plan = generate_task_plan("analyze sales data", "auto")
    simulator = ProgressSimulator(console=output.console, delay=lambda i: 0, sleep=RecordingSleep())

    summary = await simulator.run(plan)

    assert summary.tasks_completed == 3
    assert summary.total_tasks == 3
    assert summary.success_rate == 100
    assert summary.simulated_seconds == pytest.approx(4.5)

    text = output.text
    assert "agent-1 starting: research" in text
    assert "agent-3 completed: report" in text
    assert "Tasks completed: 3/3" in text
    assert "Success rate: 100%" in text
    assert "Total time: 4.5s (simulated)" in text
    assert text.index("agent-1 completed") < text.index("agent-2 starting")


@pytest.mark.asyncio
async def test_empty_plan_completes(output):
    simulator = ProgressSimulator(console=output.console, sleep=RecordingSleep())

    summary = await simulator.run(())

    assert summary.tasks_completed == 0
    assert summary.simulated_seconds == 0


def test_breakdown_lists_every_task(output):
    plan = generate_task_plan("build [x]", "auto")
    ProgressSimulator(console=output.console).show_breakdown(plan)

    assert "Task Breakdown (3 tasks)" in output.text
    assert "1. planning: Plan solution for: build [x]" in output.text


def test_uniform_delay_bounds():
    delay = uniform_delay(random.Random(7))

    samples = [delay(i) for i in range(500)]

    assert all(1.0 <= s < 3.0 for s in samples)
    assert max(samples) - min(samples) > 1.0
