"""
Shared fixtures for swarmcompat tests.

Terminal state, environment variables, run directories and console output
are all faked here so no test touches the real terminal.
"""

import io
import json
import logging
import os
import time
from pathlib import Path

import pytest
from rich.console import Console

from swarmcompat.runs import RunStore
from swarmcompat.ui.terminal_capabilities import EnvironmentProbe


class FakeStdin:
    """Stand-in for sys.stdin with a configurable TTY flag."""

    def __init__(self, tty: bool = True):
        self._tty = tty

    def isatty(self) -> bool:
        return self._tty


class FakeRawControl:
    """Terminal mode held in memory; can fault on enable or after enabling."""

    def __init__(self, mode: str = "cooked", fail_on_enable: bool = False, fail_after_enable: bool = False):
        self.mode = mode
        self.fail_on_enable = fail_on_enable
        self.fail_after_enable = fail_after_enable
        self.calls = []

    def save(self) -> str:
        self.calls.append("save")
        return self.mode

    def enter_raw(self) -> None:
        self.calls.append("raw")
        if self.fail_on_enable:
            raise OSError("Inappropriate ioctl for device")
        self.mode = "raw"
        if self.fail_after_enable:
            raise OSError("terminal went away")

    def restore(self, saved: str) -> None:
        self.calls.append("restore")
        self.mode = saved


class CapturedConsole:
    """Rich console bound to an in-memory buffer."""

    def __init__(self):
        self.buffer = io.StringIO()
        self.console = Console(file=self.buffer, width=200, highlight=False, color_system=None)

    @property
    def text(self) -> str:
        return self.buffer.getvalue()


def make_probe(tty=True, environ=None, control=None, control_available=True):
    """Build a probe over fakes; returns (probe, control, factory_calls)."""
    control = control if control is not None else FakeRawControl()
    factory_calls = []

    def factory(stream):
        factory_calls.append(stream)
        return control if control_available else None

    probe = EnvironmentProbe(stdin=FakeStdin(tty), environ=environ or {}, control_factory=factory)
    return probe, control, factory_calls


@pytest.fixture
def output():
    """Console writing into a buffer; ``output.text`` reads it back."""
    return CapturedConsole()


@pytest.fixture
def runs_dir(tmp_path):
    path = tmp_path / "swarm-runs"
    path.mkdir()
    return path


def _write_run(runs_dir: Path, run_id: str, record=None, raw: str = None, age: float = 0.0) -> Path:
    """Create ``runs_dir/run_id/config.json``; ``age`` seconds in the past."""
    run_path = runs_dir / run_id
    run_path.mkdir()
    config = run_path / "config.json"
    if raw is not None:
        config.write_text(raw)
    else:
        data = record or {
            "swarmId": run_id,
            "objective": f"objective for {run_id}",
            "startTime": "2024-03-01T10:00:00Z",
            "options": {"strategy": "research"},
        }
        config.write_text(json.dumps(data))
    stamp = time.time() - age
    os.utime(run_path, (stamp, stamp))
    return run_path


@pytest.fixture
def make_run(runs_dir):
    """Factory writing run records into the temporary runs directory."""
    def _make(run_id, record=None, raw=None, age=0.0):
        return _write_run(runs_dir, run_id, record=record, raw=raw, age=age)
    return _make


@pytest.fixture
def run_store(runs_dir):
    return RunStore(runs_dir)


@pytest.fixture
def probe_factory():
    return make_probe


@pytest.fixture(autouse=True)
def restore_root_logging():
    """configure_logging() replaces root handlers; put pytest's back afterwards."""
    root = logging.getLogger()
    asyncio_logger = logging.getLogger("asyncio")
    handlers, level, asyncio_level = list(root.handlers), root.level, asyncio_logger.level
    yield
    root.handlers = handlers
    root.setLevel(level)
    asyncio_logger.setLevel(asyncio_level)
