"""
Tests for UILauncher: exactly one of the interactive UI or the text fallback runs.
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from conftest import make_probe
from swarmcompat.errors import EnvironmentUnsupportedError, LaunchFailureError
from swarmcompat.models import ExecutionOptions, UIKind
from swarmcompat.ui.fallback_renderer import FallbackRenderer
from swarmcompat.ui.ui_launcher import UILauncher, UIScriptLocator, ui_process_env


@pytest.fixture
def ui_dir(tmp_path):
    path = tmp_path / "ui"
    path.mkdir()
    for kind in UIKind:
        (path / f"{kind.value}-ui.js").write_text("// ui")
    return path


@pytest.fixture
def fallback(output):
    renderer = MagicMock(spec=FallbackRenderer)
    renderer.console = output.console
    return renderer


def _launcher(ui_dir, fallback, supported=True, fallback_to_text=True, enable_monitoring=False):
    probe, _, _ = make_probe(tty=supported)
    return UILauncher(
        probe,
        UIScriptLocator(ui_dir, runtime="node"),
        fallback,
        fallback_to_text=fallback_to_text,
        enable_monitoring=enable_monitoring,
    )


def _process(returncode=0):
    process = MagicMock()
    process.wait = AsyncMock(return_value=returncode)
    return process


class TestUnsupportedEnvironment:

    @pytest.mark.asyncio
    async def test_degrades_to_fallback(self, ui_dir, fallback, output):
        launcher = _launcher(ui_dir, fallback, supported=False)

        with patch("asyncio.create_subprocess_exec", new=AsyncMock()) as spawn:
            await launcher.launch(UIKind.DASHBOARD)

        spawn.assert_not_called()
        fallback.render_dashboard_text.assert_awaited_once()
        text = output.text
        assert "Reason: not a TTY" in text
        assert "Use --no-ui flag to disable UI" in text
        assert "Falling back to text-based interface" in text

    @pytest.mark.asyncio
    async def test_fails_without_fallback(self, ui_dir, fallback):
        launcher = _launcher(ui_dir, fallback, supported=False, fallback_to_text=False)

        with pytest.raises(EnvironmentUnsupportedError) as exc_info:
            await launcher.launch(UIKind.MONITOR)

        assert exc_info.value.verdict.reason == "not a TTY"
        assert "Use text-based commands instead" in exc_info.value.details
        fallback.render_monitor_text.assert_not_called()


class TestSupportedEnvironment:

    @pytest.mark.asyncio
    async def test_runs_interactive_ui(self, ui_dir, fallback):
        launcher = _launcher(ui_dir, fallback)

        with patch("asyncio.create_subprocess_exec", new=AsyncMock(return_value=_process(0))) as spawn:
            await launcher.launch(UIKind.SWARM, ["--flag"])

        command = spawn.call_args.args
        assert command == ("node", str(ui_dir / "swarm-ui.js"), "--flag")
        env = spawn.call_args.kwargs["env"]
        assert env["FORCE_COLOR"] == "1"
        assert env["TERM"]
        fallback.render_swarm_text.assert_not_called()
        fallback.render_swarm_execution.assert_not_called()

    @pytest.mark.asyncio
    async def test_nonzero_exit_degrades(self, ui_dir, fallback, output):
        launcher = _launcher(ui_dir, fallback)

        with patch("asyncio.create_subprocess_exec", new=AsyncMock(return_value=_process(2))) as spawn:
            await launcher.launch(UIKind.DASHBOARD)

        assert spawn.await_count == 1
        fallback.render_dashboard_text.assert_awaited_once()
        assert "UI process exited with code 2" in output.text

    @pytest.mark.asyncio
    async def test_spawn_error_degrades(self, ui_dir, fallback):
        launcher = _launcher(ui_dir, fallback)

        with patch("asyncio.create_subprocess_exec", new=AsyncMock(side_effect=FileNotFoundError("node"))):
            await launcher.launch(UIKind.MONITOR)

        fallback.render_monitor_text.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_missing_script_degrades(self, tmp_path, fallback, output):
        launcher = _launcher(tmp_path / "empty", fallback)

        with patch("asyncio.create_subprocess_exec", new=AsyncMock()) as spawn:
            await launcher.launch(UIKind.DASHBOARD)

        spawn.assert_not_called()
        assert "UI script not found" in output.text
        fallback.render_dashboard_text.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_failure_propagates_without_fallback(self, ui_dir, fallback):
        launcher = _launcher(ui_dir, fallback, fallback_to_text=False)

        with patch("asyncio.create_subprocess_exec", new=AsyncMock(return_value=_process(1))):
            with pytest.raises(LaunchFailureError) as exc_info:
                await launcher.launch(UIKind.SWARM)

        assert exc_info.value.kind == "swarm"
        fallback.render_swarm_text.assert_not_called()

    @pytest.mark.asyncio
    async def test_unknown_kind_falls_back_to_notice(self, ui_dir, fallback):
        launcher = _launcher(ui_dir, fallback)

        await launcher.launch("graph")

        fallback.render_unknown.assert_awaited_once_with("graph")


class TestFallbackRouting:

    @pytest.mark.asyncio
    async def test_swarm_with_objective_simulates(self, ui_dir, fallback):
        launcher = _launcher(ui_dir, fallback, supported=False)
        options = ExecutionOptions(strategy="research")

        await launcher.launch(UIKind.SWARM, objective="map the market", options=options)

        fallback.render_swarm_execution.assert_awaited_once_with("map the market", options)
        fallback.render_swarm_text.assert_not_called()

    @pytest.mark.asyncio
    async def test_swarm_without_objective_lists_runs(self, ui_dir, fallback):
        launcher = _launcher(ui_dir, fallback, supported=False, enable_monitoring=True)

        await launcher.launch("swarm", stop=None)

        fallback.render_swarm_text.assert_awaited_once_with(monitor=True, stop=None)


def test_locator_rejects_unknown_kind(ui_dir):
    with pytest.raises(LaunchFailureError):
        UIScriptLocator(ui_dir).script_path("graph")


def test_process_env_keeps_existing_term():
    env = ui_process_env({"TERM": "screen", "PATH": "/bin"})

    assert env == {"TERM": "screen", "PATH": "/bin", "FORCE_COLOR": "1"}
    assert ui_process_env({})["TERM"] == "xterm-256color"
