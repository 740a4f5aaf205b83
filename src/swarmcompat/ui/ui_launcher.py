"""UI launcher - interactive UI when the terminal allows it, text fallback otherwise."""

from __future__ import annotations

import asyncio
import logging
import os
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Union

from rich.console import Console

from ..errors import EnvironmentUnsupportedError, LaunchFailureError
from ..models import ExecutionOptions, SupportVerdict, UIKind
from .fallback_renderer import FallbackRenderer
from .terminal_capabilities import EnvironmentProbe

logger = logging.getLogger(__name__)


def _kind_name(kind: Union[UIKind, str]) -> str:
    return kind.value if isinstance(kind, UIKind) else str(kind)


class UIScriptLocator:
    """Maps a UI kind to the script that implements its interactive UI."""

    def __init__(self, ui_dir: Union[str, Path], runtime: str = "node"):
        self.ui_dir = Path(ui_dir)
        self.runtime = runtime

    def script_path(self, kind: Union[UIKind, str]) -> Path:
        try:
            kind = UIKind(kind)
        except ValueError:
            raise LaunchFailureError(_kind_name(kind), f"Unknown UI type: {kind}") from None
        return self.ui_dir / f"{kind.value}-ui.js"

    def command(self, kind: Union[UIKind, str], args: Sequence[str] = ()) -> List[str]:
        return [self.runtime, str(self.script_path(kind)), *args]


def ui_process_env(base: Optional[Dict[str, str]] = None) -> Dict[str, str]:
    """Environment for the UI process: inherited, colour forced, TERM defaulted."""
    env = dict(os.environ if base is None else base)
    env["FORCE_COLOR"] = "1"
    env["TERM"] = env.get("TERM") or "xterm-256color"
    return env


class UILauncher:
    """Runs exactly one of the interactive UI process or the text fallback.

    Launch faults are never retried: each one either degrades to the
    fallback renderer or is raised to the caller.
    """

    def __init__(
        self,
        probe: EnvironmentProbe,
        locator: UIScriptLocator,
        fallback: FallbackRenderer,
        console: Optional[Console] = None,
        fallback_to_text: bool = True,
        enable_monitoring: bool = False,
    ):
        self.probe = probe
        self.locator = locator
        self.fallback = fallback
        self.console = console or fallback.console
        self.fallback_to_text = fallback_to_text
        self.enable_monitoring = enable_monitoring

    async def launch(
        self,
        kind: Union[UIKind, str],
        args: Sequence[str] = (),
        objective: Optional[str] = None,
        options: Optional[ExecutionOptions] = None,
        stop: Optional[asyncio.Event] = None,
    ) -> None:
        verdict = self.probe.detect()
        if not verdict.supported:
            self._report_unsupported(verdict)
            if not self.fallback_to_text:
                raise EnvironmentUnsupportedError(verdict)
            self.console.print("🔄 Falling back to text-based interface...\n")
            await self.launch_text_fallback(kind, objective=objective, options=options, stop=stop)
            return

        try:
            await self.launch_interactive(kind, args)
        except LaunchFailureError as e:
            logger.warning(f"Interactive {_kind_name(kind)} UI failed: {e.detail}")
            self.console.print(f"⚠️  Failed to launch interactive UI: {e.detail}", markup=False)
            if not self.fallback_to_text:
                raise
            self.console.print("🔄 Falling back to text-based interface...\n")
            await self.launch_text_fallback(kind, objective=objective, options=options, stop=stop)

    async def launch_interactive(self, kind: Union[UIKind, str], args: Sequence[str] = ()) -> None:
        """Run the external UI process with inherited stdio; raise LaunchFailureError on any fault."""
        script = self.locator.script_path(kind)
        if not script.exists():
            raise LaunchFailureError(_kind_name(kind), f"UI script not found: {script}")

        command = self.locator.command(kind, args)
        logger.debug(f"Launching interactive UI: {command}")
        try:
            process = await asyncio.create_subprocess_exec(*command, env=ui_process_env())
            code = await process.wait()
        except (OSError, ValueError) as e:
            raise LaunchFailureError(_kind_name(kind), f"Failed to launch UI: {e}") from e

        if code != 0:
            raise LaunchFailureError(_kind_name(kind), f"UI process exited with code {code}")

    async def launch_text_fallback(
        self,
        kind: Union[UIKind, str],
        objective: Optional[str] = None,
        options: Optional[ExecutionOptions] = None,
        stop: Optional[asyncio.Event] = None,
    ) -> None:
        try:
            kind = UIKind(kind)
        except ValueError:
            await self.fallback.render_unknown(_kind_name(kind))
            return

        if kind is UIKind.SWARM:
            if objective:
                await self.fallback.render_swarm_execution(objective, options)
            else:
                await self.fallback.render_swarm_text(monitor=self.enable_monitoring, stop=stop)
        elif kind is UIKind.MONITOR:
            await self.fallback.render_monitor_text(stop=stop)
        else:
            await self.fallback.render_dashboard_text()

    def _report_unsupported(self, verdict: SupportVerdict) -> None:
        logger.warning(f"Interactive UI unsupported: {verdict.reason}")
        self.console.print("⚠️  Interactive UI not supported in this environment")
        self.console.print(f"📊 Reason: {verdict.reason}", markup=False)
        if verdict.suggestions:
            self.console.print("💡 Suggestions:")
            for suggestion in verdict.suggestions:
                self.console.print(f"  • {suggestion}", markup=False)
