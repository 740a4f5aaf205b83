"""Environment diagnostics report for the interactive UI."""

from __future__ import annotations

import platform
from typing import Optional

from rich.console import Console

from ..models import SupportVerdict
from .terminal_capabilities import EnvironmentProbe

RECOMMENDATIONS = (
    "Use --no-ui flag to disable interactive UI",
    "Run in Windows Terminal or external terminal",
    "Use text-based commands for automation",
    "Consider using the web UI interface",
)


def show_diagnostics(probe: Optional[EnvironmentProbe] = None, console: Optional[Console] = None) -> SupportVerdict:
    """Print platform, terminal and detection details plus the probe verdict."""
    probe = probe or EnvironmentProbe()
    console = console or Console(highlight=False)
    env = probe.environ

    console.print("🔍 Environment Diagnostics")
    console.print("═" * 50)

    console.print("\n📊 System Information:")
    console.print(f"  • Platform: {platform.system()}")
    console.print(f"  • Python: {platform.python_version()}")
    console.print(f"  • Architecture: {platform.machine()}")

    console.print("\n🖥️  Terminal Information:")
    console.print(f"  • TTY: {'Yes' if probe.is_tty() else 'No'}")
    console.print(f"  • Terminal: {env.get('TERM') or 'Unknown'}", markup=False)
    console.print(f"  • Term Program: {env.get('TERM_PROGRAM') or 'Unknown'}", markup=False)

    wsl_distro = env.get("WSL_DISTRO_NAME")
    console.print("\n🌐 Environment Detection:")
    console.print(f"  • WSL: {f'Yes ({wsl_distro})' if wsl_distro else ('Yes' if probe.is_wsl() else 'No')}", markup=False)
    console.print(f"  • CI/CD: {'Yes' if probe.is_ci() else 'No'}")
    console.print(f"  • VS Code: {'Yes' if probe.is_vscode() else 'No'}")

    verdict = probe.detect()
    console.print("\n🔧 UI Capabilities:")
    console.print(f"  • Raw Mode: {'Supported' if verdict.supported else 'Not Supported'}")
    console.print(f"  • Raw mode control: {'Available' if probe.has_raw_mode_control() else 'Not Available'}")
    if verdict.reason:
        console.print(f"  • Reason: {verdict.reason}", markup=False)

    if not verdict.supported:
        console.print("\n💡 Recommendations:")
        for line in RECOMMENDATIONS:
            console.print(f"  • {line}")
    else:
        console.print("\n✅ Your environment supports interactive UI")
    return verdict
