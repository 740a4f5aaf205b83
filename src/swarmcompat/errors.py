"""CLI-visible errors for swarmcompat.

Each error renders as an emoji headline, an optional bulleted list of
details (suggestions, invalid settings) and a one-line hint.
"""

from __future__ import annotations

from typing import Optional, Sequence

import click

from .models import SupportVerdict


class SwarmCompatError(click.ClickException):
    """Base class for errors that end a command with exit code 1."""

    emoji: str = "❌"
    hint: Optional[str] = None
    details_title: str = "Details"

    def __init__(self, message: str, details: Sequence[str] = (), hint: Optional[str] = None) -> None:
        super().__init__(message)
        self.details = tuple(details)
        if hint is not None:
            self.hint = hint

    @property
    def formatted_message(self) -> str:
        lines = [f"{self.emoji}  {click.style(self.message, fg='red', bold=True)}"]
        if self.details:
            lines.append(f"{self.details_title}:")
            lines.extend(f"  • {detail}" for detail in self.details)
        if self.hint:
            lines.append(click.style(f"💡 {self.hint}", fg='yellow'))
        return "\n".join(lines)

    def show(self, file=None) -> None:
        click.echo(self.formatted_message, err=True, file=file)


class EnvironmentUnsupportedError(SwarmCompatError):
    """The terminal cannot host the interactive UI and text fallback is off."""
    emoji = "⚠️"
    details_title = "Suggestions"

    def __init__(self, verdict: SupportVerdict):
        self.verdict = verdict
        super().__init__(
            f"UI not supported in current environment ({verdict.reason or 'unknown reason'})",
            details=verdict.suggestions,
            hint=f"Run {click.style('swarmcompat diagnose', fg='cyan')} for a full environment report.",
        )


class LaunchFailureError(SwarmCompatError):
    """The interactive UI process is missing, fails to spawn or exits non-zero."""
    emoji = "💥"

    def __init__(self, kind: str, detail: str):
        self.kind = kind
        self.detail = detail
        hint = f"Run {click.style('swarmcompat diagnose', fg='cyan')} or drop {click.style('--no-fallback', fg='cyan')}."
        super().__init__(f"Failed to launch {kind} UI: {detail}", hint=hint)


class ConfigError(SwarmCompatError):
    """One or more settings failed validation."""
    emoji = "🔧"
    details_title = "Invalid settings"

    def __init__(self, summary: str, problems: Sequence[str] = ()):
        hint = f"Check the {click.style('SWARMCOMPAT_*', fg='cyan')} environment variables, your .env file or the CLI flags."
        super().__init__(f"Configuration problem – {summary}", details=problems, hint=hint)


class RunLookupError(Exception):
    """Run directory listing or a run's config record could not be read.

    Never reaches the CLI: consumers treat it as "zero runs" or "skip this run".
    """
