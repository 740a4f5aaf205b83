"""Terminal capability detection: can this session host the interactive UI?

The probe walks a fixed priority list and stops at the first disqualifying
condition. Only the last step touches the terminal, toggling raw mode on and
restoring the original setting before returning.
"""

from __future__ import annotations

import contextlib
import logging
import os
import sys
from typing import Any, Callable, Iterator, List, Mapping, Optional, TextIO

from ..models import SupportVerdict

try:
    import termios
    import tty
except ImportError:  # pragma: no cover - non-POSIX platforms have no raw mode control
    termios = None
    tty = None

logger = logging.getLogger(__name__)

WSL_ENV_VARS = ("WSL_DISTRO_NAME", "WSLENV")
CI_ENV_VARS = ("CI", "GITHUB_ACTIONS", "JENKINS_URL")

GENERIC_SUGGESTIONS = (
    "Use --no-ui flag to disable UI",
    "Run in external terminal (not VS Code integrated)",
    "Use text-based commands instead",
    "Try running in a different terminal application",
)

WSL_SUGGESTIONS = (
    "Use Windows Terminal or external terminal",
    "Use --no-ui flag to disable UI",
    "Use text-based commands instead",
)

CI_SUGGESTIONS = (
    "Use --no-ui flag in CI/CD scripts",
    "Use text-based commands for automation",
)


class RawModeControl:
    """Raw mode of one terminal file descriptor, backed by termios.

    Restoration always writes back the exact attributes captured by ``save``,
    so the terminal ends in exactly the mode it started in.
    """

    def __init__(self, fd: int):
        self.fd = fd

    def save(self) -> List[Any]:
        return termios.tcgetattr(self.fd)

    def enter_raw(self) -> None:
        tty.setraw(self.fd, termios.TCSANOW)

    def restore(self, saved: List[Any]) -> None:
        termios.tcsetattr(self.fd, termios.TCSANOW, saved)


def default_raw_mode_control(stream: TextIO) -> Optional[RawModeControl]:
    """Raw-mode control for ``stream``, or None when the platform has none."""
    if termios is None or tty is None:
        return None
    try:
        fd = stream.fileno()
    except (AttributeError, OSError, ValueError):
        return None
    return RawModeControl(fd)


@contextlib.contextmanager
def raw_mode_toggled(control: RawModeControl) -> Iterator[None]:
    """Switch raw mode on for the duration of the block, then restore the saved attributes."""
    saved = control.save()
    try:
        control.enter_raw()
        yield
    finally:
        control.restore(saved)


class EnvironmentProbe:
    """Classifies the current session into a ``SupportVerdict``.

    Inputs are injectable so every branch can be driven without a real terminal:

    Args:
        stdin: stream whose TTY status and raw mode are inspected
        environ: environment mapping read for WSL/CI/editor markers
        control_factory: builds the raw-mode control for ``stdin``; returns
            None when raw mode cannot be controlled at all
    """

    def __init__(
        self,
        stdin: Optional[TextIO] = None,
        environ: Optional[Mapping[str, str]] = None,
        control_factory: Callable[[TextIO], Optional[RawModeControl]] = default_raw_mode_control,
    ):
        self.stdin = stdin if stdin is not None else sys.stdin
        self.environ = environ if environ is not None else os.environ
        self.control_factory = control_factory

    def is_tty(self) -> bool:
        try:
            return bool(self.stdin.isatty())
        except (AttributeError, ValueError):
            return False

    def is_wsl(self) -> bool:
        return any(self.environ.get(var) for var in WSL_ENV_VARS)

    def is_ci(self) -> bool:
        return any(self.environ.get(var) for var in CI_ENV_VARS)

    def is_vscode(self) -> bool:
        return self.environ.get("TERM_PROGRAM") == "vscode"

    def has_raw_mode_control(self) -> bool:
        return self.control_factory(self.stdin) is not None

    def detect(self) -> SupportVerdict:
        """Evaluate the support conditions in priority order; first match wins."""
        if not self.is_tty():
            return self._unsupported("not a TTY", GENERIC_SUGGESTIONS)

        control = self.control_factory(self.stdin)
        if control is None:
            return self._unsupported("raw mode control unavailable", GENERIC_SUGGESTIONS)

        if self.is_wsl():
            return self._unsupported("WSL environment", WSL_SUGGESTIONS)

        if self.is_ci():
            return self._unsupported("CI/CD environment", CI_SUGGESTIONS)

        if self.is_vscode():
            logger.debug("Running inside the VS Code integrated terminal")

        try:
            with raw_mode_toggled(control):
                pass
        except Exception as e:
            return self._unsupported(f"raw mode test failed: {e}", GENERIC_SUGGESTIONS)

        logger.debug("Interactive UI supported")
        return SupportVerdict(supported=True, reason=None, suggestions=())

    @staticmethod
    def _unsupported(reason: str, suggestions) -> SupportVerdict:
        logger.debug(f"Interactive UI unsupported: {reason}")
        return SupportVerdict(supported=False, reason=reason, suggestions=tuple(suggestions))


def detect_ui_support() -> SupportVerdict:
    """Probe the real process environment."""
    return EnvironmentProbe().detect()
