"""Terminal capability detection, interactive UI launching and text fallbacks."""

from .diagnostics import show_diagnostics
from .fallback_renderer import FallbackRenderer
from .terminal_capabilities import EnvironmentProbe, RawModeControl, detect_ui_support, raw_mode_toggled
from .text_monitor import MonitorState, TextMonitor
from .ui_launcher import UILauncher, UIScriptLocator

__all__ = [
    'EnvironmentProbe',
    'FallbackRenderer',
    'MonitorState',
    'RawModeControl',
    'TextMonitor',
    'UILauncher',
    'UIScriptLocator',
    'detect_ui_support',
    'raw_mode_toggled',
    'show_diagnostics',
]
