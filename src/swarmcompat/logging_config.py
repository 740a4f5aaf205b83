"""Logging setup for swarmcompat.

Log records go to stderr so they never mix with the text interfaces on
stdout. ``json`` emits one object per line stamped with the application
name; ``text`` is a single human-readable line. Level and format come from
AppSettings or the ``--log-level`` / ``--log-format`` CLI options.
"""

from __future__ import annotations

import logging

from pythonjsonlogger import jsonlogger

from . import __version__

JSON_FIELDS = ("asctime", "levelname", "name", "message", "funcName", "lineno")

# Loggers that chatter at DEBUG about event loop and subprocess internals
NOISY_LOGGERS = ("asyncio",)


def _build_json_formatter() -> logging.Formatter:
    fmt = " ".join(f"%({f})s" for f in JSON_FIELDS)
    return jsonlogger.JsonFormatter(
        fmt=fmt,
        rename_fields={"levelname": "level", "name": "logger"},
        static_fields={"app": "swarmcompat", "version": __version__},
    )


def _build_text_formatter() -> logging.Formatter:
    return logging.Formatter(
        fmt="%(asctime)s %(levelname)-7s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def configure_logging(level: str = "WARNING", fmt: str = "text") -> logging.Handler:
    """Replace the root handlers with one stderr handler; returns it."""
    log_level = getattr(logging, level.upper(), logging.WARNING)

    root = logging.getLogger()
    root.setLevel(log_level)
    for h in list(root.handlers):
        root.removeHandler(h)

    handler = logging.StreamHandler()
    handler.setFormatter(_build_json_formatter() if fmt.lower() == "json" else _build_text_formatter())
    root.addHandler(handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(log_level, logging.WARNING))
    return handler
