# Exterior: Exact Alternating Multilinear Maps
# Copyright (C) 2026 The Exterior Authors
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.

"""Exterior logging system.

Provides structured logging under the ``exterior`` hierarchy.
Library modules log construction details at DEBUG and cost warnings at
WARNING; check tasks report their summaries at INFO.

Environment variables:
    EXTERIOR_LOG_LEVEL  — DEBUG / INFO (default) / WARNING / ERROR
    EXTERIOR_LOG_FILE   — optional path; appends plain-text log lines
"""

import logging
import os
import sys

_CONFIGURED = False
_ROOT = "exterior"

# ANSI colour codes, used only when stderr is a TTY
_COLORS = {
    logging.DEBUG: "\033[36m",
    logging.INFO: "\033[32m",
    logging.WARNING: "\033[33m",
    logging.ERROR: "\033[31m",
    logging.CRITICAL: "\033[35m",
}
_RESET = "\033[0m"


class _ColorFormatter(logging.Formatter):
    """Colours the level name on a TTY without touching the shared record."""

    def __init__(self, fmt: str, use_color: bool = True):
        super().__init__(fmt)
        self.use_color = use_color

    def format(self, record: logging.LogRecord) -> str:
        if not self.use_color:
            return super().format(record)
        record = logging.makeLogRecord(record.__dict__)
        color = _COLORS.get(record.levelno, "")
        record.levelname = f"{color}{record.levelname}{_RESET}"
        return super().format(record)


def _level(name: str) -> int:
    return getattr(logging, str(name).upper(), logging.INFO)


def _configure_once() -> None:
    """One-time lazy init of the ``exterior`` root logger."""
    global _CONFIGURED
    if _CONFIGURED:
        return
    _CONFIGURED = True

    root = logging.getLogger(_ROOT)
    root.setLevel(_level(os.environ.get("EXTERIOR_LOG_LEVEL", "INFO")))

    use_color = hasattr(sys.stderr, "isatty") and sys.stderr.isatty()
    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(_ColorFormatter("%(levelname)s %(name)s: %(message)s", use_color=use_color))
    root.addHandler(console)

    log_file = os.environ.get("EXTERIOR_LOG_FILE")
    if log_file:
        fh = logging.FileHandler(log_file, mode="a")
        fh.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
        root.addHandler(fh)


def set_level(level) -> None:
    """Override the hierarchy level, e.g. from the ``log_level`` config key."""
    _configure_once()
    logging.getLogger(_ROOT).setLevel(_level(level) if isinstance(level, str) else level)


def get_logger(name: str) -> logging.Logger:
    """Return a logger under the ``exterior`` hierarchy.

    Args:
        name: Typically ``__name__`` of the calling module.

    Returns:
        A :class:`logging.Logger` instance.
    """
    _configure_once()
    return logging.getLogger(f"{_ROOT}.{name}")
