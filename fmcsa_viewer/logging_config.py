from __future__ import annotations

import logging
import os
from typing import Optional, Union

from pythonjsonlogger import jsonlogger

LOG_FORMAT_ENV = "FMCSA_VIEWER_LOG_FORMAT"
LOG_LEVEL_ENV = "FMCSA_VIEWER_LOG_LEVEL"

_FIELDS = "%(asctime)s %(levelname)s %(name)s %(message)s"

# Dash serves through werkzeug, which logs every callback request at INFO
_NOISY_LOGGERS = ("werkzeug",)


def _resolve_level(level: Optional[Union[int, str]]) -> int:
    if level is None:
        level = os.getenv(LOG_LEVEL_ENV, "INFO")
    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        if not isinstance(resolved, int):
            raise ValueError(f"Unknown log level {level!r}")
        return resolved
    return level


def build_formatter(format_mode: str) -> logging.Formatter:
    """'plain' gives a human-readable line; anything else structured JSON."""
    if format_mode == "plain":
        return logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")
    return jsonlogger.JsonFormatter(_FIELDS)


def configure_logging(
        level: Optional[Union[int, str]] = None,
        force_format: Optional[str] = None,
) -> None:
    """
    Set up the root logger for the viewer process.

    The format is force_format when given, else $FMCSA_VIEWER_LOG_FORMAT,
    else JSON. The level is taken from level, else $FMCSA_VIEWER_LOG_LEVEL,
    else INFO. Extra fields passed via ``extra=`` (view_name, share_id,
    n_records, ...) end up as JSON keys.
    """
    format_mode = (force_format or os.getenv(LOG_FORMAT_ENV, "json")).lower()

    root = logging.getLogger()
    root.setLevel(_resolve_level(level))

    handler = logging.StreamHandler()
    handler.setFormatter(build_formatter(format_mode))

    # Replace existing handlers so reloads do not duplicate output
    root.handlers.clear()
    root.addHandler(handler)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
