# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_authz

"""
Loguru setup for the handlers and the API client.

Environment variables:
    COREASON_LOG_LEVEL: Minimum level, INFO when unset or unknown.
    COREASON_LOG_JSON: `true` writes serialized JSON to stdout instead of text to stderr.
    COREASON_LOG_FILE: Path of an additional rotating JSON log file. No file is written when unset.
    COREASON_LOG_ROTATION: Rotation condition of the log file, `500 MB` by default.
    COREASON_LOG_RETENTION: Retention of rotated log files, `10 days` by default.
"""

import logging
import os
import sys
from pathlib import Path
from typing import Any

from loguru import logger
from opentelemetry import trace

__all__ = ["logger", "configure_logging"]

TEXT_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)


class InterceptHandler(logging.Handler):
    """
    Forwards standard `logging` records to Loguru.

    httpx and OpenTelemetry log through the standard library.
    """

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        frame = logging.currentframe()
        depth = 2
        while frame and frame.f_code.co_filename in (logging.__file__, __file__):
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def trace_id_injector(record: dict[str, Any]) -> None:
    """Loguru patcher adding the ids of the active OpenTelemetry span to `record["extra"]`."""
    ctx = trace.get_current_span().get_span_context()
    if not ctx.is_valid:
        return
    trace_id = format(ctx.trace_id, "032x")
    record["extra"].update(trace_id=trace_id, span_id=format(ctx.span_id, "016x"), correlation_id=trace_id)


def _resolve_level() -> str:
    level = os.getenv("COREASON_LOG_LEVEL", "INFO").upper()
    try:
        logger.level(level)
    except ValueError:
        return "INFO"
    return level


def _add_console_sink(level: str) -> None:
    if os.getenv("COREASON_LOG_JSON", "false").lower() == "true":
        logger.add(sys.stdout, level=level, serialize=True)
    else:
        logger.add(sys.stderr, level=level, format=TEXT_FORMAT)


def _add_file_sink(level: str) -> Path | None:
    """Adds the JSON file sink named by COREASON_LOG_FILE, if any, and returns its path."""
    file_name = os.getenv("COREASON_LOG_FILE")
    if not file_name:
        return None

    path = Path(file_name)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            path,
            rotation=os.getenv("COREASON_LOG_ROTATION", "500 MB"),
            retention=os.getenv("COREASON_LOG_RETENTION", "10 days"),
            serialize=True,
            enqueue=True,
            level=level,
        )
    except OSError as e:
        logger.warning(f"File logging disabled, {path} is not writable: {e}")
        return None
    return path


def configure_logging() -> None:
    """
    Configures the Loguru sinks from the environment and routes standard logging into them.

    Call again to reload the configuration after the environment changes.
    """
    level = _resolve_level()

    logger.configure(handlers=[], patcher=trace_id_injector)
    _add_console_sink(level)
    _add_file_sink(level)

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    numeric_level = logging.getLevelName(level)
    logging.getLogger().setLevel(numeric_level if isinstance(numeric_level, int) else logging.INFO)


configure_logging()
