# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_authz

import json
import logging
import os
from collections.abc import Generator
from pathlib import Path
from typing import Any
from unittest.mock import patch

import pytest
from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter
from opentelemetry.trace import Tracer

from coreason_authz.utils.logger import InterceptHandler, configure_logging, logger, trace_id_injector


@pytest.fixture
def clean_logger() -> Generator[None, None, None]:
    """Ensure logger is reset before and after tests."""
    logger.remove()
    yield
    logger.remove()
    configure_logging()


@pytest.mark.usefixtures("clean_logger")
def test_reconfiguration_toggling(capsys: pytest.CaptureFixture[str]) -> None:
    """Switching COREASON_LOG_JSON replaces the console sink."""
    with patch.dict(os.environ, {"COREASON_LOG_JSON": "false"}):
        configure_logging()
        logger.info("Text Log")

        captured = capsys.readouterr()
        assert "Text Log" in captured.err
        assert "{" not in captured.err

    with patch.dict(os.environ, {"COREASON_LOG_JSON": "true"}):
        configure_logging()
        logger.info("JSON Log")

        captured = capsys.readouterr()
        assert '"text":' in captured.out
        assert "JSON Log" in captured.out
        assert not captured.err


@pytest.mark.usefixtures("clean_logger")
def test_multiple_configure_calls() -> None:
    """Calling configure_logging repeatedly does not duplicate sinks."""
    configure_logging()
    handler_count_1 = len(logger._core.handlers)  # type: ignore

    configure_logging()
    handler_count_2 = len(logger._core.handlers)  # type: ignore

    assert handler_count_1 == handler_count_2


@pytest.mark.usefixtures("clean_logger")
def test_invalid_level_falls_back_to_info(capsys: pytest.CaptureFixture[str]) -> None:
    with patch.dict(os.environ, {"COREASON_LOG_LEVEL": "CHATTY", "COREASON_LOG_JSON": "false"}):
        configure_logging()
        logger.debug("hidden")
        logger.info("shown")

    captured = capsys.readouterr()
    assert "hidden" not in captured.err
    assert "shown" in captured.err


@pytest.mark.usefixtures("clean_logger")
def test_standard_logging_is_intercepted() -> None:
    """Records of libraries logging through the standard library reach the Loguru sinks."""
    configure_logging()
    messages: list[str] = []
    logger.add(lambda m: messages.append(str(m)), level="INFO", format="{message}")

    logging.getLogger("httpx").warning("HTTP Request: POST https://api.example.com/api/auth/token")

    assert any("POST https://api.example.com/api/auth/token" in m for m in messages)
    assert any(isinstance(h, InterceptHandler) for h in logging.getLogger().handlers)


def test_trace_id_injection(telemetry_setup: tuple[InMemorySpanExporter, Tracer]) -> None:
    _, tracer = telemetry_setup
    record: dict[str, Any] = {"extra": {}}

    with tracer.start_as_current_span("handler") as span:
        trace_id_injector(record)
        context = span.get_span_context()

    assert record["extra"]["trace_id"] == format(context.trace_id, "032x")
    assert record["extra"]["span_id"] == format(context.span_id, "016x")
    assert record["extra"]["correlation_id"] == record["extra"]["trace_id"]


def test_no_trace_id_outside_a_span() -> None:
    record: dict[str, Any] = {"extra": {}}
    trace_id_injector(record)
    assert record["extra"] == {}


@pytest.mark.usefixtures("clean_logger")
def test_no_log_file_by_default(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("COREASON_LOG_FILE", raising=False)

    configure_logging()
    logger.info("console only")
    logger.remove()

    assert list(tmp_path.iterdir()) == []


@pytest.mark.usefixtures("clean_logger")
def test_log_file_is_opt_in(tmp_path: Path) -> None:
    log_file = tmp_path / "nested" / "authz.log"
    with patch.dict(os.environ, {"COREASON_LOG_FILE": str(log_file)}):
        configure_logging()
        logger.info("written to file")
        logger.remove()

    lines = log_file.read_text(encoding="utf-8").splitlines()
    records = [json.loads(line) for line in lines]
    assert any(r["record"]["message"] == "written to file" for r in records)


@pytest.mark.usefixtures("clean_logger")
def test_unwritable_log_file_falls_back_to_console(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    blocker = tmp_path / "not-a-directory"
    blocker.write_text("", encoding="utf-8")
    with patch.dict(os.environ, {"COREASON_LOG_FILE": str(blocker / "authz.log"), "COREASON_LOG_JSON": "false"}):
        configure_logging()
        logger.info("still logging")

    captured = capsys.readouterr()
    assert "File logging disabled" in captured.err
    assert "still logging" in captured.err
