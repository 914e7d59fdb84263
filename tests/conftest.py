# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_authz

from unittest.mock import AsyncMock

import pytest
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import SimpleSpanProcessor
from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter
from opentelemetry.trace import Tracer

from coreason_authz.api import AuthleteApi


@pytest.fixture
def api() -> AsyncMock:
    """An AuthleteApi whose coroutines are AsyncMocks; tests set their return values."""
    return AsyncMock(spec=AuthleteApi)


@pytest.fixture
def telemetry_setup() -> tuple[InMemorySpanExporter, Tracer]:
    """Sets up an OpenTelemetry tracer with an in-memory exporter."""
    exporter = InMemorySpanExporter()
    provider = TracerProvider()
    provider.add_span_processor(SimpleSpanProcessor(exporter))
    tracer = provider.get_tracer("test_tracer")
    return exporter, tracer
