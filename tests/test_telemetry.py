# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_authz

from unittest.mock import AsyncMock, patch

import pytest
from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter
from opentelemetry.trace import StatusCode, Tracer

from coreason_authz.access_token_validator import AccessTokenValidator
from coreason_authz.exceptions import AuthleteApiError
from coreason_authz.handlers.base import ClientRequestParams
from coreason_authz.handlers.device import DeviceVerificationHandler
from coreason_authz.handlers.token import TokenRequestHandler
from coreason_authz.models import (
    DeviceVerificationAction,
    DeviceVerificationResponse,
    IntrospectionAction,
    IntrospectionResponse,
    TokenAction,
    TokenResponse,
)
from coreason_authz.spi import TokenRequestHandlerSpiAdapter


@pytest.mark.asyncio
async def test_handler_span_success(api: AsyncMock, telemetry_setup: tuple[InMemorySpanExporter, Tracer]) -> None:
    exporter, tracer = telemetry_setup
    api.token.return_value = TokenResponse(action=TokenAction.OK, response_content="{}")

    with patch("coreason_authz.handlers.base.tracer", tracer):
        await TokenRequestHandler(api, TokenRequestHandlerSpiAdapter()).handle(ClientRequestParams(parameters=""))

    spans = exporter.get_finished_spans()
    assert len(spans) == 1
    span = spans[0]
    assert span.name == "TokenRequestHandler"
    assert span.attributes is not None
    assert span.attributes["authz.action"] == "OK"
    assert span.attributes["http.status_code"] == 200
    assert span.status.status_code == StatusCode.UNSET


@pytest.mark.asyncio
async def test_handler_span_marks_server_errors(
    api: AsyncMock, telemetry_setup: tuple[InMemorySpanExporter, Tracer]
) -> None:
    exporter, tracer = telemetry_setup
    api.token.side_effect = AuthleteApiError("Unsuccessful response returned", status_code=503)

    with patch("coreason_authz.handlers.base.tracer", tracer):
        response = await TokenRequestHandler(api, TokenRequestHandlerSpiAdapter()).handle(
            ClientRequestParams(parameters="")
        )

    assert response.status == 500
    span = exporter.get_finished_spans()[0]
    assert span.attributes is not None
    assert span.attributes["http.status_code"] == 500
    assert span.status.status_code == StatusCode.ERROR
    assert span.status.description == "Authlete /api/auth/token API failed: Unsuccessful response returned"


@pytest.mark.asyncio
async def test_client_errors_do_not_mark_the_span(
    api: AsyncMock, telemetry_setup: tuple[InMemorySpanExporter, Tracer]
) -> None:
    exporter, tracer = telemetry_setup
    api.token.return_value = TokenResponse(action=TokenAction.BAD_REQUEST, response_content="{}")

    with patch("coreason_authz.handlers.base.tracer", tracer):
        await TokenRequestHandler(api, TokenRequestHandlerSpiAdapter()).handle(ClientRequestParams(parameters=""))

    span = exporter.get_finished_spans()[0]
    assert span.attributes is not None
    assert span.attributes["http.status_code"] == 400
    assert span.status.status_code == StatusCode.UNSET


@pytest.mark.asyncio
async def test_device_verification_span(api: AsyncMock, telemetry_setup: tuple[InMemorySpanExporter, Tracer]) -> None:
    exporter, tracer = telemetry_setup
    api.device_verification.return_value = DeviceVerificationResponse(action=DeviceVerificationAction.VALID)

    with patch("coreason_authz.handlers.device.tracer", tracer):
        await DeviceVerificationHandler(api).handle("XWDA-MNQK")

    span = exporter.get_finished_spans()[0]
    assert span.name == "DeviceVerificationHandler"
    assert span.attributes is not None
    assert span.attributes["authz.action"] == "VALID"


@pytest.mark.asyncio
async def test_access_token_validation_span(
    api: AsyncMock, telemetry_setup: tuple[InMemorySpanExporter, Tracer]
) -> None:
    exporter, tracer = telemetry_setup
    api.introspection.return_value = IntrospectionResponse(action=IntrospectionAction.UNAUTHORIZED)

    with patch("coreason_authz.access_token_validator.tracer", tracer):
        await AccessTokenValidator(api).validate("at")

    span = exporter.get_finished_spans()[0]
    assert span.name == "validate_access_token"
    assert span.attributes is not None
    assert span.attributes["authz.action"] == "UNAUTHORIZED"


@pytest.mark.asyncio
async def test_access_token_validation_span_records_api_failure(
    api: AsyncMock, telemetry_setup: tuple[InMemorySpanExporter, Tracer]
) -> None:
    exporter, tracer = telemetry_setup
    api.introspection.side_effect = AuthleteApiError("timed out")

    with patch("coreason_authz.access_token_validator.tracer", tracer):
        await AccessTokenValidator(api).validate("at")

    span = exporter.get_finished_spans()[0]
    assert any(event.name == "exception" for event in span.events)
