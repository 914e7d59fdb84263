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

from coreason_authz.exceptions import AuthleteApiError
from coreason_authz.handlers.configuration import ConfigurationRequestHandler, JwksRequestHandler
from coreason_authz.web import CONTENT_TYPE_HTML, CONTENT_TYPE_JSON


@pytest.mark.asyncio
async def test_configuration_document(api: AsyncMock) -> None:
    api.get_service_configuration.return_value = '{"issuer":"https://as.example.com"}'

    response = await ConfigurationRequestHandler(api).handle(False)

    assert response.status == 200
    assert response.content_type == CONTENT_TYPE_JSON
    assert response.body == '{"issuer":"https://as.example.com"}'
    api.get_service_configuration.assert_awaited_once_with(False)


@pytest.mark.asyncio
async def test_configuration_api_failure(api: AsyncMock) -> None:
    api.get_service_configuration.side_effect = AuthleteApiError("Unsuccessful response returned", status_code=503)

    response = await ConfigurationRequestHandler(api).handle(True)

    assert response.status == 500
    assert response.content_type == CONTENT_TYPE_HTML
    assert response.body == "Authlete /api/service/configuration API failed: Unsuccessful response returned"


@pytest.mark.asyncio
async def test_jwks_document(api: AsyncMock) -> None:
    api.get_service_jwks.return_value = '{"keys":[{"kty":"EC"}]}'

    response = await JwksRequestHandler(api).handle(True)

    assert response.status == 200
    assert response.body == '{"keys":[{"kty":"EC"}]}'
    api.get_service_jwks.assert_awaited_once_with(True, False)


@pytest.mark.parametrize("document", [None, ""])
@pytest.mark.asyncio
async def test_jwks_missing_gives_no_content(api: AsyncMock, document: str | None) -> None:
    api.get_service_jwks.return_value = document

    response = await JwksRequestHandler(api).handle(True)

    assert response.status == 204
    assert response.body is None
