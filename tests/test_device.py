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
from typing import Any
from unittest.mock import AsyncMock

import pytest

from coreason_authz.exceptions import AuthleteApiError, WebApplicationError
from coreason_authz.handlers.base import ClientRequestParams
from coreason_authz.handlers.device import (
    DeviceAuthorizationRequestHandler,
    DeviceCompleteParams,
    DeviceCompleteRequestHandler,
    DeviceVerificationHandler,
)
from coreason_authz.models import (
    CompletionResult,
    DeviceAuthorizationAction,
    DeviceAuthorizationResponse,
    DeviceCompleteAction,
    DeviceCompleteResponse,
    DeviceVerificationAction,
    DeviceVerificationResponse,
)
from coreason_authz.spi import DeviceCompleteRequestHandlerSpiAdapter
from coreason_authz.web import CONTENT_TYPE_HTML, HttpResponse, ok_html


@pytest.mark.parametrize(
    "action, status",
    [
        (DeviceAuthorizationAction.OK, 200),
        (DeviceAuthorizationAction.BAD_REQUEST, 400),
        (DeviceAuthorizationAction.INTERNAL_SERVER_ERROR, 500),
    ],
)
@pytest.mark.asyncio
async def test_device_authorization_actions(api: AsyncMock, action: DeviceAuthorizationAction, status: int) -> None:
    api.device_authorization.return_value = DeviceAuthorizationResponse(action=action, response_content="{}")

    response = await DeviceAuthorizationRequestHandler(api).handle(
        ClientRequestParams(parameters="client_id=c1&scope=openid")
    )

    assert response.status == status
    assert response.body == "{}"
    assert api.device_authorization.call_args[0][0].parameters == "client_id=c1&scope=openid"


@pytest.mark.asyncio
async def test_device_authorization_unauthorized(api: AsyncMock) -> None:
    api.device_authorization.return_value = DeviceAuthorizationResponse(
        action=DeviceAuthorizationAction.UNAUTHORIZED, response_content='{"error":"invalid_client"}'
    )

    response = await DeviceAuthorizationRequestHandler(api).handle(ClientRequestParams(parameters=""))

    assert response.status == 401
    assert response.headers["WWW-Authenticate"] == 'Basic realm="device/authorization"'


@pytest.mark.parametrize("action", list(DeviceVerificationAction))
@pytest.mark.asyncio
async def test_device_verification_returns_the_result(api: AsyncMock, action: DeviceVerificationAction) -> None:
    api.device_verification.return_value = DeviceVerificationResponse(action=action, client_name="TV App")

    result = await DeviceVerificationHandler(api).handle("XWDA-MNQK")

    assert result.action == action
    assert result.client_name == "TV App"
    assert api.device_verification.call_args[0][0].user_code == "XWDA-MNQK"


@pytest.mark.asyncio
async def test_device_verification_unknown_action(api: AsyncMock) -> None:
    api.device_verification.return_value = DeviceVerificationResponse(action="LOCKED")

    with pytest.raises(WebApplicationError) as exc:
        await DeviceVerificationHandler(api).handle("XWDA-MNQK")

    assert exc.value.response.status == 500
    assert exc.value.response.body == "Authlete /api/device/verification API returned an unknown action"


@pytest.mark.asyncio
async def test_device_verification_api_failure(api: AsyncMock) -> None:
    api.device_verification.side_effect = AuthleteApiError("Connection refused")

    with pytest.raises(WebApplicationError) as exc:
        await DeviceVerificationHandler(api).handle("XWDA-MNQK")

    assert exc.value.response.status == 500
    assert exc.value.response.content_type == CONTENT_TYPE_HTML
    assert isinstance(exc.value.cause, AuthleteApiError)


class CompleteSpi(DeviceCompleteRequestHandlerSpiAdapter):
    def __init__(self, result: CompletionResult, subject: str | None = "u1") -> None:
        self.result = result
        self.subject = subject
        self.calls: list[str] = []

    def get_result(self) -> CompletionResult:
        return self.result

    def get_user_subject(self) -> str | None:
        return self.subject

    def get_user_authenticated_at(self) -> int:
        return 1700000000

    def get_acr(self) -> str | None:
        return "urn:acr:pwd"

    def get_error_description(self) -> str | None:
        return "The user declined."

    def get_error_uri(self) -> str | None:
        return "https://as.example.com/errors/declined"

    def get_user_claim_value(self, subject: str, claim_name: str, language_tag: str | None = None) -> Any:
        return {"name": "John Smith"}.get(claim_name)

    def _page(self, name: str) -> HttpResponse:
        self.calls.append(name)
        return ok_html(f"<html>{name}</html>")

    async def on_success(self) -> HttpResponse:
        return self._page("success")

    async def on_invalid_request(self) -> HttpResponse:
        return self._page("invalid_request")

    async def on_user_code_expired(self) -> HttpResponse:
        return self._page("user_code_expired")

    async def on_user_code_not_exist(self) -> HttpResponse:
        return self._page("user_code_not_exist")

    async def on_server_error(self) -> HttpResponse:
        return self._page("server_error")


PARAMS = DeviceCompleteParams(user_code="XWDA-MNQK", claim_names=["name", "email"])


@pytest.mark.asyncio
async def test_device_complete_authorized(api: AsyncMock) -> None:
    api.device_complete.return_value = DeviceCompleteResponse(action=DeviceCompleteAction.SUCCESS)
    spi = CompleteSpi(CompletionResult.AUTHORIZED)

    response = await DeviceCompleteRequestHandler(api, spi).handle(PARAMS)

    assert response.body == "<html>success</html>"
    request = api.device_complete.call_args[0][0]
    assert request.user_code == "XWDA-MNQK"
    assert request.result == CompletionResult.AUTHORIZED
    assert request.subject == "u1"
    assert request.auth_time == 1700000000
    assert request.acr == "urn:acr:pwd"
    assert request.claims is not None
    assert json.loads(request.claims) == {"name": "John Smith"}
    assert request.error_description is None


@pytest.mark.asyncio
async def test_device_complete_denied_sends_error_details(api: AsyncMock) -> None:
    api.device_complete.return_value = DeviceCompleteResponse(action=DeviceCompleteAction.SUCCESS)

    await DeviceCompleteRequestHandler(api, CompleteSpi(CompletionResult.ACCESS_DENIED)).handle(PARAMS)

    request = api.device_complete.call_args[0][0]
    assert request.result == CompletionResult.ACCESS_DENIED
    assert request.error_description == "The user declined."
    assert request.error_uri == "https://as.example.com/errors/declined"
    assert request.claims is None


@pytest.mark.asyncio
async def test_device_complete_authorized_without_subject_fails_the_transaction(api: AsyncMock) -> None:
    api.device_complete.return_value = DeviceCompleteResponse(action=DeviceCompleteAction.SUCCESS)

    await DeviceCompleteRequestHandler(api, CompleteSpi(CompletionResult.AUTHORIZED, subject=None)).handle(PARAMS)

    request = api.device_complete.call_args[0][0]
    assert request.result == CompletionResult.TRANSACTION_FAILED
    assert request.subject is None


@pytest.mark.parametrize(
    "action, page",
    [
        (DeviceCompleteAction.INVALID_REQUEST, "invalid_request"),
        (DeviceCompleteAction.USER_CODE_EXPIRED, "user_code_expired"),
        (DeviceCompleteAction.USER_CODE_NOT_EXIST, "user_code_not_exist"),
        (DeviceCompleteAction.SERVER_ERROR, "server_error"),
    ],
)
@pytest.mark.asyncio
async def test_device_complete_outcome_pages(api: AsyncMock, action: DeviceCompleteAction, page: str) -> None:
    api.device_complete.return_value = DeviceCompleteResponse(action=action)
    spi = CompleteSpi(CompletionResult.AUTHORIZED)

    response = await DeviceCompleteRequestHandler(api, spi).handle(PARAMS)

    assert spi.calls == [page]
    assert response.body == f"<html>{page}</html>"


@pytest.mark.asyncio
async def test_device_complete_unknown_action(api: AsyncMock) -> None:
    api.device_complete.return_value = DeviceCompleteResponse(action="PENDING")

    response = await DeviceCompleteRequestHandler(api, CompleteSpi(CompletionResult.AUTHORIZED)).handle(PARAMS)

    assert response.status == 500
    assert response.body == "Authlete /api/device/complete API returned an unknown action"
