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

from coreason_authz.exceptions import AuthleteApiError
from coreason_authz.handlers.userinfo import (
    CHALLENGE_ON_MISSING_ACCESS_TOKEN,
    UserInfoParams,
    UserInfoRequestHandler,
)
from coreason_authz.models import UserInfoAction, UserInfoIssueAction, UserInfoIssueResponse, UserInfoResponse
from coreason_authz.spi import UserInfoRequestHandlerSpiAdapter
from coreason_authz.web import CONTENT_TYPE_HTML, CONTENT_TYPE_JSON, CONTENT_TYPE_JWT


class ProfileSpi(UserInfoRequestHandlerSpiAdapter):
    def __init__(self) -> None:
        self.prepared: list[tuple[str, list[str]]] = []
        self.profile: dict[str, Any] = {}

    def prepare_user_claims(self, subject: str, claim_names: list[str]) -> None:
        self.prepared.append((subject, claim_names))
        self.profile = {"email": f"{subject}@example.com", "email_verified": True}

    def get_user_claim(self, claim_name: str, language_tag: str | None = None) -> Any:
        return self.profile.get(claim_name)

    def get_sub(self) -> str | None:
        return "pairwise-sub"


@pytest.mark.asyncio
async def test_missing_access_token(api: AsyncMock) -> None:
    response = await UserInfoRequestHandler(api, ProfileSpi()).handle(UserInfoParams())

    assert response.status == 400
    assert response.headers["WWW-Authenticate"] == CHALLENGE_ON_MISSING_ACCESS_TOKEN
    assert response.body is None
    api.user_info.assert_not_called()


@pytest.mark.parametrize(
    "action, status",
    [
        (UserInfoAction.INTERNAL_SERVER_ERROR, 500),
        (UserInfoAction.BAD_REQUEST, 400),
        (UserInfoAction.UNAUTHORIZED, 401),
        (UserInfoAction.FORBIDDEN, 403),
    ],
)
@pytest.mark.asyncio
async def test_error_actions_become_bearer_challenges(api: AsyncMock, action: UserInfoAction, status: int) -> None:
    challenge = 'Bearer error="invalid_token"'
    api.user_info.return_value = UserInfoResponse(action=action, response_content=challenge)

    response = await UserInfoRequestHandler(api, ProfileSpi()).handle(UserInfoParams(access_token="at"))

    assert response.status == status
    assert response.headers["WWW-Authenticate"] == challenge
    assert response.body is None
    api.user_info_issue.assert_not_called()


@pytest.mark.asyncio
async def test_ok_collects_claims_and_returns_json(api: AsyncMock) -> None:
    api.user_info.return_value = UserInfoResponse(
        action=UserInfoAction.OK, subject="u1", claims=["email", "email_verified", "phone_number"], token="at"
    )
    api.user_info_issue.return_value = UserInfoIssueResponse(
        action=UserInfoIssueAction.JSON, response_content='{"sub":"pairwise-sub"}'
    )
    spi = ProfileSpi()

    response = await UserInfoRequestHandler(api, spi).handle(
        UserInfoParams(access_token="at", client_certificate="cert")
    )

    assert response.status == 200
    assert response.content_type == CONTENT_TYPE_JSON
    assert response.body == '{"sub":"pairwise-sub"}'
    assert spi.prepared == [("u1", ["email", "email_verified", "phone_number"])]

    first = api.user_info.call_args[0][0]
    assert first.token == "at"
    assert first.client_certificate == "cert"

    issue = api.user_info_issue.call_args[0][0]
    assert issue.token == "at"
    assert issue.sub == "pairwise-sub"
    assert issue.claims is not None
    assert json.loads(issue.claims) == {"email": "u1@example.com", "email_verified": True}


@pytest.mark.asyncio
async def test_ok_without_requested_claims(api: AsyncMock) -> None:
    api.user_info.return_value = UserInfoResponse(action=UserInfoAction.OK, subject="u1")
    api.user_info_issue.return_value = UserInfoIssueResponse(action=UserInfoIssueAction.JWT, response_content="eyJ.x.y")
    spi = ProfileSpi()

    response = await UserInfoRequestHandler(api, spi).handle(UserInfoParams(access_token="at"))

    assert response.status == 200
    assert response.content_type == CONTENT_TYPE_JWT
    assert response.body == "eyJ.x.y"
    assert spi.prepared == []
    issue = api.user_info_issue.call_args[0][0]
    assert issue.token == "at"
    assert issue.claims is None


@pytest.mark.parametrize(
    "action, status",
    [
        (UserInfoIssueAction.INTERNAL_SERVER_ERROR, 500),
        (UserInfoIssueAction.BAD_REQUEST, 400),
        (UserInfoIssueAction.UNAUTHORIZED, 401),
        (UserInfoIssueAction.FORBIDDEN, 403),
    ],
)
@pytest.mark.asyncio
async def test_issue_error_actions(api: AsyncMock, action: UserInfoIssueAction, status: int) -> None:
    api.user_info.return_value = UserInfoResponse(action=UserInfoAction.OK, subject="u1")
    api.user_info_issue.return_value = UserInfoIssueResponse(action=action, response_content='Bearer error="x"')

    response = await UserInfoRequestHandler(api, UserInfoRequestHandlerSpiAdapter()).handle(
        UserInfoParams(access_token="at")
    )

    assert response.status == status
    assert response.headers["WWW-Authenticate"] == 'Bearer error="x"'


@pytest.mark.asyncio
async def test_issue_unknown_action(api: AsyncMock) -> None:
    api.user_info.return_value = UserInfoResponse(action=UserInfoAction.OK, subject="u1")
    api.user_info_issue.return_value = UserInfoIssueResponse(action="CBOR")

    response = await UserInfoRequestHandler(api, ProfileSpi()).handle(UserInfoParams(access_token="at"))

    assert response.status == 500
    assert response.content_type == CONTENT_TYPE_HTML
    assert response.body == "Authlete /api/auth/userinfo/issue API returned an unknown action"


@pytest.mark.asyncio
async def test_api_failure(api: AsyncMock) -> None:
    api.user_info.side_effect = AuthleteApiError("Connection refused")

    response = await UserInfoRequestHandler(api, ProfileSpi()).handle(UserInfoParams(access_token="at"))

    assert response.status == 500
    assert response.body == "Authlete /api/auth/userinfo API failed: Connection refused"
