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
Handler for the userinfo endpoint (OpenID Connect Core 1.0, 5.3).
"""

from typing import Any

from pydantic import BaseModel, ConfigDict

from coreason_authz.api import AuthleteApi
from coreason_authz.claim_collector import ClaimCollector, serialize_claims
from coreason_authz.handlers.base import BaseHandler
from coreason_authz.models import (
    UserInfoAction,
    UserInfoIssueAction,
    UserInfoIssueRequest,
    UserInfoRequest,
    UserInfoResponse,
)
from coreason_authz.spi import UserInfoRequestHandlerSpi
from coreason_authz.web import (
    STATUS_BAD_REQUEST,
    STATUS_FORBIDDEN,
    STATUS_INTERNAL_SERVER_ERROR,
    STATUS_UNAUTHORIZED,
    HttpResponse,
    bearer_error,
    ok_json,
    ok_jwt,
)

USER_INFO_PATH = "/api/auth/userinfo"
USER_INFO_ISSUE_PATH = "/api/auth/userinfo/issue"

CHALLENGE_ON_MISSING_ACCESS_TOKEN = (
    'Bearer error="invalid_token",error_description="'
    "An access token must be sent as a Bearer Token. "
    'See OpenID Connect Core 1.0, 5.3.1. UserInfo Request for details."'
)


class UserInfoParams(BaseModel):
    """
    Attributes:
        access_token (str | None): The access token presented by the client.
        client_certificate (str | None): The client certificate, for certificate-bound access tokens.
    """

    model_config = ConfigDict(frozen=True)

    access_token: str | None = None
    client_certificate: str | None = None


class _UserInfoClaimProvider:
    def __init__(self, spi: UserInfoRequestHandlerSpi) -> None:
        self._spi = spi

    def get_user_claim_value(self, subject: str, claim_name: str, language_tag: str | None = None) -> Any:
        return self._spi.get_user_claim(claim_name, language_tag)


class UserInfoRequestHandler(BaseHandler[UserInfoParams]):
    """
    Handles requests to the userinfo endpoint.

    Error actions are reported as Bearer challenges (RFC 6750) in `WWW-Authenticate`.

    Attributes:
        spi (UserInfoRequestHandlerSpi): The host application's SPI.
    """

    def __init__(self, api: AuthleteApi, spi: UserInfoRequestHandlerSpi) -> None:
        super().__init__(api)
        self.spi = spi

    async def _handle(self, params: UserInfoParams) -> HttpResponse:
        if not params.access_token:
            return bearer_error(STATUS_BAD_REQUEST, CHALLENGE_ON_MISSING_ACCESS_TOKEN)

        request = UserInfoRequest(token=params.access_token, client_certificate=params.client_certificate)
        response = await self._call_api(USER_INFO_PATH, self.api.user_info(request))
        self._on_action(USER_INFO_PATH, response.action)

        match response.action:
            case UserInfoAction.INTERNAL_SERVER_ERROR:
                return bearer_error(STATUS_INTERNAL_SERVER_ERROR, response.response_content)
            case UserInfoAction.BAD_REQUEST:
                return bearer_error(STATUS_BAD_REQUEST, response.response_content)
            case UserInfoAction.UNAUTHORIZED:
                return bearer_error(STATUS_UNAUTHORIZED, response.response_content)
            case UserInfoAction.FORBIDDEN:
                return bearer_error(STATUS_FORBIDDEN, response.response_content)
            case UserInfoAction.OK:
                return await self._user_info_issue(response, params.access_token)
            case _:
                raise self._on_unknown_action(USER_INFO_PATH, response.action)

    def _collect_claims(self, response: UserInfoResponse) -> str | None:
        if not response.subject or not response.claims:
            return None
        self.spi.prepare_user_claims(response.subject, response.claims)
        claims = ClaimCollector(_UserInfoClaimProvider(self.spi), response.subject, response.claims).collect()
        return serialize_claims(claims)

    async def _user_info_issue(self, info: UserInfoResponse, access_token: str) -> HttpResponse:
        request = UserInfoIssueRequest(
            token=info.token or access_token,
            sub=self.spi.get_sub() or None,
            claims=self._collect_claims(info),
        )
        response = await self._call_api(USER_INFO_ISSUE_PATH, self.api.user_info_issue(request))
        self._on_action(USER_INFO_ISSUE_PATH, response.action)

        match response.action:
            case UserInfoIssueAction.INTERNAL_SERVER_ERROR:
                return bearer_error(STATUS_INTERNAL_SERVER_ERROR, response.response_content)
            case UserInfoIssueAction.BAD_REQUEST:
                return bearer_error(STATUS_BAD_REQUEST, response.response_content)
            case UserInfoIssueAction.UNAUTHORIZED:
                return bearer_error(STATUS_UNAUTHORIZED, response.response_content)
            case UserInfoIssueAction.FORBIDDEN:
                return bearer_error(STATUS_FORBIDDEN, response.response_content)
            case UserInfoIssueAction.JSON:
                return ok_json(response.response_content)
            case UserInfoIssueAction.JWT:
                return ok_jwt(response.response_content)
            case _:
                raise self._on_unknown_action(USER_INFO_ISSUE_PATH, response.action)
