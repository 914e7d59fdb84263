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
Handler for the token endpoint (RFC 6749, 3.2).
"""

import json

from coreason_authz.api import AuthleteApi
from coreason_authz.handlers.base import BaseHandler, ClientRequestParams
from coreason_authz.models import (
    TokenAction,
    TokenFailAction,
    TokenFailReason,
    TokenFailRequest,
    TokenIssueAction,
    TokenIssueRequest,
    TokenRequest,
    TokenResponse,
)
from coreason_authz.spi import TokenRequestHandlerSpi
from coreason_authz.utils.logger import logger
from coreason_authz.web import HttpResponse, bad_request, internal_server_error, ok_json, unauthorized

TOKEN_PATH = "/api/auth/token"
TOKEN_ISSUE_PATH = "/api/auth/token/issue"
TOKEN_FAIL_PATH = "/api/auth/token/fail"

CHALLENGE = 'Basic realm="token"'

UNSUPPORTED_TOKEN_EXCHANGE = json.dumps(
    {
        "error": "unsupported_grant_type",
        "error_description": "The token exchange grant type is not supported.",
    }
)


class TokenRequestHandler(BaseHandler[ClientRequestParams]):
    """
    Handles requests to the token endpoint.

    The Resource Owner Password Credentials flow is delegated to
    `TokenRequestHandlerSpi.authenticate_user` and token exchange to
    `TokenRequestHandlerSpi.token_exchange`.

    Attributes:
        spi (TokenRequestHandlerSpi): The host application's SPI.
    """

    def __init__(self, api: AuthleteApi, spi: TokenRequestHandlerSpi) -> None:
        super().__init__(api)
        self.spi = spi

    async def _handle(self, params: ClientRequestParams) -> HttpResponse:
        request = TokenRequest(**params.to_request_fields(), properties=self.spi.get_properties() or None)
        response = await self._call_api(TOKEN_PATH, self.api.token(request))
        self._on_action(TOKEN_PATH, response.action)

        match response.action:
            case TokenAction.INVALID_CLIENT:
                return unauthorized(CHALLENGE, response.response_content)
            case TokenAction.INTERNAL_SERVER_ERROR:
                return internal_server_error(response.response_content)
            case TokenAction.BAD_REQUEST:
                return bad_request(response.response_content)
            case TokenAction.PASSWORD:
                return await self._handle_password(response)
            case TokenAction.OK:
                return ok_json(response.response_content)
            case TokenAction.TOKEN_EXCHANGE:
                return await self._handle_token_exchange(response)
            case _:
                raise self._on_unknown_action(TOKEN_PATH, response.action)

    async def _handle_password(self, response: TokenResponse) -> HttpResponse:
        ticket = response.ticket or ""
        subject = self.spi.authenticate_user(response.username or None, response.password or None)
        if subject:
            return await self._token_issue(ticket, subject)

        logger.warning("Resource owner credentials were rejected at the token endpoint")
        return await self._token_fail(ticket, TokenFailReason.INVALID_RESOURCE_OWNER_CREDENTIALS)

    async def _handle_token_exchange(self, response: TokenResponse) -> HttpResponse:
        result = await self.spi.token_exchange(response)
        if result is None:
            return bad_request(UNSUPPORTED_TOKEN_EXCHANGE)
        return result

    async def _token_issue(self, ticket: str, subject: str) -> HttpResponse:
        request = TokenIssueRequest(ticket=ticket, subject=subject, properties=self.spi.get_properties() or None)
        response = await self._call_api(TOKEN_ISSUE_PATH, self.api.token_issue(request))
        self._on_action(TOKEN_ISSUE_PATH, response.action)

        match response.action:
            case TokenIssueAction.INTERNAL_SERVER_ERROR:
                return internal_server_error(response.response_content)
            case TokenIssueAction.OK:
                return ok_json(response.response_content)
            case _:
                raise self._on_unknown_action(TOKEN_ISSUE_PATH, response.action)

    async def _token_fail(self, ticket: str, reason: TokenFailReason) -> HttpResponse:
        request = TokenFailRequest(ticket=ticket, reason=reason)
        response = await self._call_api(TOKEN_FAIL_PATH, self.api.token_fail(request))
        self._on_action(TOKEN_FAIL_PATH, response.action)

        match response.action:
            case TokenFailAction.INTERNAL_SERVER_ERROR:
                return internal_server_error(response.response_content)
            case TokenFailAction.BAD_REQUEST:
                return bad_request(response.response_content)
            case _:
                raise self._on_unknown_action(TOKEN_FAIL_PATH, response.action)
