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
Handlers for the authorization endpoint (RFC 6749, 3.1 and OpenID Connect Core 1.0, 3.1.2).
"""

import time
from collections.abc import Mapping
from typing import TypeVar

from coreason_authz.api import AuthleteApi
from coreason_authz.claim_collector import ClaimCollector, serialize_claims
from coreason_authz.handlers.base import BaseHandler, invalid_action
from coreason_authz.models import (
    AuthorizationAction,
    AuthorizationFailAction,
    AuthorizationFailReason,
    AuthorizationFailRequest,
    AuthorizationIssueAction,
    AuthorizationIssueRequest,
    AuthorizationRequest,
    AuthorizationResponse,
)
from coreason_authz.spi import AuthorizationIssueSpi, AuthorizationRequestHandlerSpi, NoInteractionHandlerSpi
from coreason_authz.utils.logger import logger
from coreason_authz.web import (
    HttpResponse,
    bad_request,
    internal_server_error,
    location,
    normalize_parameters,
    ok_html,
)

AUTHORIZATION_PATH = "/api/auth/authorization"
AUTHORIZATION_ISSUE_PATH = "/api/auth/authorization/issue"
AUTHORIZATION_FAIL_PATH = "/api/auth/authorization/fail"

P = TypeVar("P")

AuthorizationParameters = str | Mapping[str, str] | None


def is_max_age_exceeded(max_age: int, auth_time: int, now: float | None = None) -> bool:
    """
    Checks the `max_age` request parameter against the end-user's authentication time.

    Args:
        max_age: Maximum authentication age in seconds; 0 disables the check.
        auth_time: Authentication time in seconds since the Unix epoch.
        now: Current time in seconds since the Unix epoch. Defaults to `time.time()`.

    Returns:
        bool: True if more than `max_age` seconds elapsed since `auth_time`.
    """
    if max_age == 0:
        return False
    if now is None:
        now = time.time()
    return now > auth_time + max_age


def is_acr_satisfied(requested_acrs: list[str] | None, acr_essential: bool, acr: str | None) -> bool:
    """
    Checks the end-user's ACR against the requested ACR values.

    A mismatch only fails the check when the `acr` claim was requested as essential.
    """
    if not requested_acrs:
        return True
    if acr in requested_acrs:
        return True
    return not acr_essential


class AuthorizationRequestBaseHandler(BaseHandler[P]):
    """
    Issue and fail steps shared by the authorization endpoint handlers.
    """

    async def _authorization_issue(self, request: AuthorizationIssueRequest) -> HttpResponse:
        response = await self._call_api(AUTHORIZATION_ISSUE_PATH, self.api.authorization_issue(request))
        self._on_action(AUTHORIZATION_ISSUE_PATH, response.action)

        match response.action:
            case AuthorizationIssueAction.INTERNAL_SERVER_ERROR:
                return internal_server_error(response.response_content)
            case AuthorizationIssueAction.BAD_REQUEST:
                return bad_request(response.response_content)
            case AuthorizationIssueAction.LOCATION:
                return location(response.response_content)
            case AuthorizationIssueAction.FORM:
                return ok_html(response.response_content)
            case _:
                raise self._on_unknown_action(AUTHORIZATION_ISSUE_PATH, response.action)

    async def _authorization_fail(self, ticket: str, reason: AuthorizationFailReason) -> HttpResponse:
        request = AuthorizationFailRequest(ticket=ticket, reason=reason)
        response = await self._call_api(AUTHORIZATION_FAIL_PATH, self.api.authorization_fail(request))
        self._on_action(AUTHORIZATION_FAIL_PATH, response.action)

        match response.action:
            case AuthorizationFailAction.INTERNAL_SERVER_ERROR:
                return internal_server_error(response.response_content)
            case AuthorizationFailAction.BAD_REQUEST:
                return bad_request(response.response_content)
            case AuthorizationFailAction.LOCATION:
                return location(response.response_content)
            case AuthorizationFailAction.FORM:
                return ok_html(response.response_content)
            case _:
                raise self._on_unknown_action(AUTHORIZATION_FAIL_PATH, response.action)

    async def _issue(
        self,
        spi: AuthorizationIssueSpi,
        ticket: str,
        subject: str,
        auth_time: int,
        claim_names: list[str] | None,
        claim_locales: list[str] | None,
        acr: str | None = None,
    ) -> HttpResponse:
        """
        Issues the authorization response for `subject`, with claims and extras supplied by the SPI.
        """
        claims = ClaimCollector(spi, subject, claim_names, claim_locales).collect()
        request = AuthorizationIssueRequest(
            ticket=ticket,
            subject=subject,
            auth_time=auth_time,
            acr=acr or None,
            sub=spi.get_sub() or None,
            claims=serialize_claims(claims),
            properties=spi.get_properties() or None,
            scopes=spi.get_scopes(),
        )
        return await self._authorization_issue(request)

    async def _handle_no_interaction(
        self, response: AuthorizationResponse, spi: NoInteractionHandlerSpi
    ) -> HttpResponse:
        """
        Authorizes a `prompt=none` request without user interaction.

        Checks authentication, max age, subject and ACR in that order and calls the fail
        API with the reason of the first failing check; otherwise issues the response.
        """
        ticket = response.ticket or ""

        if not spi.is_user_authenticated():
            logger.warning("No-interaction authorization rejected: the end-user is not logged in")
            return await self._authorization_fail(ticket, AuthorizationFailReason.NOT_LOGGED_IN)

        auth_time = spi.get_user_authenticated_at()
        if is_max_age_exceeded(response.max_age, auth_time):
            logger.warning("No-interaction authorization rejected: the authentication exceeds max_age")
            return await self._authorization_fail(ticket, AuthorizationFailReason.EXCEEDS_MAX_AGE)

        subject = spi.get_user_subject()
        if response.subject and response.subject != subject:
            logger.warning("No-interaction authorization rejected: the end-user is not the requested subject")
            return await self._authorization_fail(ticket, AuthorizationFailReason.DIFFERENT_SUBJECT)

        acr = spi.get_acr()
        if not is_acr_satisfied(response.acrs, response.acr_essential, acr):
            logger.warning("No-interaction authorization rejected: no requested ACR is satisfied")
            return await self._authorization_fail(ticket, AuthorizationFailReason.ACR_NOT_SATISFIED)

        return await self._issue(
            spi,
            ticket,
            subject or "",
            auth_time,
            response.claims,
            response.claims_locales,
            acr=acr,
        )


class AuthorizationRequestHandler(AuthorizationRequestBaseHandler[AuthorizationParameters]):
    """
    Handles requests to the authorization endpoint.

    `handle()` takes the request parameters, either the raw query string (or form body)
    or a mapping of them.

    Attributes:
        spi (AuthorizationRequestHandlerSpi): The host application's SPI.
    """

    def __init__(self, api: AuthleteApi, spi: AuthorizationRequestHandlerSpi) -> None:
        super().__init__(api)
        self.spi = spi

    async def _handle(self, params: AuthorizationParameters) -> HttpResponse:
        request = AuthorizationRequest(parameters=normalize_parameters(params))
        response = await self._call_api(AUTHORIZATION_PATH, self.api.authorization(request))
        self._on_action(AUTHORIZATION_PATH, response.action)

        match response.action:
            case AuthorizationAction.INTERNAL_SERVER_ERROR:
                return internal_server_error(response.response_content)
            case AuthorizationAction.BAD_REQUEST:
                return bad_request(response.response_content)
            case AuthorizationAction.LOCATION:
                return location(response.response_content)
            case AuthorizationAction.FORM:
                return ok_html(response.response_content)
            case AuthorizationAction.INTERACTION:
                return await self.spi.generate_authorization_page(response)
            case AuthorizationAction.NO_INTERACTION:
                return await self._handle_no_interaction(response, self.spi)
            case _:
                raise self._on_unknown_action(AUTHORIZATION_PATH, response.action)


class NoInteractionHandler(AuthorizationRequestBaseHandler[AuthorizationResponse]):
    """
    Handles an `AuthorizationResponse` whose action is `NO_INTERACTION`.

    Any other action is reported as an invalid action.
    """

    def __init__(self, api: AuthleteApi, spi: NoInteractionHandlerSpi) -> None:
        super().__init__(api)
        self.spi = spi

    async def _handle(self, params: AuthorizationResponse) -> HttpResponse:
        if params.action != AuthorizationAction.NO_INTERACTION:
            return invalid_action(str(params.action))
        return await self._handle_no_interaction(params, self.spi)


class AuthorizationRequestErrorHandler(BaseHandler[AuthorizationResponse]):
    """
    Maps the error actions of an `AuthorizationResponse` to a response.

    `INTERACTION` and `NO_INTERACTION` are not errors and are reported as invalid actions.
    """

    async def _handle(self, params: AuthorizationResponse) -> HttpResponse:
        match params.action:
            case AuthorizationAction.INTERNAL_SERVER_ERROR:
                return internal_server_error(params.response_content)
            case AuthorizationAction.BAD_REQUEST:
                return bad_request(params.response_content)
            case AuthorizationAction.LOCATION:
                return location(params.response_content)
            case AuthorizationAction.FORM:
                return ok_html(params.response_content)
            case AuthorizationAction.INTERACTION | AuthorizationAction.NO_INTERACTION:
                return invalid_action(str(params.action))
            case _:
                raise self._on_unknown_action(AUTHORIZATION_PATH, params.action)
