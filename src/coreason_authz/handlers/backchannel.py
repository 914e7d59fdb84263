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
Handlers for Client Initiated Backchannel Authentication (OpenID Connect CIBA Core 1.0).
"""

from typing import Any

import httpx
from pydantic import BaseModel, ConfigDict

from coreason_authz.api import AuthleteApi
from coreason_authz.claim_collector import ClaimCollector, serialize_claims
from coreason_authz.enums import UserIdentificationHintType
from coreason_authz.exceptions import WebApplicationError
from coreason_authz.handlers.base import ApiHandler, BaseHandler, ClientRequestParams, tracer
from coreason_authz.models import (
    BackchannelAuthenticationAction,
    BackchannelAuthenticationCompleteAction,
    BackchannelAuthenticationCompleteRequest,
    BackchannelAuthenticationCompleteResponse,
    BackchannelAuthenticationFailAction,
    BackchannelAuthenticationFailReason,
    BackchannelAuthenticationFailRequest,
    BackchannelAuthenticationIssueAction,
    BackchannelAuthenticationIssueRequest,
    BackchannelAuthenticationRequest,
    BackchannelAuthenticationResponse,
    CompletionResult,
)
from coreason_authz.spi import BackchannelAuthenticationCompleteHandlerSpi, BackchannelAuthenticationRequestHandlerSpi
from coreason_authz.utils.logger import logger
from coreason_authz.web import (
    CONTENT_TYPE_HTML,
    HttpResponse,
    bad_request,
    forbidden,
    internal_server_error,
    ok_json,
    unauthorized,
)

BACKCHANNEL_AUTHENTICATION_PATH = "/api/backchannel/authentication"
BACKCHANNEL_AUTHENTICATION_ISSUE_PATH = "/api/backchannel/authentication/issue"
BACKCHANNEL_AUTHENTICATION_FAIL_PATH = "/api/backchannel/authentication/fail"
BACKCHANNEL_AUTHENTICATION_COMPLETE_PATH = "/api/backchannel/authentication/complete"

CHALLENGE = 'Basic realm="backchannel/authentication"'


class BackchannelAuthenticationRequestHandler(BaseHandler[ClientRequestParams]):
    """
    Handles requests to the backchannel authentication endpoint.

    On `USER_IDENTIFICATION` the end-user is identified from the hint and the login hint
    token, user code and binding message are checked through the SPI. A failed check is
    reported through the fail API; otherwise an `auth_req_id` is issued and the SPI is
    asked to start communicating with the end-user.

    Attributes:
        spi (BackchannelAuthenticationRequestHandlerSpi): The host application's SPI.
    """

    def __init__(self, api: AuthleteApi, spi: BackchannelAuthenticationRequestHandlerSpi) -> None:
        super().__init__(api)
        self.spi = spi

    async def _handle(self, params: ClientRequestParams) -> HttpResponse:
        request = BackchannelAuthenticationRequest(**params.to_request_fields())
        response = await self._call_api(BACKCHANNEL_AUTHENTICATION_PATH, self.api.backchannel_authentication(request))
        self._on_action(BACKCHANNEL_AUTHENTICATION_PATH, response.action)

        match response.action:
            case BackchannelAuthenticationAction.BAD_REQUEST:
                return bad_request(response.response_content)
            case BackchannelAuthenticationAction.UNAUTHORIZED:
                return unauthorized(CHALLENGE, response.response_content)
            case BackchannelAuthenticationAction.INTERNAL_SERVER_ERROR:
                return internal_server_error(response.response_content)
            case BackchannelAuthenticationAction.USER_IDENTIFICATION:
                return await self._handle_user_identification(response)
            case _:
                raise self._on_unknown_action(BACKCHANNEL_AUTHENTICATION_PATH, response.action)

    async def _handle_user_identification(self, response: BackchannelAuthenticationResponse) -> HttpResponse:
        ticket = response.ticket or ""

        user = self.spi.get_user_by_hint(response.hint_type, response.hint, response.sub)
        if user is None:
            return await self._fail(
                ticket,
                BackchannelAuthenticationFailReason.UNKNOWN_USER_ID,
                "No end-user matches the hint included in the backchannel authentication request.",
            )

        if response.hint_type == UserIdentificationHintType.LOGIN_HINT_TOKEN and self.spi.is_login_hint_token_expired(
            response.hint or ""
        ):
            return await self._fail(
                ticket,
                BackchannelAuthenticationFailReason.EXPIRED_LOGIN_HINT_TOKEN,
                "The login hint token included in the backchannel authentication request has expired.",
            )

        if response.user_code_required or self.spi.should_check_user_code(user, response):
            if not response.user_code:
                return await self._fail(
                    ticket,
                    BackchannelAuthenticationFailReason.MISSING_USER_CODE,
                    "The backchannel authentication request does not include a user code.",
                )
            if not self.spi.is_valid_user_code(user, response.user_code):
                return await self._fail(
                    ticket,
                    BackchannelAuthenticationFailReason.INVALID_USER_CODE,
                    "The user code included in the backchannel authentication request is invalid.",
                )

        if response.binding_message and not self.spi.is_valid_binding_message(response.binding_message):
            return await self._fail(
                ticket,
                BackchannelAuthenticationFailReason.INVALID_BINDING_MESSAGE,
                "The binding message included in the backchannel authentication request is invalid.",
            )

        return await self._issue(user, response)

    async def _issue(self, user: Any, info: BackchannelAuthenticationResponse) -> HttpResponse:
        request = BackchannelAuthenticationIssueRequest(ticket=info.ticket or "")
        response = await self._call_api(
            BACKCHANNEL_AUTHENTICATION_ISSUE_PATH, self.api.backchannel_authentication_issue(request)
        )
        self._on_action(BACKCHANNEL_AUTHENTICATION_ISSUE_PATH, response.action)

        match response.action:
            case BackchannelAuthenticationIssueAction.INTERNAL_SERVER_ERROR:
                return internal_server_error(response.response_content)
            case BackchannelAuthenticationIssueAction.INVALID_TICKET:
                return internal_server_error(response.response_content)
            case BackchannelAuthenticationIssueAction.OK:
                await self.spi.start_communication_with_end_user(user, info, response)
                return ok_json(response.response_content)
            case _:
                raise self._on_unknown_action(BACKCHANNEL_AUTHENTICATION_ISSUE_PATH, response.action)

    async def _fail(
        self, ticket: str, reason: BackchannelAuthenticationFailReason, description: str
    ) -> HttpResponse:
        logger.warning(f"Backchannel authentication request rejected: {reason}")
        request = BackchannelAuthenticationFailRequest(ticket=ticket, reason=reason, error_description=description)
        response = await self._call_api(
            BACKCHANNEL_AUTHENTICATION_FAIL_PATH, self.api.backchannel_authentication_fail(request)
        )
        self._on_action(BACKCHANNEL_AUTHENTICATION_FAIL_PATH, response.action)

        match response.action:
            case BackchannelAuthenticationFailAction.INTERNAL_SERVER_ERROR:
                return internal_server_error(response.response_content)
            case BackchannelAuthenticationFailAction.FORBIDDEN:
                return forbidden(response.response_content)
            case BackchannelAuthenticationFailAction.BAD_REQUEST:
                return bad_request(response.response_content)
            case _:
                raise self._on_unknown_action(BACKCHANNEL_AUTHENTICATION_FAIL_PATH, response.action)


class BackchannelAuthenticationCompleteParams(BaseModel):
    """
    Attributes:
        ticket (str): The ticket of the backchannel authentication request.
        subject (str): The subject of the end-user who was asked for authorization.
        claim_names (list[str] | None): Claims requested for the ID token.
        claim_locales (list[str] | None): Preferred locales of the claims.
    """

    model_config = ConfigDict(frozen=True)

    ticket: str
    subject: str
    claim_names: list[str] | None = None
    claim_locales: list[str] | None = None


class BackchannelAuthenticationCompleteHandler(ApiHandler):
    """
    Reports the end-user's decision on a backchannel authentication request.

    In ping and push modes the Authlete API answers with `NOTIFICATION` and this handler
    delivers the notification to the client notification endpoint, authenticated with the
    client notification token.

    Attributes:
        spi (BackchannelAuthenticationCompleteHandlerSpi): The host application's SPI.
    """

    def __init__(
        self,
        api: AuthleteApi,
        spi: BackchannelAuthenticationCompleteHandlerSpi,
        client: httpx.AsyncClient | None = None,
        notification_timeout: float = 10.0,
    ) -> None:
        """
        Initialize the BackchannelAuthenticationCompleteHandler.

        Args:
            api: The Authlete API client.
            spi: The host application's SPI.
            client: The async HTTP client used for notifications (optional). If not provided, a transient
                client is created per notification.
            notification_timeout: Timeout in seconds of a notification. Defaults to 10.0.
        """
        super().__init__(api)
        self.spi = spi
        self.client = client
        self.notification_timeout = notification_timeout

    async def handle(self, params: BackchannelAuthenticationCompleteParams) -> BackchannelAuthenticationCompleteResponse:
        """
        Calls the complete API and sends the client notification when required.

        Returns:
            BackchannelAuthenticationCompleteResponse: The response of the complete API.

        Raises:
            WebApplicationError: If the API call failed, reported `SERVER_ERROR`, returned an
                unknown action, or the notification could not be delivered.
        """
        with tracer.start_as_current_span(type(self).__name__):
            request = self._build_request(params)
            response = await self._call_api(
                BACKCHANNEL_AUTHENTICATION_COMPLETE_PATH, self.api.backchannel_authentication_complete(request)
            )
            self._on_action(BACKCHANNEL_AUTHENTICATION_COMPLETE_PATH, response.action)

            match response.action:
                case BackchannelAuthenticationCompleteAction.NOTIFICATION:
                    await self._notify(response)
                case BackchannelAuthenticationCompleteAction.NO_ACTION:
                    pass
                case BackchannelAuthenticationCompleteAction.SERVER_ERROR:
                    logger.error(f"Authlete {BACKCHANNEL_AUTHENTICATION_COMPLETE_PATH} API reported a server error")
                    raise WebApplicationError(internal_server_error(response.response_content))
                case _:
                    raise self._on_unknown_action(BACKCHANNEL_AUTHENTICATION_COMPLETE_PATH, response.action)

            return response

    def _build_request(self, params: BackchannelAuthenticationCompleteParams) -> BackchannelAuthenticationCompleteRequest:
        result = self.spi.get_result()
        if result != CompletionResult.AUTHORIZED:
            return BackchannelAuthenticationCompleteRequest(
                ticket=params.ticket,
                result=result,
                subject=params.subject,
                error_description=self.spi.get_error_description(),
                error_uri=self.spi.get_error_uri(),
            )

        claims = ClaimCollector(self.spi, params.subject, params.claim_names, params.claim_locales).collect()
        return BackchannelAuthenticationCompleteRequest(
            ticket=params.ticket,
            result=result,
            subject=params.subject,
            sub=self.spi.get_sub() or None,
            auth_time=self.spi.get_user_authenticated_at(),
            acr=self.spi.get_acr() or None,
            claims=serialize_claims(claims),
            properties=self.spi.get_properties() or None,
            scopes=self.spi.get_scopes(),
        )

    async def _notify(self, response: BackchannelAuthenticationCompleteResponse) -> None:
        endpoint = response.client_notification_endpoint
        if not endpoint:
            raise WebApplicationError(
                internal_server_error("The client notification endpoint is missing.", CONTENT_TYPE_HTML)
            )

        headers = {
            "Authorization": f"Bearer {response.client_notification_token or ''}",
            "Content-Type": "application/json",
        }
        body = (response.response_content or "").encode("utf-8")

        try:
            if self.client is not None:
                result = await self.client.post(
                    endpoint, content=body, headers=headers, timeout=self.notification_timeout
                )
            else:
                async with httpx.AsyncClient(timeout=self.notification_timeout) as client:
                    result = await client.post(endpoint, content=body, headers=headers)
        except httpx.HTTPError as e:
            logger.error(f"Failed to send the notification to {endpoint}: {e}")
            raise WebApplicationError(
                internal_server_error(f"Failed to send the notification to the client: {e}", CONTENT_TYPE_HTML)
            ) from e

        if not result.is_success:
            logger.warning(f"The client notification endpoint {endpoint} responded with {result.status_code}")
        else:
            logger.info(f"Client notification delivered to {endpoint}")
