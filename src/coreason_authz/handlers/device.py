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
Handlers for the Device Authorization Grant (RFC 8628).
"""

from pydantic import BaseModel, ConfigDict

from coreason_authz.api import AuthleteApi
from coreason_authz.claim_collector import ClaimCollector, serialize_claims
from coreason_authz.handlers.base import ApiHandler, BaseHandler, ClientRequestParams, tracer
from coreason_authz.models import (
    CompletionResult,
    DeviceAuthorizationAction,
    DeviceAuthorizationRequest,
    DeviceCompleteAction,
    DeviceCompleteRequest,
    DeviceVerificationAction,
    DeviceVerificationRequest,
    DeviceVerificationResponse,
)
from coreason_authz.spi import DeviceCompleteRequestHandlerSpi
from coreason_authz.utils.logger import logger
from coreason_authz.web import HttpResponse, bad_request, internal_server_error, ok_json, unauthorized

DEVICE_AUTHORIZATION_PATH = "/api/device/authorization"
DEVICE_VERIFICATION_PATH = "/api/device/verification"
DEVICE_COMPLETE_PATH = "/api/device/complete"

CHALLENGE = 'Basic realm="device/authorization"'


class DeviceAuthorizationRequestHandler(BaseHandler[ClientRequestParams]):
    """Handles requests to the device authorization endpoint."""

    async def _handle(self, params: ClientRequestParams) -> HttpResponse:
        request = DeviceAuthorizationRequest(**params.to_request_fields())
        response = await self._call_api(DEVICE_AUTHORIZATION_PATH, self.api.device_authorization(request))
        self._on_action(DEVICE_AUTHORIZATION_PATH, response.action)

        match response.action:
            case DeviceAuthorizationAction.OK:
                return ok_json(response.response_content)
            case DeviceAuthorizationAction.BAD_REQUEST:
                return bad_request(response.response_content)
            case DeviceAuthorizationAction.UNAUTHORIZED:
                return unauthorized(CHALLENGE, response.response_content)
            case DeviceAuthorizationAction.INTERNAL_SERVER_ERROR:
                return internal_server_error(response.response_content)
            case _:
                raise self._on_unknown_action(DEVICE_AUTHORIZATION_PATH, response.action)


class DeviceVerificationHandler(ApiHandler):
    """
    Looks up the user code the end-user entered at the verification endpoint.

    The result is returned as-is so the host application can render the matching page
    (`VALID`, `EXPIRED`, `NOT_EXIST` or `SERVER_ERROR`).
    """

    async def handle(self, user_code: str) -> DeviceVerificationResponse:
        """
        Verifies a user code.

        Args:
            user_code: The user code entered by the end-user.

        Returns:
            DeviceVerificationResponse: The verification result.

        Raises:
            WebApplicationError: If the API call failed or returned an unknown action.
        """
        with tracer.start_as_current_span(type(self).__name__):
            request = DeviceVerificationRequest(user_code=user_code)
            response = await self._call_api(DEVICE_VERIFICATION_PATH, self.api.device_verification(request))
            self._on_action(DEVICE_VERIFICATION_PATH, response.action)

            if not isinstance(response.action, DeviceVerificationAction):
                raise self._on_unknown_action(DEVICE_VERIFICATION_PATH, response.action)
            return response


class DeviceCompleteParams(BaseModel):
    """
    Attributes:
        user_code (str): The user code the end-user entered.
        claim_names (list[str] | None): Claims requested for the ID token.
        claim_locales (list[str] | None): Preferred locales of the claims.
    """

    model_config = ConfigDict(frozen=True)

    user_code: str
    claim_names: list[str] | None = None
    claim_locales: list[str] | None = None


class DeviceCompleteRequestHandler(BaseHandler[DeviceCompleteParams]):
    """
    Reports the end-user's decision on a device flow to the Authlete API.

    The response page for each outcome is produced by the SPI `on_*` callbacks.

    Attributes:
        spi (DeviceCompleteRequestHandlerSpi): The host application's SPI.
    """

    def __init__(self, api: AuthleteApi, spi: DeviceCompleteRequestHandlerSpi) -> None:
        super().__init__(api)
        self.spi = spi

    def _build_request(self, params: DeviceCompleteParams) -> DeviceCompleteRequest:
        result = self.spi.get_result()
        subject = self.spi.get_user_subject()

        if result != CompletionResult.AUTHORIZED or not subject:
            if result == CompletionResult.AUTHORIZED:
                logger.warning("Device flow authorized without an authenticated end-user")
                result = CompletionResult.TRANSACTION_FAILED
            return DeviceCompleteRequest(
                user_code=params.user_code,
                result=result,
                subject=subject or None,
                error_description=self.spi.get_error_description(),
                error_uri=self.spi.get_error_uri(),
            )

        claims = ClaimCollector(self.spi, subject, params.claim_names, params.claim_locales).collect()
        return DeviceCompleteRequest(
            user_code=params.user_code,
            result=result,
            subject=subject,
            sub=self.spi.get_sub() or None,
            auth_time=self.spi.get_user_authenticated_at(),
            acr=self.spi.get_acr() or None,
            claims=serialize_claims(claims),
            properties=self.spi.get_properties() or None,
            scopes=self.spi.get_scopes(),
        )

    async def _handle(self, params: DeviceCompleteParams) -> HttpResponse:
        request = self._build_request(params)
        response = await self._call_api(DEVICE_COMPLETE_PATH, self.api.device_complete(request))
        self._on_action(DEVICE_COMPLETE_PATH, response.action)

        match response.action:
            case DeviceCompleteAction.SUCCESS:
                return await self.spi.on_success()
            case DeviceCompleteAction.INVALID_REQUEST:
                return await self.spi.on_invalid_request()
            case DeviceCompleteAction.USER_CODE_EXPIRED:
                return await self.spi.on_user_code_expired()
            case DeviceCompleteAction.USER_CODE_NOT_EXIST:
                return await self.spi.on_user_code_not_exist()
            case DeviceCompleteAction.SERVER_ERROR:
                return await self.spi.on_server_error()
            case _:
                raise self._on_unknown_action(DEVICE_COMPLETE_PATH, response.action)
