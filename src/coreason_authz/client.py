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
Default `AuthleteApi` implementation backed by `httpx`.
"""

from typing import Any, TypeVar

import httpx
from opentelemetry.instrumentation.httpx import HTTPXClientInstrumentor
from pydantic import BaseModel, ValidationError

from coreason_authz.api import AuthleteApi
from coreason_authz.config import AuthzConfig
from coreason_authz.exceptions import AuthleteApiError
from coreason_authz.models import (
    AuthleteModel,
    AuthorizationFailRequest,
    AuthorizationFailResponse,
    AuthorizationIssueRequest,
    AuthorizationIssueResponse,
    AuthorizationRequest,
    AuthorizationResponse,
    BackchannelAuthenticationCompleteRequest,
    BackchannelAuthenticationCompleteResponse,
    BackchannelAuthenticationFailRequest,
    BackchannelAuthenticationFailResponse,
    BackchannelAuthenticationIssueRequest,
    BackchannelAuthenticationIssueResponse,
    BackchannelAuthenticationRequest,
    BackchannelAuthenticationResponse,
    Client,
    ClientListResponse,
    DeviceAuthorizationRequest,
    DeviceAuthorizationResponse,
    DeviceCompleteRequest,
    DeviceCompleteResponse,
    DeviceVerificationRequest,
    DeviceVerificationResponse,
    IntrospectionRequest,
    IntrospectionResponse,
    PushedAuthReqRequest,
    PushedAuthReqResponse,
    RevocationRequest,
    RevocationResponse,
    Service,
    ServiceListResponse,
    StandardIntrospectionRequest,
    StandardIntrospectionResponse,
    TokenCreateRequest,
    TokenCreateResponse,
    TokenFailRequest,
    TokenFailResponse,
    TokenIssueRequest,
    TokenIssueResponse,
    TokenListResponse,
    TokenRequest,
    TokenResponse,
    TokenRevokeRequest,
    TokenRevokeResponse,
    TokenUpdateRequest,
    TokenUpdateResponse,
    UserInfoIssueRequest,
    UserInfoIssueResponse,
    UserInfoRequest,
    UserInfoResponse,
)
from coreason_authz.utils.logger import logger

R = TypeVar("R", bound=BaseModel)

AUTHORIZATION_API_PATH = "/auth/authorization"
AUTHORIZATION_ISSUE_API_PATH = "/auth/authorization/issue"
AUTHORIZATION_FAIL_API_PATH = "/auth/authorization/fail"
TOKEN_API_PATH = "/auth/token"
TOKEN_ISSUE_API_PATH = "/auth/token/issue"
TOKEN_FAIL_API_PATH = "/auth/token/fail"
TOKEN_CREATE_API_PATH = "/auth/token/create"
TOKEN_UPDATE_API_PATH = "/auth/token/update"
TOKEN_REVOKE_API_PATH = "/auth/token/revoke"
TOKEN_GET_LIST_API_PATH = "/auth/token/get/list"
REVOCATION_API_PATH = "/auth/revocation"
USER_INFO_API_PATH = "/auth/userinfo"
USER_INFO_ISSUE_API_PATH = "/auth/userinfo/issue"
INTROSPECTION_API_PATH = "/auth/introspection"
INTROSPECTION_STANDARD_API_PATH = "/auth/introspection/standard"
SERVICE_GET_API_PATH = "/service/get/{api_key}"
SERVICE_GET_LIST_API_PATH = "/service/get/list"
SERVICE_CREATE_API_PATH = "/service/create"
SERVICE_UPDATE_API_PATH = "/service/update"
SERVICE_DELETE_API_PATH = "/service/delete/{api_key}"
SERVICE_JWKS_GET_API_PATH = "/service/jwks/get"
SERVICE_CONFIGURATION_API_PATH = "/service/configuration"
CLIENT_GET_API_PATH = "/client/get/{client_id}"
CLIENT_GET_LIST_API_PATH = "/client/get/list"
CLIENT_CREATE_API_PATH = "/client/create"
CLIENT_UPDATE_API_PATH = "/client/update"
CLIENT_DELETE_API_PATH = "/client/delete/{client_id}"
BACKCHANNEL_AUTHENTICATION_API_PATH = "/backchannel/authentication"
BACKCHANNEL_AUTHENTICATION_ISSUE_API_PATH = "/backchannel/authentication/issue"
BACKCHANNEL_AUTHENTICATION_FAIL_API_PATH = "/backchannel/authentication/fail"
BACKCHANNEL_AUTHENTICATION_COMPLETE_API_PATH = "/backchannel/authentication/complete"
DEVICE_AUTHORIZATION_API_PATH = "/device/authorization"
DEVICE_VERIFICATION_API_PATH = "/device/verification"
DEVICE_COMPLETE_API_PATH = "/device/complete"
PUSHED_AUTH_REQ_API_PATH = "/pushed_auth_req"


def _flag(value: bool) -> str:
    return "true" if value else "false"


def _bounds(start: int | None, end: int | None) -> dict[str, str]:
    params: dict[str, str] = {}
    if start is not None:
        params["start"] = str(start)
    if end is not None:
        params["end"] = str(end)
    return params


class AuthleteApiClient(AuthleteApi):
    """
    Calls the Authlete API over HTTPS with HTTP Basic authentication.

    End-user facing calls are authenticated with the service credentials; service and
    client management calls (and the JWK Set retrieval) with the service-owner credentials.
    Every call is bounded by `config.http_timeout`; a timeout surfaces as `AuthleteApiError`
    and is never retried here.

    Attributes:
        config (AuthzConfig): The connection settings.
    """

    def __init__(self, config: AuthzConfig, client: httpx.AsyncClient | None = None) -> None:
        """
        Initialize the AuthleteApiClient.

        Args:
            config: The connection settings.
            client: External async client (optional). If not provided, an instrumented client is created
                and closed by `aclose()`.
        """
        self.config = config
        self._base_url = config.base_url
        self._service_owner_credentials = httpx.BasicAuth(
            config.service_owner_api_key, config.service_owner_api_secret.get_secret_value()
        )
        self._service_credentials = httpx.BasicAuth(
            config.service_api_key, config.service_api_secret.get_secret_value()
        )
        self._internal_client = client is None

        if client:
            self._client = client
        else:
            self._client = httpx.AsyncClient(timeout=config.http_timeout)
            HTTPXClientInstrumentor().instrument_client(self._client)

    async def __aenter__(self) -> "AuthleteApiClient":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Closes the underlying HTTP client if this instance created it."""
        if self._internal_client:
            await self._client.aclose()

    async def _call(
        self,
        method: str,
        path: str,
        credentials: httpx.BasicAuth,
        params: dict[str, str] | None = None,
        body: AuthleteModel | None = None,
    ) -> str:
        """
        Performs one API call and returns the raw response body.

        Raises:
            AuthleteApiError: On network errors, timeouts and non-2xx statuses.
        """
        kwargs: dict[str, Any] = {
            "auth": credentials,
            "headers": {"Accept": "application/json"},
            "timeout": self.config.http_timeout,
        }
        if params:
            kwargs["params"] = params
        if body is not None:
            kwargs["json"] = body.to_wire()

        url = f"{self._base_url}{path}"
        logger.debug(f"Calling Authlete API: {method} {path}")

        try:
            response = await self._client.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            raise AuthleteApiError(str(e) or e.__class__.__name__) from e

        if not response.is_success:
            raise AuthleteApiError(
                "Unsuccessful response returned",
                status_code=response.status_code,
                status_message=response.reason_phrase,
                response_body=response.text,
                headers=dict(response.headers),
            )

        return response.text

    async def _call_model(
        self,
        method: str,
        path: str,
        credentials: httpx.BasicAuth,
        response_type: type[R],
        params: dict[str, str] | None = None,
        body: AuthleteModel | None = None,
    ) -> R:
        text = await self._call(method, path, credentials, params=params, body=body)
        try:
            return response_type.model_validate_json(text)
        except ValidationError as e:
            raise AuthleteApiError(f"Failed to parse the response of {path}: {e}", response_body=text) from e

    async def _service_post(self, path: str, body: AuthleteModel, response_type: type[R]) -> R:
        return await self._call_model("POST", path, self._service_credentials, response_type, body=body)

    async def _service_owner_post(self, path: str, body: AuthleteModel, response_type: type[R]) -> R:
        return await self._call_model("POST", path, self._service_owner_credentials, response_type, body=body)

    # Authorization endpoint

    async def authorization(self, request: AuthorizationRequest) -> AuthorizationResponse:
        return await self._service_post(AUTHORIZATION_API_PATH, request, AuthorizationResponse)

    async def authorization_issue(self, request: AuthorizationIssueRequest) -> AuthorizationIssueResponse:
        return await self._service_post(AUTHORIZATION_ISSUE_API_PATH, request, AuthorizationIssueResponse)

    async def authorization_fail(self, request: AuthorizationFailRequest) -> AuthorizationFailResponse:
        return await self._service_post(AUTHORIZATION_FAIL_API_PATH, request, AuthorizationFailResponse)

    # Token endpoint

    async def token(self, request: TokenRequest) -> TokenResponse:
        return await self._service_post(TOKEN_API_PATH, request, TokenResponse)

    async def token_issue(self, request: TokenIssueRequest) -> TokenIssueResponse:
        return await self._service_post(TOKEN_ISSUE_API_PATH, request, TokenIssueResponse)

    async def token_fail(self, request: TokenFailRequest) -> TokenFailResponse:
        return await self._service_post(TOKEN_FAIL_API_PATH, request, TokenFailResponse)

    # Token management

    async def token_create(self, request: TokenCreateRequest) -> TokenCreateResponse:
        return await self._service_post(TOKEN_CREATE_API_PATH, request, TokenCreateResponse)

    async def token_update(self, request: TokenUpdateRequest) -> TokenUpdateResponse:
        return await self._service_post(TOKEN_UPDATE_API_PATH, request, TokenUpdateResponse)

    async def token_revoke(self, request: TokenRevokeRequest) -> TokenRevokeResponse:
        return await self._service_post(TOKEN_REVOKE_API_PATH, request, TokenRevokeResponse)

    async def get_token_list(
        self,
        client_identifier: str | None = None,
        subject: str | None = None,
        start: int | None = None,
        end: int | None = None,
    ) -> TokenListResponse:
        params = _bounds(start, end)
        if client_identifier is not None:
            params["clientIdentifier"] = client_identifier
        if subject is not None:
            params["subject"] = subject
        return await self._call_model(
            "GET", TOKEN_GET_LIST_API_PATH, self._service_credentials, TokenListResponse, params=params
        )

    # Revocation, user info and introspection endpoints

    async def revocation(self, request: RevocationRequest) -> RevocationResponse:
        return await self._service_post(REVOCATION_API_PATH, request, RevocationResponse)

    async def user_info(self, request: UserInfoRequest) -> UserInfoResponse:
        return await self._service_post(USER_INFO_API_PATH, request, UserInfoResponse)

    async def user_info_issue(self, request: UserInfoIssueRequest) -> UserInfoIssueResponse:
        return await self._service_post(USER_INFO_ISSUE_API_PATH, request, UserInfoIssueResponse)

    async def introspection(self, request: IntrospectionRequest) -> IntrospectionResponse:
        return await self._service_post(INTROSPECTION_API_PATH, request, IntrospectionResponse)

    async def standard_introspection(self, request: StandardIntrospectionRequest) -> StandardIntrospectionResponse:
        return await self._service_post(INTROSPECTION_STANDARD_API_PATH, request, StandardIntrospectionResponse)

    # Service management

    async def get_service(self, api_key: int) -> Service:
        path = SERVICE_GET_API_PATH.format(api_key=api_key)
        return await self._call_model("GET", path, self._service_owner_credentials, Service)

    async def get_service_list(self, start: int | None = None, end: int | None = None) -> ServiceListResponse:
        return await self._call_model(
            "GET",
            SERVICE_GET_LIST_API_PATH,
            self._service_owner_credentials,
            ServiceListResponse,
            params=_bounds(start, end),
        )

    async def create_service(self, service: Service) -> Service:
        return await self._service_owner_post(SERVICE_CREATE_API_PATH, service, Service)

    async def update_service(self, service: Service) -> Service:
        return await self._service_owner_post(SERVICE_UPDATE_API_PATH, service, Service)

    async def delete_service(self, api_key: int) -> None:
        await self._call("DELETE", SERVICE_DELETE_API_PATH.format(api_key=api_key), self._service_owner_credentials)

    async def get_service_jwks(self, pretty: bool = False, include_private_keys: bool = False) -> str | None:
        params = {"pretty": _flag(pretty), "includePrivateKeys": _flag(include_private_keys)}
        text = await self._call("GET", SERVICE_JWKS_GET_API_PATH, self._service_owner_credentials, params=params)
        return text or None

    async def get_service_configuration(self, pretty: bool = False) -> str:
        params = {"pretty": _flag(pretty)}
        return await self._call("GET", SERVICE_CONFIGURATION_API_PATH, self._service_credentials, params=params)

    # Client management

    async def get_client(self, client_id: int | str) -> Client:
        path = CLIENT_GET_API_PATH.format(client_id=client_id)
        return await self._call_model("GET", path, self._service_owner_credentials, Client)

    async def get_client_list(
        self,
        developer: str | None = None,
        start: int | None = None,
        end: int | None = None,
    ) -> ClientListResponse:
        params = _bounds(start, end)
        if developer is not None:
            params["developer"] = developer
        return await self._call_model(
            "GET", CLIENT_GET_LIST_API_PATH, self._service_owner_credentials, ClientListResponse, params=params
        )

    async def create_client(self, client: Client) -> Client:
        return await self._service_owner_post(CLIENT_CREATE_API_PATH, client, Client)

    async def update_client(self, client: Client) -> Client:
        return await self._service_owner_post(CLIENT_UPDATE_API_PATH, client, Client)

    async def delete_client(self, client_id: int | str) -> None:
        await self._call(
            "DELETE", CLIENT_DELETE_API_PATH.format(client_id=client_id), self._service_owner_credentials
        )

    # CIBA

    async def backchannel_authentication(
        self, request: BackchannelAuthenticationRequest
    ) -> BackchannelAuthenticationResponse:
        return await self._service_post(
            BACKCHANNEL_AUTHENTICATION_API_PATH, request, BackchannelAuthenticationResponse
        )

    async def backchannel_authentication_issue(
        self, request: BackchannelAuthenticationIssueRequest
    ) -> BackchannelAuthenticationIssueResponse:
        return await self._service_post(
            BACKCHANNEL_AUTHENTICATION_ISSUE_API_PATH, request, BackchannelAuthenticationIssueResponse
        )

    async def backchannel_authentication_fail(
        self, request: BackchannelAuthenticationFailRequest
    ) -> BackchannelAuthenticationFailResponse:
        return await self._service_post(
            BACKCHANNEL_AUTHENTICATION_FAIL_API_PATH, request, BackchannelAuthenticationFailResponse
        )

    async def backchannel_authentication_complete(
        self, request: BackchannelAuthenticationCompleteRequest
    ) -> BackchannelAuthenticationCompleteResponse:
        return await self._service_post(
            BACKCHANNEL_AUTHENTICATION_COMPLETE_API_PATH, request, BackchannelAuthenticationCompleteResponse
        )

    # Device flow

    async def device_authorization(self, request: DeviceAuthorizationRequest) -> DeviceAuthorizationResponse:
        return await self._service_post(DEVICE_AUTHORIZATION_API_PATH, request, DeviceAuthorizationResponse)

    async def device_verification(self, request: DeviceVerificationRequest) -> DeviceVerificationResponse:
        return await self._service_post(DEVICE_VERIFICATION_API_PATH, request, DeviceVerificationResponse)

    async def device_complete(self, request: DeviceCompleteRequest) -> DeviceCompleteResponse:
        return await self._service_post(DEVICE_COMPLETE_API_PATH, request, DeviceCompleteResponse)

    # PAR

    async def pushed_authorization_request(self, request: PushedAuthReqRequest) -> PushedAuthReqResponse:
        return await self._service_post(PUSHED_AUTH_REQ_API_PATH, request, PushedAuthReqResponse)
