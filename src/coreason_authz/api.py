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
Abstract interface of the Authlete API.

Every method either returns the typed response of the remote endpoint or raises
`AuthleteApiError` when the call could not be completed. A response whose `action`
denotes an error is a successful call and is returned normally.
"""

from abc import ABC, abstractmethod

from coreason_authz.models import (
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


class AuthleteApi(ABC):
    """
    One coroutine per Authlete API endpoint.

    Implementations authenticate end-user facing calls with the service credentials and
    service or client management calls with the service-owner credentials.
    """

    # Authorization endpoint

    @abstractmethod
    async def authorization(self, request: AuthorizationRequest) -> AuthorizationResponse:
        """Calls `/auth/authorization` with the parameters of an authorization request."""

    @abstractmethod
    async def authorization_issue(self, request: AuthorizationIssueRequest) -> AuthorizationIssueResponse:
        """Calls `/auth/authorization/issue` to issue an authorization code, ID token and/or access token."""

    @abstractmethod
    async def authorization_fail(self, request: AuthorizationFailRequest) -> AuthorizationFailResponse:
        """Calls `/auth/authorization/fail` to build an error response for an authorization request."""

    # Token endpoint

    @abstractmethod
    async def token(self, request: TokenRequest) -> TokenResponse:
        """Calls `/auth/token` with the parameters of a token request."""

    @abstractmethod
    async def token_issue(self, request: TokenIssueRequest) -> TokenIssueResponse:
        """Calls `/auth/token/issue` after resource owner credentials were verified."""

    @abstractmethod
    async def token_fail(self, request: TokenFailRequest) -> TokenFailResponse:
        """Calls `/auth/token/fail` to build an error response for a token request."""

    # Token management

    @abstractmethod
    async def token_create(self, request: TokenCreateRequest) -> TokenCreateResponse:
        """Calls `/auth/token/create` to create an access token directly."""

    @abstractmethod
    async def token_update(self, request: TokenUpdateRequest) -> TokenUpdateResponse:
        """Calls `/auth/token/update` to update an existing access token."""

    @abstractmethod
    async def token_revoke(self, request: TokenRevokeRequest) -> TokenRevokeResponse:
        """Calls `/auth/token/revoke` to revoke access tokens."""

    @abstractmethod
    async def get_token_list(
        self,
        client_identifier: str | None = None,
        subject: str | None = None,
        start: int | None = None,
        end: int | None = None,
    ) -> TokenListResponse:
        """
        Calls `/auth/token/get/list`.

        Args:
            client_identifier: Only list tokens of this client (ID or alias).
            subject: Only list tokens of this resource owner.
            start: Start index (inclusive). The remote default applies when omitted.
            end: End index (exclusive). The remote default applies when omitted.
        """

    # Revocation, user info and introspection endpoints

    @abstractmethod
    async def revocation(self, request: RevocationRequest) -> RevocationResponse:
        """Calls `/auth/revocation` with the parameters of a revocation request (RFC 7009)."""

    @abstractmethod
    async def user_info(self, request: UserInfoRequest) -> UserInfoResponse:
        """Calls `/auth/userinfo` to validate the access token presented at the userinfo endpoint."""

    @abstractmethod
    async def user_info_issue(self, request: UserInfoIssueRequest) -> UserInfoIssueResponse:
        """Calls `/auth/userinfo/issue` to build the userinfo response (JSON or JWT)."""

    @abstractmethod
    async def introspection(self, request: IntrospectionRequest) -> IntrospectionResponse:
        """Calls `/auth/introspection`, the Authlete-specific introspection API."""

    @abstractmethod
    async def standard_introspection(self, request: StandardIntrospectionRequest) -> StandardIntrospectionResponse:
        """Calls `/auth/introspection/standard` (RFC 7662)."""

    # Service management

    @abstractmethod
    async def get_service(self, api_key: int) -> Service:
        """Calls `/service/get/{apiKey}`."""

    @abstractmethod
    async def get_service_list(self, start: int | None = None, end: int | None = None) -> ServiceListResponse:
        """Calls `/service/get/list`. The remote defaults apply to omitted bounds."""

    @abstractmethod
    async def create_service(self, service: Service) -> Service:
        """Calls `/service/create`."""

    @abstractmethod
    async def update_service(self, service: Service) -> Service:
        """Calls `/service/update`."""

    @abstractmethod
    async def delete_service(self, api_key: int) -> None:
        """Calls `/service/delete/{apiKey}`."""

    @abstractmethod
    async def get_service_jwks(self, pretty: bool = False, include_private_keys: bool = False) -> str | None:
        """
        Calls `/service/jwks/get`.

        Returns:
            str | None: The JWK Set document, or None when the service has none.
        """

    @abstractmethod
    async def get_service_configuration(self, pretty: bool = False) -> str:
        """Calls `/service/configuration` and returns the OpenID Provider metadata as a JSON string."""

    # Client management

    @abstractmethod
    async def get_client(self, client_id: int | str) -> Client:
        """Calls `/client/get/{clientId}`. Accepts a client ID or a client ID alias."""

    @abstractmethod
    async def get_client_list(
        self,
        developer: str | None = None,
        start: int | None = None,
        end: int | None = None,
    ) -> ClientListResponse:
        """Calls `/client/get/list`, optionally filtered by developer."""

    @abstractmethod
    async def create_client(self, client: Client) -> Client:
        """Calls `/client/create`."""

    @abstractmethod
    async def update_client(self, client: Client) -> Client:
        """Calls `/client/update`."""

    @abstractmethod
    async def delete_client(self, client_id: int | str) -> None:
        """Calls `/client/delete/{clientId}`."""

    # CIBA

    @abstractmethod
    async def backchannel_authentication(
        self, request: BackchannelAuthenticationRequest
    ) -> BackchannelAuthenticationResponse:
        """Calls `/backchannel/authentication`."""

    @abstractmethod
    async def backchannel_authentication_issue(
        self, request: BackchannelAuthenticationIssueRequest
    ) -> BackchannelAuthenticationIssueResponse:
        """Calls `/backchannel/authentication/issue`."""

    @abstractmethod
    async def backchannel_authentication_fail(
        self, request: BackchannelAuthenticationFailRequest
    ) -> BackchannelAuthenticationFailResponse:
        """Calls `/backchannel/authentication/fail`."""

    @abstractmethod
    async def backchannel_authentication_complete(
        self, request: BackchannelAuthenticationCompleteRequest
    ) -> BackchannelAuthenticationCompleteResponse:
        """Calls `/backchannel/authentication/complete`."""

    # Device flow

    @abstractmethod
    async def device_authorization(self, request: DeviceAuthorizationRequest) -> DeviceAuthorizationResponse:
        """Calls `/device/authorization`."""

    @abstractmethod
    async def device_verification(self, request: DeviceVerificationRequest) -> DeviceVerificationResponse:
        """Calls `/device/verification`."""

    @abstractmethod
    async def device_complete(self, request: DeviceCompleteRequest) -> DeviceCompleteResponse:
        """Calls `/device/complete`."""

    # PAR

    @abstractmethod
    async def pushed_authorization_request(self, request: PushedAuthReqRequest) -> PushedAuthReqResponse:
        """Calls `/pushed_auth_req`."""
