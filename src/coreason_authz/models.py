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
Request and response models for the Authlete API.

Every model serializes to camelCase JSON with unset (None) fields omitted. Each response
carries an `action` telling the caller what to do next; values outside the documented
enumeration are kept verbatim as strings so that handlers can report them as unknown.
"""

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from coreason_authz.enums import (
    ApplicationType,
    ClientAuthMethod,
    ClientType,
    DeliveryMode,
    Display,
    GrantType,
    JWSAlg,
    Prompt,
    ResponseType,
    SubjectType,
    TokenType,
    UserIdentificationHintType,
    lenient,
    lenient_list,
)


def _action_field() -> Any:
    return Field(..., union_mode="left_to_right")


class AuthleteModel(BaseModel):
    """Base model for everything exchanged with the Authlete API."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )

    def to_wire(self) -> dict[str, Any]:
        """
        Returns the JSON-ready representation sent to the Authlete API.
        """
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class ApiResponse(AuthleteModel):
    result_code: str | None = None
    result_message: str | None = None


# ---------------------------------------------------------------------------
# Shared value objects
# ---------------------------------------------------------------------------


class Property(AuthleteModel):
    """
    An arbitrary attribute attached to an access token or authorization code.

    Hidden properties are never shown to the client application in token responses,
    but are returned by introspection.
    """

    key: str | None = None
    value: str | None = None
    hidden: bool = False


class Pair(AuthleteModel):
    key: str | None = None
    value: str | None = None


class TaggedValue(AuthleteModel):
    tag: str | None = None
    value: str | None = None


class Scope(AuthleteModel):
    name: str | None = None
    default_entry: bool = False
    description: str | None = None
    descriptions: list[TaggedValue] | None = None
    attributes: list[Pair] | None = None


class DynamicScope(AuthleteModel):
    name: str | None = None
    value: str | None = None


class AuthzDetailsElement(AuthleteModel):
    """One entry of RFC 9396 `authorization_details`. Type-specific members are kept as-is."""

    model_config = ConfigDict(extra="allow")

    type: str | None = None
    locations: list[str] | None = None
    actions: list[str] | None = None
    data_types: list[str] | None = None
    identifier: str | None = None
    privileges: list[str] | None = None


class AuthzDetails(AuthleteModel):
    elements: list[AuthzDetailsElement] | None = None


class Service(AuthleteModel):
    """
    Authorization server configuration.

    Only the fields this package reads are declared; every other field Authlete
    returns is preserved and sent back unchanged on update.
    """

    model_config = ConfigDict(extra="allow")

    api_key: int | None = None
    api_secret: str | None = None
    service_name: str | None = None
    issuer: str | None = None
    description: str | None = None
    supported_grant_types: lenient_list(GrantType) = None
    supported_response_types: lenient_list(ResponseType) = None
    supported_claims: list[str] | None = None
    supported_claim_locales: list[str] | None = None
    pkce_required: bool = False
    par_required: bool = False
    access_token_sign_alg: lenient(JWSAlg) = None


class Client(AuthleteModel):
    """
    Client application configuration.

    Only the fields this package reads are declared; every other field Authlete
    returns is preserved and sent back unchanged on update.
    """

    model_config = ConfigDict(extra="allow")

    client_id: int | None = None
    client_id_alias: str | None = None
    client_id_alias_enabled: bool = False
    client_secret: str | None = None
    client_type: lenient(ClientType) = None
    client_name: str | None = None
    client_names: list[TaggedValue] | None = None
    description: str | None = None
    developer: str | None = None
    logo_uri: str | None = None
    client_uri: str | None = None
    policy_uri: str | None = None
    tos_uri: str | None = None
    redirect_uris: list[str] | None = None
    response_types: lenient_list(ResponseType) = None
    grant_types: lenient_list(GrantType) = None
    token_auth_method: lenient(ClientAuthMethod) = None
    token_auth_sign_alg: lenient(JWSAlg) = None
    application_type: lenient(ApplicationType) = None
    subject_type: lenient(SubjectType) = None
    id_token_sign_alg: lenient(JWSAlg) = None
    user_info_sign_alg: lenient(JWSAlg) = None
    request_sign_alg: lenient(JWSAlg) = None
    authorization_sign_alg: lenient(JWSAlg) = None
    bc_request_sign_alg: lenient(JWSAlg) = None


class ServiceListResponse(AuthleteModel):
    start: int = 0
    end: int = 0
    total_count: int = 0
    services: list[Service] | None = None


class ClientListResponse(AuthleteModel):
    start: int = 0
    end: int = 0
    developer: str | None = None
    total_count: int = 0
    clients: list[Client] | None = None


class AccessToken(AuthleteModel):
    access_token_hash: str | None = None
    access_token_expires_at: int = 0
    refresh_token_hash: str | None = None
    refresh_token_expires_at: int = 0
    created_at: int = 0
    last_refreshed_at: int = 0
    client_id: int | None = None
    subject: str | None = None
    grant_type: lenient(GrantType) = None
    scopes: list[str] | None = None
    properties: list[Property] | None = None


class TokenListResponse(AuthleteModel):
    start: int = 0
    end: int = 0
    client: Client | None = None
    subject: str | None = None
    total_count: int = 0
    access_tokens: list[AccessToken] | None = None


# ---------------------------------------------------------------------------
# /auth/authorization
# ---------------------------------------------------------------------------


class AuthorizationAction(StrEnum):
    INTERNAL_SERVER_ERROR = "INTERNAL_SERVER_ERROR"
    BAD_REQUEST = "BAD_REQUEST"
    LOCATION = "LOCATION"
    FORM = "FORM"
    NO_INTERACTION = "NO_INTERACTION"
    INTERACTION = "INTERACTION"


class AuthorizationIssueAction(StrEnum):
    INTERNAL_SERVER_ERROR = "INTERNAL_SERVER_ERROR"
    BAD_REQUEST = "BAD_REQUEST"
    LOCATION = "LOCATION"
    FORM = "FORM"


# The fail API answers with the same set of actions as the issue API.
AuthorizationFailAction = AuthorizationIssueAction


class AuthorizationFailReason(StrEnum):
    UNKNOWN = "UNKNOWN"
    NOT_LOGGED_IN = "NOT_LOGGED_IN"
    MAX_AGE_NOT_SUPPORTED = "MAX_AGE_NOT_SUPPORTED"
    EXCEEDS_MAX_AGE = "EXCEEDS_MAX_AGE"
    DIFFERENT_SUBJECT = "DIFFERENT_SUBJECT"
    ACR_NOT_SATISFIED = "ACR_NOT_SATISFIED"
    DENIED = "DENIED"
    SERVER_ERROR = "SERVER_ERROR"
    NOT_AUTHENTICATED = "NOT_AUTHENTICATED"
    ACCOUNT_SELECTION_REQUIRED = "ACCOUNT_SELECTION_REQUIRED"
    CONSENT_REQUIRED = "CONSENT_REQUIRED"
    INTERACTION_REQUIRED = "INTERACTION_REQUIRED"
    INVALID_TARGET = "INVALID_TARGET"


class AuthorizationRequest(AuthleteModel):
    parameters: str


class AuthorizationResponse(ApiResponse):
    action: AuthorizationAction | str = _action_field()
    service: Service | None = None
    client: Client | None = None
    display: lenient(Display) = None
    max_age: int = 0
    scopes: list[Scope] | None = None
    ui_locales: list[str] | None = None
    claims_locales: list[str] | None = None
    claims: list[str] | None = None
    acr_essential: bool = False
    client_id_alias_used: bool = False
    acrs: list[str] | None = None
    subject: str | None = None
    login_hint: str | None = None
    prompts: lenient_list(Prompt) = None
    request_object_payload: str | None = None
    id_token_claims: str | None = None
    user_info_claims: str | None = None
    resources: list[str] | None = None
    authorization_details: AuthzDetails | None = None
    purpose: str | None = None
    response_content: str | None = None
    ticket: str | None = None


class AuthorizationIssueRequest(AuthleteModel):
    ticket: str
    subject: str
    auth_time: int = 0
    sub: str | None = None
    acr: str | None = None
    claims: str | None = None
    properties: list[Property] | None = None
    scopes: list[str] | None = None


class AuthorizationIssueResponse(ApiResponse):
    action: AuthorizationIssueAction | str = _action_field()
    response_content: str | None = None
    access_token: str | None = None
    access_token_expires_at: int = 0
    access_token_duration: int = 0
    id_token: str | None = None
    authorization_code: str | None = None
    jwt_access_token: str | None = None


class AuthorizationFailRequest(AuthleteModel):
    ticket: str
    reason: AuthorizationFailReason
    description: str | None = None


class AuthorizationFailResponse(ApiResponse):
    action: AuthorizationFailAction | str = _action_field()
    response_content: str | None = None


# ---------------------------------------------------------------------------
# /auth/token
# ---------------------------------------------------------------------------


class TokenAction(StrEnum):
    INVALID_CLIENT = "INVALID_CLIENT"
    INTERNAL_SERVER_ERROR = "INTERNAL_SERVER_ERROR"
    BAD_REQUEST = "BAD_REQUEST"
    PASSWORD = "PASSWORD"
    OK = "OK"
    TOKEN_EXCHANGE = "TOKEN_EXCHANGE"


class TokenIssueAction(StrEnum):
    INTERNAL_SERVER_ERROR = "INTERNAL_SERVER_ERROR"
    OK = "OK"


class TokenFailAction(StrEnum):
    INTERNAL_SERVER_ERROR = "INTERNAL_SERVER_ERROR"
    BAD_REQUEST = "BAD_REQUEST"


class TokenFailReason(StrEnum):
    UNKNOWN = "UNKNOWN"
    INVALID_RESOURCE_OWNER_CREDENTIALS = "INVALID_RESOURCE_OWNER_CREDENTIALS"
    INVALID_TARGET = "INVALID_TARGET"


class TokenRequest(AuthleteModel):
    parameters: str
    client_id: str | None = None
    client_secret: str | None = None
    client_certificate: str | None = None
    client_certificate_path: list[str] | None = None
    properties: list[Property] | None = None


class TokenInfo(AuthleteModel):
    client_id: int | None = None
    subject: str | None = None
    scopes: list[str] | None = None
    expires_at: int = 0
    properties: list[Property] | None = None
    resources: list[str] | None = None


class TokenResponse(ApiResponse):
    action: TokenAction | str = _action_field()
    response_content: str | None = None
    username: str | None = None
    password: str | None = None
    ticket: str | None = None
    access_token: str | None = None
    access_token_expires_at: int = 0
    access_token_duration: int = 0
    refresh_token: str | None = None
    refresh_token_expires_at: int = 0
    refresh_token_duration: int = 0
    id_token: str | None = None
    grant_type: lenient(GrantType) = None
    client_id: int | None = None
    client_id_alias: str | None = None
    client_id_alias_used: bool = False
    subject: str | None = None
    scopes: list[str] | None = None
    properties: list[Property] | None = None
    jwt_access_token: str | None = None
    client_auth_method: lenient(ClientAuthMethod) = None
    resources: list[str] | None = None
    access_token_resources: list[str] | None = None
    authorization_details: AuthzDetails | None = None
    service_attributes: list[Pair] | None = None
    client_attributes: list[Pair] | None = None
    audiences: list[str] | None = None
    requested_token_type: lenient(TokenType) = None
    subject_token: str | None = None
    subject_token_type: lenient(TokenType) = None
    subject_token_info: TokenInfo | None = None
    actor_token: str | None = None
    actor_token_type: lenient(TokenType) = None
    actor_token_info: TokenInfo | None = None


class TokenIssueRequest(AuthleteModel):
    ticket: str
    subject: str
    properties: list[Property] | None = None


class TokenIssueResponse(ApiResponse):
    action: TokenIssueAction | str = _action_field()
    response_content: str | None = None
    access_token: str | None = None
    access_token_expires_at: int = 0
    access_token_duration: int = 0
    refresh_token: str | None = None
    refresh_token_expires_at: int = 0
    refresh_token_duration: int = 0
    client_id: int | None = None
    subject: str | None = None
    scopes: list[str] | None = None
    properties: list[Property] | None = None
    jwt_access_token: str | None = None


class TokenFailRequest(AuthleteModel):
    ticket: str
    reason: TokenFailReason


class TokenFailResponse(ApiResponse):
    action: TokenFailAction | str = _action_field()
    response_content: str | None = None


# ---------------------------------------------------------------------------
# Token management (/auth/token/create, update, revoke, get/list)
# ---------------------------------------------------------------------------


class TokenCreateAction(StrEnum):
    INTERNAL_SERVER_ERROR = "INTERNAL_SERVER_ERROR"
    BAD_REQUEST = "BAD_REQUEST"
    FORBIDDEN = "FORBIDDEN"
    OK = "OK"


class TokenUpdateAction(StrEnum):
    INTERNAL_SERVER_ERROR = "INTERNAL_SERVER_ERROR"
    BAD_REQUEST = "BAD_REQUEST"
    FORBIDDEN = "FORBIDDEN"
    NOT_FOUND = "NOT_FOUND"
    OK = "OK"


class TokenCreateRequest(AuthleteModel):
    grant_type: GrantType
    client_id: int
    subject: str | None = None
    scopes: list[str] | None = None
    access_token_duration: int | None = None
    refresh_token_duration: int | None = None
    properties: list[Property] | None = None
    client_id_alias_used: bool = False
    access_token: str | None = None
    refresh_token: str | None = None
    access_token_persistent: bool = False
    certificate_thumbprint: str | None = None
    resources: list[str] | None = None


class TokenCreateResponse(ApiResponse):
    action: TokenCreateAction | str = _action_field()
    access_token: str | None = None
    refresh_token: str | None = None
    expires_at: int = 0
    expires_in: int = 0
    grant_type: lenient(GrantType) = None
    client_id: int | None = None
    subject: str | None = None
    scopes: list[str] | None = None
    properties: list[Property] | None = None
    token_type: str | None = None
    jwt_access_token: str | None = None


class TokenUpdateRequest(AuthleteModel):
    access_token: str
    access_token_expires_at: int | None = None
    scopes: list[str] | None = None
    properties: list[Property] | None = None
    access_token_expires_at_updated_on_scope_update: bool = False
    access_token_persistent: bool = False
    certificate_thumbprint: str | None = None


class TokenUpdateResponse(ApiResponse):
    action: TokenUpdateAction | str = _action_field()
    access_token: str | None = None
    access_token_expires_at: int = 0
    scopes: list[str] | None = None
    properties: list[Property] | None = None
    token_type: str | None = None


class TokenRevokeRequest(AuthleteModel):
    access_token_identifier: str | None = None
    client_identifier: str | None = None
    subject: str | None = None


class TokenRevokeResponse(ApiResponse):
    count: int = 0


# ---------------------------------------------------------------------------
# /auth/revocation
# ---------------------------------------------------------------------------


class RevocationAction(StrEnum):
    INVALID_CLIENT = "INVALID_CLIENT"
    INTERNAL_SERVER_ERROR = "INTERNAL_SERVER_ERROR"
    BAD_REQUEST = "BAD_REQUEST"
    OK = "OK"


class RevocationRequest(AuthleteModel):
    parameters: str
    client_id: str | None = None
    client_secret: str | None = None
    client_certificate: str | None = None
    client_certificate_path: list[str] | None = None


class RevocationResponse(ApiResponse):
    action: RevocationAction | str = _action_field()
    response_content: str | None = None


# ---------------------------------------------------------------------------
# /auth/userinfo
# ---------------------------------------------------------------------------


class UserInfoAction(StrEnum):
    INTERNAL_SERVER_ERROR = "INTERNAL_SERVER_ERROR"
    BAD_REQUEST = "BAD_REQUEST"
    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"
    OK = "OK"


class UserInfoIssueAction(StrEnum):
    INTERNAL_SERVER_ERROR = "INTERNAL_SERVER_ERROR"
    BAD_REQUEST = "BAD_REQUEST"
    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"
    JSON = "JSON"
    JWT = "JWT"


class UserInfoRequest(AuthleteModel):
    token: str
    client_certificate: str | None = None


class UserInfoResponse(ApiResponse):
    action: UserInfoAction | str = _action_field()
    client_id: int | None = None
    subject: str | None = None
    scopes: list[str] | None = None
    claims: list[str] | None = None
    token: str | None = None
    response_content: str | None = None
    properties: list[Property] | None = None
    client_id_alias: str | None = None
    client_id_alias_used: bool = False
    user_info_claims: str | None = None


class UserInfoIssueRequest(AuthleteModel):
    token: str
    claims: str | None = None
    sub: str | None = None


class UserInfoIssueResponse(ApiResponse):
    action: UserInfoIssueAction | str = _action_field()
    response_content: str | None = None


# ---------------------------------------------------------------------------
# /auth/introspection
# ---------------------------------------------------------------------------


class IntrospectionAction(StrEnum):
    INTERNAL_SERVER_ERROR = "INTERNAL_SERVER_ERROR"
    BAD_REQUEST = "BAD_REQUEST"
    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"
    OK = "OK"


class StandardIntrospectionAction(StrEnum):
    INTERNAL_SERVER_ERROR = "INTERNAL_SERVER_ERROR"
    BAD_REQUEST = "BAD_REQUEST"
    OK = "OK"


class IntrospectionRequest(AuthleteModel):
    token: str | None = None
    scopes: list[str] | None = None
    subject: str | None = None
    client_certificate: str | None = None


class IntrospectionResponse(ApiResponse):
    action: IntrospectionAction | str = _action_field()
    response_content: str | None = None
    client_id: int | None = None
    client_id_alias: str | None = None
    client_id_alias_used: bool = False
    subject: str | None = None
    scopes: list[str] | None = None
    existent: bool = False
    usable: bool = False
    sufficient: bool = False
    refreshable: bool = False
    expires_at: int = 0
    properties: list[Property] | None = None
    certificate_thumbprint: str | None = None
    resources: list[str] | None = None
    access_token_resources: list[str] | None = None
    authorization_details: AuthzDetails | None = None
    service_attributes: list[Pair] | None = None
    client_attributes: list[Pair] | None = None


class StandardIntrospectionRequest(AuthleteModel):
    parameters: str
    with_hidden_properties: bool = False


class StandardIntrospectionResponse(ApiResponse):
    action: StandardIntrospectionAction | str = _action_field()
    response_content: str | None = None


# ---------------------------------------------------------------------------
# Device flow (/device/authorization, /device/verification, /device/complete)
# ---------------------------------------------------------------------------


class DeviceAuthorizationAction(StrEnum):
    OK = "OK"
    BAD_REQUEST = "BAD_REQUEST"
    UNAUTHORIZED = "UNAUTHORIZED"
    INTERNAL_SERVER_ERROR = "INTERNAL_SERVER_ERROR"


class DeviceVerificationAction(StrEnum):
    VALID = "VALID"
    EXPIRED = "EXPIRED"
    NOT_EXIST = "NOT_EXIST"
    SERVER_ERROR = "SERVER_ERROR"


class DeviceCompleteAction(StrEnum):
    SUCCESS = "SUCCESS"
    INVALID_REQUEST = "INVALID_REQUEST"
    USER_CODE_EXPIRED = "USER_CODE_EXPIRED"
    USER_CODE_NOT_EXIST = "USER_CODE_NOT_EXIST"
    SERVER_ERROR = "SERVER_ERROR"


class CompletionResult(StrEnum):
    """Outcome reported by the host application when a device or CIBA flow ends."""

    AUTHORIZED = "AUTHORIZED"
    ACCESS_DENIED = "ACCESS_DENIED"
    TRANSACTION_FAILED = "TRANSACTION_FAILED"


class DeviceAuthorizationRequest(AuthleteModel):
    parameters: str
    client_id: str | None = None
    client_secret: str | None = None
    client_certificate: str | None = None
    client_certificate_path: list[str] | None = None


class DeviceAuthorizationResponse(ApiResponse):
    action: DeviceAuthorizationAction | str = _action_field()
    response_content: str | None = None
    client_id: int | None = None
    client_id_alias: str | None = None
    client_id_alias_used: bool = False
    client_name: str | None = None
    client_auth_method: lenient(ClientAuthMethod) = None
    scopes: list[Scope] | None = None
    dynamic_scopes: list[DynamicScope] | None = None
    client_names: list[TaggedValue] | None = None
    acrs: list[str] | None = None
    device_code: str | None = None
    user_code: str | None = None
    verification_uri: str | None = None
    verification_uri_complete: str | None = None
    expires_in: int = 0
    interval: int = 0
    resources: list[str] | None = None
    authorization_details: AuthzDetails | None = None
    warnings: list[str] | None = None
    service_attributes: list[Pair] | None = None
    client_attributes: list[Pair] | None = None


class DeviceVerificationRequest(AuthleteModel):
    user_code: str


class DeviceVerificationResponse(ApiResponse):
    action: DeviceVerificationAction | str = _action_field()
    client_id: int | None = None
    client_id_alias: str | None = None
    client_id_alias_used: bool = False
    client_name: str | None = None
    scopes: list[Scope] | None = None
    dynamic_scopes: list[DynamicScope] | None = None
    claim_names: list[str] | None = None
    claims_locales: list[str] | None = None
    acrs: list[str] | None = None
    expires_at: int = 0
    resources: list[str] | None = None
    authorization_details: AuthzDetails | None = None
    service_attributes: list[Pair] | None = None
    client_attributes: list[Pair] | None = None


class DeviceCompleteRequest(AuthleteModel):
    user_code: str
    result: CompletionResult
    subject: str | None = None
    sub: str | None = None
    auth_time: int = 0
    acr: str | None = None
    claims: str | None = None
    properties: list[Property] | None = None
    scopes: list[str] | None = None
    idt_header_params: str | None = None
    error_description: str | None = None
    error_uri: str | None = None


class DeviceCompleteResponse(ApiResponse):
    action: DeviceCompleteAction | str = _action_field()
    response_content: str | None = None


# ---------------------------------------------------------------------------
# CIBA (/backchannel/authentication, issue, fail, complete)
# ---------------------------------------------------------------------------


class BackchannelAuthenticationAction(StrEnum):
    BAD_REQUEST = "BAD_REQUEST"
    UNAUTHORIZED = "UNAUTHORIZED"
    INTERNAL_SERVER_ERROR = "INTERNAL_SERVER_ERROR"
    USER_IDENTIFICATION = "USER_IDENTIFICATION"


class BackchannelAuthenticationIssueAction(StrEnum):
    OK = "OK"
    INTERNAL_SERVER_ERROR = "INTERNAL_SERVER_ERROR"
    INVALID_TICKET = "INVALID_TICKET"


class BackchannelAuthenticationFailAction(StrEnum):
    BAD_REQUEST = "BAD_REQUEST"
    FORBIDDEN = "FORBIDDEN"
    INTERNAL_SERVER_ERROR = "INTERNAL_SERVER_ERROR"


class BackchannelAuthenticationCompleteAction(StrEnum):
    NOTIFICATION = "NOTIFICATION"
    NO_ACTION = "NO_ACTION"
    SERVER_ERROR = "SERVER_ERROR"


class BackchannelAuthenticationFailReason(StrEnum):
    EXPIRED_LOGIN_HINT_TOKEN = "EXPIRED_LOGIN_HINT_TOKEN"
    UNKNOWN_USER_ID = "UNKNOWN_USER_ID"
    UNAUTHORIZED_CLIENT = "UNAUTHORIZED_CLIENT"
    MISSING_USER_CODE = "MISSING_USER_CODE"
    INVALID_USER_CODE = "INVALID_USER_CODE"
    INVALID_BINDING_MESSAGE = "INVALID_BINDING_MESSAGE"
    INVALID_TARGET = "INVALID_TARGET"
    ACCESS_DENIED = "ACCESS_DENIED"
    SERVER_ERROR = "SERVER_ERROR"


class BackchannelAuthenticationRequest(AuthleteModel):
    parameters: str
    client_id: str | None = None
    client_secret: str | None = None
    client_certificate: str | None = None
    client_certificate_path: list[str] | None = None


class BackchannelAuthenticationResponse(ApiResponse):
    action: BackchannelAuthenticationAction | str = _action_field()
    response_content: str | None = None
    client_id: int | None = None
    client_id_alias: str | None = None
    client_id_alias_used: bool = False
    client_name: str | None = None
    client_auth_method: lenient(ClientAuthMethod) = None
    delivery_mode: lenient(DeliveryMode) = None
    scopes: list[Scope] | None = None
    dynamic_scopes: list[DynamicScope] | None = None
    client_names: list[TaggedValue] | None = None
    client_notification_token: str | None = None
    acrs: list[str] | None = None
    hint_type: lenient(UserIdentificationHintType) = None
    hint: str | None = None
    sub: str | None = None
    binding_message: str | None = None
    user_code: str | None = None
    user_code_required: bool = False
    requested_expiry: int = 0
    request_context: str | None = None
    resources: list[str] | None = None
    authorization_details: AuthzDetails | None = None
    warnings: list[str] | None = None
    ticket: str | None = None
    service_attributes: list[Pair] | None = None
    client_attributes: list[Pair] | None = None


class BackchannelAuthenticationIssueRequest(AuthleteModel):
    ticket: str


class BackchannelAuthenticationIssueResponse(ApiResponse):
    action: BackchannelAuthenticationIssueAction | str = _action_field()
    response_content: str | None = None
    auth_req_id: str | None = None
    expires_in: int = 0
    interval: int = 0


class BackchannelAuthenticationFailRequest(AuthleteModel):
    ticket: str
    reason: BackchannelAuthenticationFailReason
    error_description: str | None = None
    error_uri: str | None = None


class BackchannelAuthenticationFailResponse(ApiResponse):
    action: BackchannelAuthenticationFailAction | str = _action_field()
    response_content: str | None = None


class BackchannelAuthenticationCompleteRequest(AuthleteModel):
    ticket: str
    result: CompletionResult
    subject: str
    sub: str | None = None
    auth_time: int = 0
    acr: str | None = None
    claims: str | None = None
    properties: list[Property] | None = None
    scopes: list[str] | None = None
    idt_header_params: str | None = None
    error_description: str | None = None
    error_uri: str | None = None


class BackchannelAuthenticationCompleteResponse(ApiResponse):
    action: BackchannelAuthenticationCompleteAction | str = _action_field()
    response_content: str | None = None
    client_id: int | None = None
    client_id_alias: str | None = None
    client_id_alias_used: bool = False
    client_name: str | None = None
    delivery_mode: lenient(DeliveryMode) = None
    client_notification_endpoint: str | None = None
    client_notification_token: str | None = None
    auth_req_id: str | None = None
    access_token: str | None = None
    refresh_token: str | None = None
    id_token: str | None = None
    access_token_duration: int = 0
    refresh_token_duration: int = 0
    id_token_duration: int = 0
    jwt_access_token: str | None = None
    resources: list[str] | None = None
    authorization_details: AuthzDetails | None = None
    service_attributes: list[Pair] | None = None
    client_attributes: list[Pair] | None = None


# ---------------------------------------------------------------------------
# /pushed_auth_req
# ---------------------------------------------------------------------------


class PushedAuthReqAction(StrEnum):
    CREATED = "CREATED"
    BAD_REQUEST = "BAD_REQUEST"
    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"
    PAYLOAD_TOO_LARGE = "PAYLOAD_TOO_LARGE"
    INTERNAL_SERVER_ERROR = "INTERNAL_SERVER_ERROR"


class PushedAuthReqRequest(AuthleteModel):
    parameters: str
    client_id: str | None = None
    client_secret: str | None = None
    client_certificate: str | None = None
    client_certificate_path: list[str] | None = None


class PushedAuthReqResponse(ApiResponse):
    action: PushedAuthReqAction | str = _action_field()
    response_content: str | None = None
    client_auth_method: lenient(ClientAuthMethod) = None
    request_uri: str | None = None
