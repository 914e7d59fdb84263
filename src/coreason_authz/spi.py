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
Service provider interfaces implemented by the host application, with no-op adapters.

Handlers read authentication state, consent decisions and claim values through these
protocols and never cache or mutate what they return. Adapters return None/False/empty
for every method except the ones a host application must implement, which raise
`NotImplementedError`.
"""

from typing import Any, Protocol

from coreason_authz.enums import UserIdentificationHintType
from coreason_authz.models import (
    AuthorizationResponse,
    BackchannelAuthenticationIssueResponse,
    BackchannelAuthenticationResponse,
    CompletionResult,
    Property,
    TokenResponse,
)
from coreason_authz.web import HttpResponse


class UserClaimProvider(Protocol):
    """Supplies claim values of an end-user."""

    def get_user_claim_value(self, subject: str, claim_name: str, language_tag: str | None = None) -> Any:
        """
        Returns the value of a claim, or None if the user has no such claim.

        Args:
            subject: The subject (unique identifier) of the end-user.
            claim_name: A claim name such as `name` or `email`, without any language tag.
            language_tag: A BCP 47 language tag such as `ja-JP`, or None.
        """
        ...


class AuthorizationIssueSpi(UserClaimProvider, Protocol):
    """State needed to issue an authorization response for the current end-user."""

    def get_user_authenticated_at(self) -> int:
        """Returns the time the end-user was authenticated, in seconds since the Unix epoch."""
        ...

    def get_user_subject(self) -> str | None:
        ...

    def get_sub(self) -> str | None:
        """Returns the value of the `sub` claim to embed in the ID token instead of the subject."""
        ...

    def get_acr(self) -> str | None:
        """Returns the ACR (Authentication Context Class Reference) the end-user was authenticated with."""
        ...

    def get_properties(self) -> list[Property] | None:
        """Returns extra properties to associate with the access token or authorization code."""
        ...

    def get_scopes(self) -> list[str] | None:
        """Returns scopes replacing the requested ones, or None to keep the request's scopes."""
        ...


class NoInteractionHandlerSpi(AuthorizationIssueSpi, Protocol):
    """SPI of `NoInteractionHandler` (authorization requests with `prompt=none`)."""

    def is_user_authenticated(self) -> bool:
        ...


class AuthorizationRequestHandlerSpi(NoInteractionHandlerSpi, Protocol):
    """SPI of `AuthorizationRequestHandler`."""

    async def generate_authorization_page(self, response: AuthorizationResponse) -> HttpResponse:
        """
        Renders the page asking the end-user to authorize the client application.

        Args:
            response: The response of the Authlete `/auth/authorization` API.

        Returns:
            HttpResponse: The consent page.
        """
        ...


class AuthorizationDecisionHandlerSpi(AuthorizationIssueSpi, Protocol):
    """SPI of `AuthorizationDecisionHandler`."""

    def is_client_authorized(self) -> bool:
        """Returns True if the end-user granted authorization to the client application."""
        ...


class TokenRequestHandlerSpi(Protocol):
    """SPI of `TokenRequestHandler`."""

    def authenticate_user(self, username: str | None, password: str | None) -> str | None:
        """
        Authenticates an end-user for the Resource Owner Password Credentials flow.

        Returns:
            str | None: The subject of the authenticated end-user, or None if authentication failed.
        """
        ...

    def get_properties(self) -> list[Property] | None:
        ...

    async def token_exchange(self, response: TokenResponse) -> HttpResponse | None:
        """
        Handles a token exchange request (RFC 8693).

        Returns:
            HttpResponse | None: The token response, or None if token exchange is not supported.
        """
        ...


class UserInfoRequestHandlerSpi(Protocol):
    """SPI of `UserInfoRequestHandler`."""

    def prepare_user_claims(self, subject: str, claim_names: list[str]) -> None:
        """Called once before any claim value of `subject` is requested."""
        ...

    def get_user_claim(self, claim_name: str, language_tag: str | None = None) -> Any:
        """Returns a claim value of the end-user passed to `prepare_user_claims`."""
        ...

    def get_sub(self) -> str | None:
        ...


class DeviceCompleteRequestHandlerSpi(AuthorizationIssueSpi, Protocol):
    """SPI of `DeviceCompleteRequestHandler`."""

    def get_result(self) -> CompletionResult:
        """Returns the outcome of the end-user's decision on the device."""
        ...

    def get_error_description(self) -> str | None:
        ...

    def get_error_uri(self) -> str | None:
        ...

    async def on_success(self) -> HttpResponse:
        ...

    async def on_invalid_request(self) -> HttpResponse:
        ...

    async def on_user_code_expired(self) -> HttpResponse:
        ...

    async def on_user_code_not_exist(self) -> HttpResponse:
        ...

    async def on_server_error(self) -> HttpResponse:
        ...


class BackchannelAuthenticationRequestHandlerSpi(Protocol):
    """SPI of `BackchannelAuthenticationRequestHandler`."""

    def get_user_by_hint(self, hint_type: UserIdentificationHintType | None, hint: str | None, sub: str | None) -> Any:
        """
        Identifies the end-user from the hint of a backchannel authentication request.

        Returns:
            The end-user object, or None if no end-user matches the hint.
        """
        ...

    def is_login_hint_token_expired(self, login_hint_token: str) -> bool:
        ...

    def should_check_user_code(self, user: Any, response: BackchannelAuthenticationResponse) -> bool:
        """
        Requires a user code even when the service does not (`response.user_code_required`).
        """
        ...

    def is_valid_user_code(self, user: Any, user_code: str) -> bool:
        ...

    def is_valid_binding_message(self, binding_message: str) -> bool:
        ...

    async def start_communication_with_end_user(
        self,
        user: Any,
        response: BackchannelAuthenticationResponse,
        issue_response: BackchannelAuthenticationIssueResponse,
    ) -> None:
        """
        Starts asking the end-user for authorization on the authentication device.

        Called after the request was accepted; long-running work should be handed off so
        that the backchannel authentication response is not delayed.
        """
        ...


class BackchannelAuthenticationCompleteHandlerSpi(AuthorizationIssueSpi, Protocol):
    """SPI of `BackchannelAuthenticationCompleteHandler`."""

    def get_result(self) -> CompletionResult:
        ...

    def get_error_description(self) -> str | None:
        ...

    def get_error_uri(self) -> str | None:
        ...


class UserClaimProviderAdapter:
    """No-op implementation of `UserClaimProvider`."""

    def get_user_claim_value(self, subject: str, claim_name: str, language_tag: str | None = None) -> Any:
        return None


class AuthorizationIssueSpiAdapter(UserClaimProviderAdapter):
    """No-op implementation of `AuthorizationIssueSpi`."""

    def get_user_authenticated_at(self) -> int:
        return 0

    def get_user_subject(self) -> str | None:
        return None

    def get_sub(self) -> str | None:
        return None

    def get_acr(self) -> str | None:
        return None

    def get_properties(self) -> list[Property] | None:
        return None

    def get_scopes(self) -> list[str] | None:
        return None


class NoInteractionHandlerSpiAdapter(AuthorizationIssueSpiAdapter):
    def is_user_authenticated(self) -> bool:
        return False


class AuthorizationRequestHandlerSpiAdapter(NoInteractionHandlerSpiAdapter):
    async def generate_authorization_page(self, response: AuthorizationResponse) -> HttpResponse:
        raise NotImplementedError("generate_authorization_page must be implemented by the host application")


class AuthorizationDecisionHandlerSpiAdapter(AuthorizationIssueSpiAdapter):
    def is_client_authorized(self) -> bool:
        return False


class TokenRequestHandlerSpiAdapter:
    """Token endpoint SPI without the Resource Owner Password Credentials flow nor token exchange."""

    def authenticate_user(self, username: str | None, password: str | None) -> str | None:
        raise NotImplementedError("authenticate_user must be implemented to support the password grant")

    def get_properties(self) -> list[Property] | None:
        return None

    async def token_exchange(self, response: TokenResponse) -> HttpResponse | None:
        return None


class UserInfoRequestHandlerSpiAdapter:
    def prepare_user_claims(self, subject: str, claim_names: list[str]) -> None:
        return None

    def get_user_claim(self, claim_name: str, language_tag: str | None = None) -> Any:
        return None

    def get_sub(self) -> str | None:
        return None


class DeviceCompleteRequestHandlerSpiAdapter(AuthorizationIssueSpiAdapter):
    """
    Partial implementation of `DeviceCompleteRequestHandlerSpi`.

    `get_result` and the `on_*` page callbacks must be implemented by the host application.
    """

    def get_result(self) -> CompletionResult:
        raise NotImplementedError("get_result must be implemented by the host application")

    def get_error_description(self) -> str | None:
        return None

    def get_error_uri(self) -> str | None:
        return None

    async def on_success(self) -> HttpResponse:
        raise NotImplementedError("on_success must be implemented by the host application")

    async def on_invalid_request(self) -> HttpResponse:
        raise NotImplementedError("on_invalid_request must be implemented by the host application")

    async def on_user_code_expired(self) -> HttpResponse:
        raise NotImplementedError("on_user_code_expired must be implemented by the host application")

    async def on_user_code_not_exist(self) -> HttpResponse:
        raise NotImplementedError("on_user_code_not_exist must be implemented by the host application")

    async def on_server_error(self) -> HttpResponse:
        raise NotImplementedError("on_server_error must be implemented by the host application")


class BackchannelAuthenticationRequestHandlerSpiAdapter:
    def get_user_by_hint(self, hint_type: UserIdentificationHintType | None, hint: str | None, sub: str | None) -> Any:
        return None

    def is_login_hint_token_expired(self, login_hint_token: str) -> bool:
        return False

    def should_check_user_code(self, user: Any, response: BackchannelAuthenticationResponse) -> bool:
        return False

    def is_valid_user_code(self, user: Any, user_code: str) -> bool:
        return True

    def is_valid_binding_message(self, binding_message: str) -> bool:
        return True

    async def start_communication_with_end_user(
        self,
        user: Any,
        response: BackchannelAuthenticationResponse,
        issue_response: BackchannelAuthenticationIssueResponse,
    ) -> None:
        return None


class BackchannelAuthenticationCompleteHandlerSpiAdapter(AuthorizationIssueSpiAdapter):
    def get_result(self) -> CompletionResult:
        raise NotImplementedError("get_result must be implemented by the host application")

    def get_error_description(self) -> str | None:
        return None

    def get_error_uri(self) -> str | None:
        return None
