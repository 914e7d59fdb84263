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
Enumerations exchanged with the Authlete API.

Authlete transmits these values by constant name (e.g. `AUTHORIZATION_CODE`), which is the
enum value here. The protocol parameter value (e.g. `authorization_code`) is available as
`.string` and can be mapped back with `from_string()`.
"""

from enum import StrEnum
from functools import partial
from typing import Annotated, Any, TypeVar

from pydantic import BeforeValidator

E = TypeVar("E", bound=StrEnum)


class WireEnum(StrEnum):
    """Base class for enumerations carrying both a wire name and a protocol string."""

    string: str

    def __new__(cls, value: str, string: str) -> "WireEnum":
        member = str.__new__(cls, value)
        member._value_ = value
        member.string = string
        return member

    @classmethod
    def from_string(cls, string: str | None) -> Any:
        """
        Finds the member whose protocol string equals `string`.

        Args:
            string: A protocol parameter value such as `client_secret_basic`.

        Returns:
            The matching member, or None if there is none.
        """
        for member in cls:
            if member.string == string:
                return member
        return None


class ApplicationType(WireEnum):
    WEB = ("WEB", "web")
    NATIVE = ("NATIVE", "native")


class ClientAuthMethod(WireEnum):
    NONE = ("NONE", "none")
    CLIENT_SECRET_BASIC = ("CLIENT_SECRET_BASIC", "client_secret_basic")
    CLIENT_SECRET_POST = ("CLIENT_SECRET_POST", "client_secret_post")
    CLIENT_SECRET_JWT = ("CLIENT_SECRET_JWT", "client_secret_jwt")
    PRIVATE_KEY_JWT = ("PRIVATE_KEY_JWT", "private_key_jwt")
    TLS_CLIENT_AUTH = ("TLS_CLIENT_AUTH", "tls_client_auth")
    SELF_SIGNED_TLS_CLIENT_AUTH = ("SELF_SIGNED_TLS_CLIENT_AUTH", "self_signed_tls_client_auth")


class ClientType(WireEnum):
    PUBLIC = ("PUBLIC", "public")
    CONFIDENTIAL = ("CONFIDENTIAL", "confidential")


class DeliveryMode(WireEnum):
    POLL = ("POLL", "poll")
    PING = ("PING", "ping")
    PUSH = ("PUSH", "push")


class Display(WireEnum):
    PAGE = ("PAGE", "page")
    POPUP = ("POPUP", "popup")
    TOUCH = ("TOUCH", "touch")
    WAP = ("WAP", "wap")


class GrantType(WireEnum):
    AUTHORIZATION_CODE = ("AUTHORIZATION_CODE", "authorization_code")
    IMPLICIT = ("IMPLICIT", "implicit")
    PASSWORD = ("PASSWORD", "password")
    CLIENT_CREDENTIALS = ("CLIENT_CREDENTIALS", "client_credentials")
    REFRESH_TOKEN = ("REFRESH_TOKEN", "refresh_token")
    CIBA = ("CIBA", "urn:openid:params:grant-type:ciba")
    DEVICE_CODE = ("DEVICE_CODE", "urn:ietf:params:oauth:grant-type:device_code")
    TOKEN_EXCHANGE = ("TOKEN_EXCHANGE", "urn:ietf:params:oauth:grant-type:token-exchange")


class JWSAlg(WireEnum):
    NONE = ("NONE", "none")
    HS256 = ("HS256", "HS256")
    HS384 = ("HS384", "HS384")
    HS512 = ("HS512", "HS512")
    RS256 = ("RS256", "RS256")
    RS384 = ("RS384", "RS384")
    RS512 = ("RS512", "RS512")
    ES256 = ("ES256", "ES256")
    ES384 = ("ES384", "ES384")
    ES512 = ("ES512", "ES512")
    PS256 = ("PS256", "PS256")
    PS384 = ("PS384", "PS384")
    PS512 = ("PS512", "PS512")


class Prompt(WireEnum):
    NONE = ("NONE", "none")
    LOGIN = ("LOGIN", "login")
    CONSENT = ("CONSENT", "consent")
    SELECT_ACCOUNT = ("SELECT_ACCOUNT", "select_account")


class ResponseType(WireEnum):
    NONE = ("NONE", "none")
    CODE = ("CODE", "code")
    TOKEN = ("TOKEN", "token")
    ID_TOKEN = ("ID_TOKEN", "id_token")
    CODE_TOKEN = ("CODE_TOKEN", "code token")
    CODE_ID_TOKEN = ("CODE_ID_TOKEN", "code id_token")
    ID_TOKEN_TOKEN = ("ID_TOKEN_TOKEN", "id_token token")
    CODE_ID_TOKEN_TOKEN = ("CODE_ID_TOKEN_TOKEN", "code id_token token")


class SubjectType(WireEnum):
    PUBLIC = ("PUBLIC", "public")
    PAIRWISE = ("PAIRWISE", "pairwise")


class TokenType(WireEnum):
    JWT = ("JWT", "urn:ietf:params:oauth:token-type:jwt")
    ACCESS_TOKEN = ("ACCESS_TOKEN", "urn:ietf:params:oauth:token-type:access_token")
    REFRESH_TOKEN = ("REFRESH_TOKEN", "urn:ietf:params:oauth:token-type:refresh_token")
    ID_TOKEN = ("ID_TOKEN", "urn:ietf:params:oauth:token-type:id_token")
    SAML1 = ("SAML1", "urn:ietf:params:oauth:token-type:saml1")
    SAML2 = ("SAML2", "urn:ietf:params:oauth:token-type:saml2")


class UserIdentificationHintType(WireEnum):
    ID_TOKEN_HINT = ("ID_TOKEN_HINT", "id_token_hint")
    LOGIN_HINT = ("LOGIN_HINT", "login_hint")
    LOGIN_HINT_TOKEN = ("LOGIN_HINT_TOKEN", "login_hint_token")


def _coerce(enum_cls: type[E], value: Any) -> E | None:
    if value is None or isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        return None


def _coerce_list(enum_cls: type[E], value: Any) -> list[E] | None:
    if value is None:
        return None
    coerced = (_coerce(enum_cls, item) for item in value)
    return [item for item in coerced if item is not None]


def lenient(enum_cls: type[E]) -> Any:
    """
    Annotated type for an optional enum field whose unknown wire values become None.
    """
    return Annotated[enum_cls | None, BeforeValidator(partial(_coerce, enum_cls))]


def lenient_list(enum_cls: type[E]) -> Any:
    """
    Annotated type for an optional enum list whose unknown wire values are dropped.
    """
    return Annotated[list[enum_cls] | None, BeforeValidator(partial(_coerce_list, enum_cls))]  # type: ignore[valid-type]
