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
HTTP response descriptors and request helpers shared by the endpoint handlers.

The handlers never talk to a live socket: they return an `HttpResponse` that the hosting
web framework turns into its own response object.
"""

import base64
import binascii
import re
from collections.abc import Mapping
from urllib.parse import quote

from pydantic import BaseModel, ConfigDict, Field

CONTENT_TYPE_JSON = "application/json; charset=utf-8"
CONTENT_TYPE_HTML = "text/html; charset=utf-8"
CONTENT_TYPE_JAVASCRIPT = "application/javascript; charset=utf-8"
CONTENT_TYPE_JWT = "application/jwt"

STATUS_OK = 200
STATUS_CREATED = 201
STATUS_NO_CONTENT = 204
STATUS_FOUND = 302
STATUS_BAD_REQUEST = 400
STATUS_UNAUTHORIZED = 401
STATUS_FORBIDDEN = 403
STATUS_NOT_FOUND = 404
STATUS_PAYLOAD_TOO_LARGE = 413
STATUS_INTERNAL_SERVER_ERROR = 500

_BASIC_PATTERN = re.compile(r"^Basic\s(.+)$", re.IGNORECASE)


class HttpResponse(BaseModel):
    """
    Framework-neutral HTTP response.

    Attributes:
        status (int): HTTP status code.
        headers (dict[str, str]): Response headers.
        body (str | None): Response body, or None for an empty body.
    """

    model_config = ConfigDict(frozen=True)

    status: int
    headers: dict[str, str] = Field(default_factory=dict)
    body: str | None = None

    @property
    def content_type(self) -> str | None:
        return self.headers.get("Content-Type")


def _headers(content_type: str | None = None) -> dict[str, str]:
    headers = {"Cache-Control": "no-store", "Pragma": "no-cache"}
    if content_type:
        headers["Content-Type"] = content_type
    return headers


def build_response(status: int, headers: dict[str, str] | None = None, body: str | None = None) -> HttpResponse:
    return HttpResponse(status=status, headers=headers if headers is not None else _headers(), body=body)


def ok(content: str | None, content_type: str = CONTENT_TYPE_JSON) -> HttpResponse:
    return build_response(STATUS_OK, _headers(content_type), content)


def ok_json(content: str | None) -> HttpResponse:
    return ok(content, CONTENT_TYPE_JSON)


def ok_html(content: str | None) -> HttpResponse:
    return ok(content, CONTENT_TYPE_HTML)


def ok_javascript(content: str | None) -> HttpResponse:
    return ok(content, CONTENT_TYPE_JAVASCRIPT)


def ok_jwt(content: str | None) -> HttpResponse:
    return ok(content, CONTENT_TYPE_JWT)


def created(content: str | None) -> HttpResponse:
    return build_response(STATUS_CREATED, _headers(CONTENT_TYPE_JSON), content)


def no_content() -> HttpResponse:
    return build_response(STATUS_NO_CONTENT, _headers())


def location(url: str | None) -> HttpResponse:
    """
    Builds a `302 Found` redirect.

    Args:
        url: Value of the `Location` header.

    Returns:
        HttpResponse: The redirect response, without a body.
    """
    headers = _headers()
    headers["Location"] = url or ""
    return build_response(STATUS_FOUND, headers)


def bad_request(content: str | None) -> HttpResponse:
    return build_response(STATUS_BAD_REQUEST, _headers(CONTENT_TYPE_JSON), content)


def unauthorized(challenge: str, content: str | None = None) -> HttpResponse:
    headers = _headers(CONTENT_TYPE_JSON)
    headers["WWW-Authenticate"] = challenge
    return build_response(STATUS_UNAUTHORIZED, headers, content)


def forbidden(content: str | None) -> HttpResponse:
    return build_response(STATUS_FORBIDDEN, _headers(CONTENT_TYPE_JSON), content)


def not_found(content: str | None) -> HttpResponse:
    return build_response(STATUS_NOT_FOUND, _headers(CONTENT_TYPE_JSON), content)


def payload_too_large(content: str | None) -> HttpResponse:
    return build_response(STATUS_PAYLOAD_TOO_LARGE, _headers(CONTENT_TYPE_JSON), content)


def internal_server_error(content: str | None, content_type: str = CONTENT_TYPE_JSON) -> HttpResponse:
    return build_response(STATUS_INTERNAL_SERVER_ERROR, _headers(content_type), content)


def www_authenticate(status: int, challenge: str | None) -> HttpResponse:
    """
    Builds a bodiless response carrying only a `WWW-Authenticate` challenge (RFC 6750).

    Args:
        status: HTTP status code.
        challenge: Value of the `WWW-Authenticate` header.

    Returns:
        HttpResponse: The challenge response.
    """
    headers = _headers()
    headers["WWW-Authenticate"] = challenge or ""
    return build_response(status, headers)


# A Bearer error is the WWW-Authenticate challenge itself, so both names build the same response.
bearer_error = www_authenticate


class BasicCredentials(BaseModel):
    """
    Credentials decoded from an HTTP Basic `Authorization` header.

    Attributes:
        user_id (str | None): The user ID (the client ID at OAuth endpoints).
        password (str | None): The password (the client secret at OAuth endpoints).
    """

    model_config = ConfigDict(frozen=True)

    user_id: str | None = None
    password: str | None = None

    @classmethod
    def parse(cls, value: str | None) -> "BasicCredentials | None":
        """
        Parses the value of an `Authorization` header.

        Args:
            value: The header value, e.g. `Basic Y2xpZW50OnNlY3JldA==`.

        Returns:
            BasicCredentials | None: The decoded credentials, or None when the value is
            missing or is not a well-formed Basic credential.
        """
        if not value:
            return None

        match = _BASIC_PATTERN.match(value)
        if match is None:
            return None

        try:
            decoded = base64.b64decode(match.group(1), validate=True).decode("utf-8")
        except (binascii.Error, UnicodeDecodeError):
            return None

        user_id, sep, password = decoded.partition(":")
        return cls(user_id=user_id, password=password if sep else None)


def form_url_encode(parameters: Mapping[str, str]) -> str:
    """
    Encodes parameters as `application/x-www-form-urlencoded`.

    Empty keys are skipped and a key with an empty value is emitted without `=`.
    """
    elements = []
    for key, value in parameters.items():
        if not key:
            continue
        encoded_key = quote(key, safe="")
        if not value:
            elements.append(encoded_key)
        else:
            elements.append(f"{encoded_key}={quote(value, safe='')}")
    return "&".join(elements)


def normalize_parameters(parameters: str | Mapping[str, str] | None) -> str:
    """
    Normalizes raw request parameters into the string the Authlete API expects.

    Args:
        parameters: A query string / form body, a mapping of parameters, or None.

    Returns:
        str: The parameters as a form-url-encoded string; an empty string for None.
    """
    if parameters is None:
        return ""
    if isinstance(parameters, Mapping):
        return form_url_encode(parameters)
    return parameters
