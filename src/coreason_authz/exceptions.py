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
Custom exceptions for the coreason-authz package.
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from coreason_authz.web import HttpResponse


class CoreasonAuthzError(Exception):
    """Base exception for all coreason-authz errors."""


class ConfigurationError(CoreasonAuthzError):
    """Raised when the configuration is missing, unreadable or invalid."""


class AuthleteApiError(CoreasonAuthzError):
    """
    Raised when a call to the Authlete API could not be completed.

    Covers network errors, timeouts, non-2xx statuses and unreadable or unparsable
    response bodies. A successful call whose `action` denotes an error is NOT reported
    through this exception.

    Attributes:
        message (str): Human-readable description of the failure.
        status_code (int | None): HTTP status code of the failed call, if any.
        status_message (str | None): HTTP reason phrase of the failed call, if any.
        response_body (str | None): Raw response body, if any.
        headers (dict[str, str] | None): Response headers, if any.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        status_message: str | None = None,
        response_body: str | None = None,
        headers: dict[str, str] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.status_message = status_message
        self.response_body = response_body
        self.headers = headers


class WebApplicationError(CoreasonAuthzError):
    """
    Carries a ready-made HTTP response out of a handler's control flow.

    Attributes:
        response (HttpResponse): The response the endpoint should return.
        cause (AuthleteApiError | None): The API failure that produced the response, if any.
    """

    def __init__(self, response: "HttpResponse", cause: AuthleteApiError | None = None) -> None:
        super().__init__(response.body or f"HTTP {response.status}")
        self.response = response
        self.cause = cause
