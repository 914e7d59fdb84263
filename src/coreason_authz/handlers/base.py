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
Base classes shared by the endpoint handlers.
"""

from abc import ABC, abstractmethod
from collections.abc import Awaitable
from typing import Any, Generic, TypeVar

from opentelemetry import trace
from opentelemetry.trace import Status, StatusCode
from pydantic import BaseModel, ConfigDict

from coreason_authz.api import AuthleteApi
from coreason_authz.exceptions import AuthleteApiError, WebApplicationError
from coreason_authz.utils.logger import logger
from coreason_authz.web import (
    CONTENT_TYPE_HTML,
    BasicCredentials,
    HttpResponse,
    internal_server_error,
    normalize_parameters,
)

tracer = trace.get_tracer(__name__)

P = TypeVar("P")
T = TypeVar("T")


def api_failure(path: str, error: AuthleteApiError) -> WebApplicationError:
    """
    Wraps a failed Authlete API call into a 500 response.

    Args:
        path: The API path, used in the message (e.g. `/api/auth/token`).
        error: The transport failure.

    Returns:
        WebApplicationError: Carrier of a `text/html` 500 response describing the failure.
    """
    message = f"Authlete {path} API failed: {error.message}"
    if error.response_body:
        message = f"{message}: {error.response_body}"
    return WebApplicationError(internal_server_error(message, CONTENT_TYPE_HTML), error)


def unknown_action(path: str) -> WebApplicationError:
    """Returns the carrier of the 500 response for an action outside the documented enumeration."""
    message = f"Authlete {path} API returned an unknown action"
    return WebApplicationError(internal_server_error(message, CONTENT_TYPE_HTML))


def invalid_action(action: str) -> HttpResponse:
    """Returns the 500 response for an action the handler is not meant to process."""
    return internal_server_error(f"{action} is an invalid action.")


class ApiHandler:
    """
    Holds the `AuthleteApi` and wraps its calls.

    Attributes:
        api (AuthleteApi): The Authlete API client.
    """

    def __init__(self, api: AuthleteApi) -> None:
        self.api = api

    async def _call_api(self, path: str, call: Awaitable[T]) -> T:
        """
        Awaits an API call, turning a transport failure into a `WebApplicationError`.

        Raises:
            WebApplicationError: If the call raised `AuthleteApiError`.
        """
        try:
            return await call
        except AuthleteApiError as e:
            logger.error(f"Authlete {path} API call failed: {e.message} (status={e.status_code})")
            raise api_failure(path, e) from e

    def _on_action(self, path: str, action: Any) -> None:
        """Records the action returned by an API call on the current span and in the log."""
        trace.get_current_span().set_attribute("authz.action", str(action))
        logger.info(f"Authlete {path} API returned {action}")

    def _on_unknown_action(self, path: str, action: Any) -> WebApplicationError:
        logger.warning(f"Authlete {path} API returned an unknown action: {action}")
        return unknown_action(path)


class BaseHandler(ApiHandler, ABC, Generic[P]):
    """
    An endpoint handler turning request parameters into an `HttpResponse`.

    `handle()` runs inside an OpenTelemetry span named after the handler class and never
    raises `WebApplicationError`: the response it carries is returned instead.
    """

    async def handle(self, params: P) -> HttpResponse:
        """
        Handles a request.

        Args:
            params: The request parameters; their shape depends on the endpoint.

        Returns:
            HttpResponse: The response to return to the client.
        """
        with tracer.start_as_current_span(type(self).__name__) as span:
            try:
                response = await self._handle(params)
            except WebApplicationError as e:
                response = e.response

            span.set_attribute("http.status_code", response.status)
            if response.status >= 500:
                span.set_status(Status(StatusCode.ERROR, response.body or ""))

            return response

    @abstractmethod
    async def _handle(self, params: P) -> HttpResponse:
        """Handles a request. May raise `WebApplicationError` to short-circuit."""


class ClientRequestParams(BaseModel):
    """
    Request data of an endpoint at which the client application authenticates.

    Attributes:
        parameters (str | dict[str, str] | None): The form parameters, raw or as a mapping.
        authorization (str | None): Value of the `Authorization` header, if any.
        client_certificate (str | None): The client certificate used in mutual TLS, in PEM format.
        client_certificate_path (list[str] | None): The certificate chain of the client certificate.
    """

    model_config = ConfigDict(frozen=True)

    parameters: str | dict[str, str] | None = None
    authorization: str | None = None
    client_certificate: str | None = None
    client_certificate_path: list[str] | None = None

    def to_request_fields(self) -> dict[str, Any]:
        """
        Returns the fields shared by the Authlete requests of such endpoints.

        Client credentials found in a Basic `Authorization` header are included.
        """
        fields: dict[str, Any] = {
            "parameters": normalize_parameters(self.parameters),
            "client_certificate": self.client_certificate,
            "client_certificate_path": self.client_certificate_path,
        }
        credentials = BasicCredentials.parse(self.authorization)
        if credentials is not None:
            fields["client_id"] = credentials.user_id or None
            fields["client_secret"] = credentials.password or None
        return fields
