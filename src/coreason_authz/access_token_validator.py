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
Access token validation for protected resource endpoints.
"""

from coreason_authz.api import AuthleteApi
from coreason_authz.exceptions import AuthleteApiError
from coreason_authz.handlers.base import tracer
from coreason_authz.models import IntrospectionAction, IntrospectionRequest, IntrospectionResponse
from coreason_authz.utils.logger import logger
from coreason_authz.web import (
    STATUS_BAD_REQUEST,
    STATUS_FORBIDDEN,
    STATUS_INTERNAL_SERVER_ERROR,
    STATUS_UNAUTHORIZED,
    HttpResponse,
    www_authenticate,
)

CHALLENGE_ON_API_FAILURE = 'Bearer error="server_error",error_description="Introspection API call failed."'

_ERROR_STATUSES: dict[str, int] = {
    IntrospectionAction.INTERNAL_SERVER_ERROR: STATUS_INTERNAL_SERVER_ERROR,
    IntrospectionAction.BAD_REQUEST: STATUS_BAD_REQUEST,
    IntrospectionAction.UNAUTHORIZED: STATUS_UNAUTHORIZED,
    IntrospectionAction.FORBIDDEN: STATUS_FORBIDDEN,
}


class AccessTokenValidator:
    """
    Validates access tokens presented to a protected resource (RFC 6750).

    `validate()` never raises for an invalid token or a failed API call: it records the
    outcome in the attributes below, which are reset on every call.

    Attributes:
        is_valid (bool): Result of the last validation.
        introspection_result (IntrospectionResponse | None): Response of the introspection API, if it was reached.
        introspection_error (AuthleteApiError | None): The failure of the introspection API call, if any.
        error_response (HttpResponse | None): A ready-made Bearer challenge to return when the token is invalid.
    """

    def __init__(self, api: AuthleteApi) -> None:
        self.api = api
        self.is_valid = False
        self.introspection_result: IntrospectionResponse | None = None
        self.introspection_error: AuthleteApiError | None = None
        self.error_response: HttpResponse | None = None

    async def validate(
        self,
        access_token: str | None,
        required_scopes: list[str] | None = None,
        required_subject: str | None = None,
    ) -> bool:
        """
        Validates an access token through the Authlete introspection API.

        Args:
            access_token: The access token to validate.
            required_scopes: Scopes the access token must cover.
            required_subject: Subject the access token must be bound to.

        Returns:
            bool: True if the access token is valid.
        """
        self.is_valid = False
        self.introspection_result = None
        self.introspection_error = None
        self.error_response = None

        with tracer.start_as_current_span("validate_access_token") as span:
            request = IntrospectionRequest(token=access_token, scopes=required_scopes, subject=required_subject)
            try:
                result = await self.api.introspection(request)
            except AuthleteApiError as e:
                logger.error(f"Introspection API call failed: {e.message}")
                span.record_exception(e)
                self.introspection_error = e
                self.error_response = www_authenticate(STATUS_INTERNAL_SERVER_ERROR, CHALLENGE_ON_API_FAILURE)
                return False

            self.introspection_result = result
            span.set_attribute("authz.action", str(result.action))

            if result.action == IntrospectionAction.OK:
                self.is_valid = True
                return True

            status = _ERROR_STATUSES.get(result.action, STATUS_INTERNAL_SERVER_ERROR)
            logger.info(f"Access token rejected by the introspection API: {result.action}")
            self.error_response = www_authenticate(status, result.response_content)
            return False
