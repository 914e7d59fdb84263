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
Handler for the introspection endpoint (RFC 7662).
"""

from collections.abc import Mapping

from coreason_authz.handlers.base import BaseHandler
from coreason_authz.models import StandardIntrospectionAction, StandardIntrospectionRequest
from coreason_authz.web import HttpResponse, bad_request, internal_server_error, normalize_parameters, ok_json

INTROSPECTION_STANDARD_PATH = "/api/auth/introspection/standard"

IntrospectionParameters = str | Mapping[str, str] | None


class IntrospectionRequestHandler(BaseHandler[IntrospectionParameters]):
    """
    Handles requests to the introspection endpoint.

    Authenticating the protected resource that calls the endpoint is left to the host application.
    """

    async def _handle(self, params: IntrospectionParameters) -> HttpResponse:
        request = StandardIntrospectionRequest(parameters=normalize_parameters(params))
        response = await self._call_api(INTROSPECTION_STANDARD_PATH, self.api.standard_introspection(request))
        self._on_action(INTROSPECTION_STANDARD_PATH, response.action)

        match response.action:
            case StandardIntrospectionAction.INTERNAL_SERVER_ERROR:
                return internal_server_error(response.response_content)
            case StandardIntrospectionAction.BAD_REQUEST:
                return bad_request(response.response_content)
            case StandardIntrospectionAction.OK:
                return ok_json(response.response_content)
            case _:
                raise self._on_unknown_action(INTROSPECTION_STANDARD_PATH, response.action)
