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
Handler for the revocation endpoint (RFC 7009).
"""

from coreason_authz.handlers.base import BaseHandler, ClientRequestParams
from coreason_authz.models import RevocationAction, RevocationRequest
from coreason_authz.web import HttpResponse, bad_request, internal_server_error, ok_javascript, unauthorized

REVOCATION_PATH = "/api/auth/revocation"

CHALLENGE = 'Basic realm="revocation"'


class RevocationRequestHandler(BaseHandler[ClientRequestParams]):
    """Handles requests to the revocation endpoint."""

    async def _handle(self, params: ClientRequestParams) -> HttpResponse:
        request = RevocationRequest(**params.to_request_fields())
        response = await self._call_api(REVOCATION_PATH, self.api.revocation(request))
        self._on_action(REVOCATION_PATH, response.action)

        match response.action:
            case RevocationAction.INVALID_CLIENT:
                return unauthorized(CHALLENGE, response.response_content)
            case RevocationAction.INTERNAL_SERVER_ERROR:
                return internal_server_error(response.response_content)
            case RevocationAction.BAD_REQUEST:
                return bad_request(response.response_content)
            case RevocationAction.OK:
                # The body may be a JSONP callback, hence the JavaScript content type.
                return ok_javascript(response.response_content or "")
            case _:
                raise self._on_unknown_action(REVOCATION_PATH, response.action)
