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
Handler for the pushed authorization request endpoint (RFC 9126).
"""

from coreason_authz.handlers.base import BaseHandler, ClientRequestParams
from coreason_authz.models import PushedAuthReqAction, PushedAuthReqRequest
from coreason_authz.web import (
    HttpResponse,
    bad_request,
    created,
    forbidden,
    internal_server_error,
    payload_too_large,
    unauthorized,
)

PUSHED_AUTH_REQ_PATH = "/api/pushed_auth_req"

CHALLENGE = 'Basic realm="pushed_auth_req"'


class PushedAuthReqHandler(BaseHandler[ClientRequestParams]):
    """Handles requests to the pushed authorization request endpoint."""

    async def _handle(self, params: ClientRequestParams) -> HttpResponse:
        request = PushedAuthReqRequest(**params.to_request_fields())
        response = await self._call_api(PUSHED_AUTH_REQ_PATH, self.api.pushed_authorization_request(request))
        self._on_action(PUSHED_AUTH_REQ_PATH, response.action)

        match response.action:
            case PushedAuthReqAction.CREATED:
                return created(response.response_content)
            case PushedAuthReqAction.BAD_REQUEST:
                return bad_request(response.response_content)
            case PushedAuthReqAction.UNAUTHORIZED:
                return unauthorized(CHALLENGE, response.response_content)
            case PushedAuthReqAction.FORBIDDEN:
                return forbidden(response.response_content)
            case PushedAuthReqAction.PAYLOAD_TOO_LARGE:
                return payload_too_large(response.response_content)
            case PushedAuthReqAction.INTERNAL_SERVER_ERROR:
                return internal_server_error(response.response_content)
            case _:
                raise self._on_unknown_action(PUSHED_AUTH_REQ_PATH, response.action)
