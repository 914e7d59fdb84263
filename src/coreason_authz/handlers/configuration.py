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
Handlers for the discovery document and the JWK Set document of the service.
"""

from coreason_authz.handlers.base import BaseHandler
from coreason_authz.web import HttpResponse, no_content, ok_json

SERVICE_CONFIGURATION_PATH = "/api/service/configuration"
SERVICE_JWKS_GET_PATH = "/api/service/jwks/get"


class ConfigurationRequestHandler(BaseHandler[bool]):
    """
    Serves `/.well-known/openid-configuration` (OpenID Connect Discovery 1.0).

    `handle()` takes whether the JSON should be pretty-printed.
    """

    async def _handle(self, params: bool) -> HttpResponse:
        document = await self._call_api(SERVICE_CONFIGURATION_PATH, self.api.get_service_configuration(params))
        return ok_json(document)


class JwksRequestHandler(BaseHandler[bool]):
    """
    Serves the JWK Set document of the service (the `jwks_uri` of the discovery document).

    Responds with `204 No Content` when the service has no JWK Set.
    """

    async def _handle(self, params: bool) -> HttpResponse:
        document = await self._call_api(SERVICE_JWKS_GET_PATH, self.api.get_service_jwks(params, False))
        if not document:
            return no_content()
        return ok_json(document)
