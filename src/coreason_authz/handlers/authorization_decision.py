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
Handler for the end-user's decision on the consent page.
"""

from pydantic import BaseModel, ConfigDict

from coreason_authz.api import AuthleteApi
from coreason_authz.handlers.authorization import AuthorizationRequestBaseHandler
from coreason_authz.models import AuthorizationFailReason, AuthorizationResponse
from coreason_authz.spi import AuthorizationDecisionHandlerSpi
from coreason_authz.utils.logger import logger
from coreason_authz.web import HttpResponse


class AuthorizationDecisionParams(BaseModel):
    """
    Data carried from the authorization request to the decision step.

    Attributes:
        ticket (str): The ticket issued by the `/auth/authorization` API.
        claim_names (list[str] | None): Claims requested for the ID token.
        claim_locales (list[str] | None): The `claims_locales` of the request.
    """

    model_config = ConfigDict(frozen=True)

    ticket: str
    claim_names: list[str] | None = None
    claim_locales: list[str] | None = None

    @classmethod
    def from_response(cls, response: AuthorizationResponse) -> "AuthorizationDecisionParams":
        return cls(
            ticket=response.ticket or "",
            claim_names=response.claims,
            claim_locales=response.claims_locales,
        )


class AuthorizationDecisionHandler(AuthorizationRequestBaseHandler[AuthorizationDecisionParams]):
    """
    Issues or denies the authorization once the end-user has decided.

    The end-user's consent and identity are read from the SPI: a denial fails with
    `DENIED`, a missing subject with `NOT_AUTHENTICATED`; otherwise claims are collected
    and the authorization response is issued.

    Attributes:
        spi (AuthorizationDecisionHandlerSpi): The host application's SPI.
    """

    Params = AuthorizationDecisionParams

    def __init__(self, api: AuthleteApi, spi: AuthorizationDecisionHandlerSpi) -> None:
        super().__init__(api)
        self.spi = spi

    async def _handle(self, params: AuthorizationDecisionParams) -> HttpResponse:
        if not self.spi.is_client_authorized():
            logger.info("The end-user denied the authorization request")
            return await self._authorization_fail(params.ticket, AuthorizationFailReason.DENIED)

        subject = self.spi.get_user_subject()
        if not subject:
            logger.warning("Authorization decision without an authenticated end-user")
            return await self._authorization_fail(params.ticket, AuthorizationFailReason.NOT_AUTHENTICATED)

        return await self._issue(
            self.spi,
            params.ticket,
            subject,
            self.spi.get_user_authenticated_at(),
            params.claim_names,
            params.claim_locales,
            acr=self.spi.get_acr(),
        )
