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
View model of the page asking the end-user to authorize a client application.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict

from coreason_authz.models import AuthorizationResponse, AuthzDetails, Scope


class AuthorizationPageModel(BaseModel):
    """
    Data a consent page typically displays.

    Attributes:
        service_name (str | None): Name of the authorization server.
        client_name (str | None): Name of the client application.
        description (str | None): Description of the client application.
        logo_uri (str | None): Logo of the client application.
        client_uri (str | None): Home page of the client application.
        policy_uri (str | None): Privacy policy of the client application.
        tos_uri (str | None): Terms of service of the client application.
        scopes (list[Scope] | None): The requested scopes.
        login_id (str | None): Login ID to prefill: the requested subject, else the login hint.
        authorization_details (AuthzDetails | None): The `authorization_details` of the request.
        user (Any): The currently logged-in user, if any.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    service_name: str | None = None
    client_name: str | None = None
    description: str | None = None
    logo_uri: str | None = None
    client_uri: str | None = None
    policy_uri: str | None = None
    tos_uri: str | None = None
    scopes: list[Scope] | None = None
    login_id: str | None = None
    authorization_details: AuthzDetails | None = None
    user: Any = None

    @classmethod
    def from_response(cls, response: AuthorizationResponse, user: Any = None) -> "AuthorizationPageModel":
        client = response.client
        return cls(
            service_name=response.service.service_name if response.service else None,
            client_name=client.client_name if client else None,
            description=client.description if client else None,
            logo_uri=client.logo_uri if client else None,
            client_uri=client.client_uri if client else None,
            policy_uri=client.policy_uri if client else None,
            tos_uri=client.tos_uri if client else None,
            scopes=response.scopes,
            login_id=response.subject or response.login_hint,
            authorization_details=response.authorization_details,
            user=user,
        )
