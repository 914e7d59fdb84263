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
Endpoint handlers of an OAuth 2.0 / OpenID Connect authorization server.
"""

from .authorization import AuthorizationRequestErrorHandler, AuthorizationRequestHandler, NoInteractionHandler
from .authorization_decision import AuthorizationDecisionHandler, AuthorizationDecisionParams
from .backchannel import (
    BackchannelAuthenticationCompleteHandler,
    BackchannelAuthenticationCompleteParams,
    BackchannelAuthenticationRequestHandler,
)
from .base import BaseHandler, ClientRequestParams
from .configuration import ConfigurationRequestHandler, JwksRequestHandler
from .device import (
    DeviceAuthorizationRequestHandler,
    DeviceCompleteParams,
    DeviceCompleteRequestHandler,
    DeviceVerificationHandler,
)
from .introspection import IntrospectionRequestHandler
from .pushed_auth_req import PushedAuthReqHandler
from .revocation import RevocationRequestHandler
from .token import TokenRequestHandler
from .userinfo import UserInfoParams, UserInfoRequestHandler

__all__ = [
    "AuthorizationDecisionHandler",
    "AuthorizationDecisionParams",
    "AuthorizationRequestErrorHandler",
    "AuthorizationRequestHandler",
    "BackchannelAuthenticationCompleteHandler",
    "BackchannelAuthenticationCompleteParams",
    "BackchannelAuthenticationRequestHandler",
    "BaseHandler",
    "ClientRequestParams",
    "ConfigurationRequestHandler",
    "DeviceAuthorizationRequestHandler",
    "DeviceCompleteParams",
    "DeviceCompleteRequestHandler",
    "DeviceVerificationHandler",
    "IntrospectionRequestHandler",
    "JwksRequestHandler",
    "NoInteractionHandler",
    "PushedAuthReqHandler",
    "RevocationRequestHandler",
    "TokenRequestHandler",
    "UserInfoParams",
    "UserInfoRequestHandler",
]
