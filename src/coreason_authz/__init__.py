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
Authorization server endpoint handlers backed by the Authlete decision API.
"""

__version__ = "0.1.0"
__author__ = "Gowtham A Rao"
__email__ = "gowtham.rao@coreason.ai"

from .access_token_validator import AccessTokenValidator
from .api import AuthleteApi
from .client import AuthleteApiClient
from .config import AuthzConfig
from .exceptions import AuthleteApiError, ConfigurationError, CoreasonAuthzError, WebApplicationError
from .factory import AuthleteApiFactory
from .web import HttpResponse

__all__ = [
    "AccessTokenValidator",
    "AuthleteApi",
    "AuthleteApiClient",
    "AuthleteApiError",
    "AuthleteApiFactory",
    "AuthzConfig",
    "ConfigurationError",
    "CoreasonAuthzError",
    "HttpResponse",
    "WebApplicationError",
]
