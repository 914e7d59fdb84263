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
Factory for the default `AuthleteApi` instance.
"""

import anyio

from coreason_authz.api import AuthleteApi
from coreason_authz.client import AuthleteApiClient
from coreason_authz.config import AuthzConfig
from coreason_authz.utils.logger import logger


class AuthleteApiFactory:
    """
    Creates `AuthleteApi` instances and memoizes the default one.

    The default instance is built from `AuthzConfig()` (environment variables) on first use.
    Concurrent first calls share a single initialization; a failed initialization is not
    cached, so a later call retries.
    """

    _default: AuthleteApi | None = None
    _lock: anyio.Lock | None = None

    @classmethod
    def create(cls, config: AuthzConfig) -> AuthleteApi:
        """
        Creates a new API client for the given configuration.

        Args:
            config: The connection settings.

        Returns:
            AuthleteApi: A new client. The caller owns it and should close it.
        """
        return AuthleteApiClient(config)

    @classmethod
    async def get_default(cls) -> AuthleteApi:
        """
        Returns the shared default API client, creating it if needed.

        Returns:
            AuthleteApi: The default client.

        Raises:
            ConfigurationError | pydantic.ValidationError: If the environment holds an invalid configuration.
        """
        if cls._default is not None:
            return cls._default

        if cls._lock is None:
            cls._lock = anyio.Lock()

        async with cls._lock:
            # Double check inside lock
            if cls._default is None:
                config = AuthzConfig()
                cls._default = cls.create(config)
                logger.info(f"Default Authlete API client created for {config.base_url}")
            return cls._default

    @classmethod
    async def reset(cls) -> None:
        """
        Closes and forgets the default API client.

        Waits for an initialization in progress; the lock itself is kept.
        """
        if cls._lock is None:
            cls._lock = anyio.Lock()

        async with cls._lock:
            default, cls._default = cls._default, None
        if isinstance(default, AuthleteApiClient):
            await default.aclose()
