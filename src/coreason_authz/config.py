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
Configuration for the coreason-authz package.
"""

import json
from pathlib import Path
from typing import Any
from urllib.parse import urlparse

from pydantic import Field, SecretStr, ValidationError, ValidationInfo, field_validator
from pydantic.alias_generators import to_snake
from pydantic_settings import BaseSettings, SettingsConfigDict

from coreason_authz.exceptions import ConfigurationError

DEFAULT_BASE_URL = "https://api.authlete.com/api"


class AuthzConfig(BaseSettings):
    """
    Connection settings for the Authlete API.

    Attributes:
        base_url (str): Base URL of the Authlete API, without a trailing slash.
        service_owner_api_key (str): API key used for service and client management calls.
        service_owner_api_secret (SecretStr): API secret paired with `service_owner_api_key`.
        service_api_key (str): API key used for end-user facing calls (authorization, token, ...).
        service_api_secret (SecretStr): API secret paired with `service_api_key`.
        http_timeout (float): Timeout in seconds applied to every Authlete API call.
        unsafe_local_dev (bool): Allows a plain http:// base URL for local testing.
    """

    model_config = SettingsConfigDict(
        env_prefix="COREASON_AUTHZ_",
        case_sensitive=False,
    )

    unsafe_local_dev: bool = False
    base_url: str = DEFAULT_BASE_URL
    service_owner_api_key: str = ""
    service_owner_api_secret: SecretStr = SecretStr("")
    service_api_key: str = ""
    service_api_secret: SecretStr = SecretStr("")
    http_timeout: float = Field(default=10.0, gt=0, description="Timeout in seconds for Authlete API calls.")

    @field_validator("base_url", mode="after")
    @classmethod
    def validate_base_url(cls, v: str, info: ValidationInfo) -> str:
        """
        Ensures the base URL is absolute, uses HTTPS outside local dev, and has no trailing slash.
        """
        v = v.strip()
        parsed = urlparse(v)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError(f"Malformed base URL: '{v}'")

        if parsed.scheme == "http" and not info.data.get("unsafe_local_dev", False):
            raise ValueError("HTTPS is required for production. Set 'unsafe_local_dev=True' only for local testing.")

        return v.rstrip("/")

    @classmethod
    def from_json_file(cls, path: str | Path) -> "AuthzConfig":
        """
        Loads the configuration from a JSON property file.

        Keys may be written in camelCase (`baseUrl`, `serviceApiKey`, ...) or snake_case.
        Environment variables are not consulted for keys present in the file.

        Args:
            path: Path to the JSON file.

        Returns:
            AuthzConfig: The loaded configuration.

        Raises:
            ConfigurationError: If the file cannot be read, is not a JSON object, or holds invalid values.
        """
        try:
            raw = Path(path).read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigurationError(f"Failed to read {path}") from e

        try:
            props = json.loads(raw)
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Failed to parse the contents of {path} as JSON.") from e

        if not isinstance(props, dict):
            raise ConfigurationError(f"The contents of {path} must be a JSON object.")

        values: dict[str, Any] = {to_snake(key): value for key, value in props.items()}
        if "timeout" in values:
            values.setdefault("http_timeout", values.pop("timeout"))

        try:
            return cls(**values)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid configuration in {path}: {e}") from e
