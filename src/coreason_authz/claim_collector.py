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
Collects claim values of an end-user with language-tag negotiation.
"""

import json
from collections.abc import Iterable
from typing import Any

from coreason_authz.spi import UserClaimProvider
from coreason_authz.utils.logger import logger


def normalize_claim_locales(claim_locales: Iterable[str] | None) -> list[str] | None:
    """
    Drops empty entries and case-insensitive duplicates, keeping the first casing seen.

    Args:
        claim_locales: Locales in preference order, e.g. the `claims_locales` request parameter.

    Returns:
        list[str] | None: The normalized locales, or None if nothing remains.
    """
    if not claim_locales:
        return None

    seen: set[str] = set()
    normalized: list[str] = []
    for locale in claim_locales:
        if not locale:
            continue
        key = locale.lower()
        if key in seen:
            continue
        seen.add(key)
        normalized.append(locale)

    return normalized or None


def serialize_claims(claims: dict[str, Any] | None) -> str | None:
    """
    Serializes collected claims for the Authlete API.

    Claims that cannot be serialized are omitted (with a warning) instead of failing the request.
    """
    if not claims:
        return None
    try:
        return json.dumps(claims, ensure_ascii=False)
    except (TypeError, ValueError) as e:
        logger.warning(f"Collected claims could not be serialized and are omitted: {e}")
        return None


class ClaimCollector:
    """
    Resolves requested claim names to values through a `UserClaimProvider`.

    A claim name may carry a language tag (`name#ja`). A tagged claim is looked up with
    exactly that tag. An untagged claim is looked up with each of the claim locales in
    order, falling back to a lookup without a locale.

    Attributes:
        claim_provider (UserClaimProvider): Source of claim values.
        subject (str): The end-user whose claims are collected.
        claim_names (list[str] | None): The requested claim names.
        claim_locales (list[str] | None): The normalized claim locales.
    """

    def __init__(
        self,
        claim_provider: UserClaimProvider,
        subject: str,
        claim_names: list[str] | None,
        claim_locales: list[str] | None = None,
    ) -> None:
        self.claim_provider = claim_provider
        self.subject = subject
        self.claim_names = claim_names
        self.claim_locales = normalize_claim_locales(claim_locales)

    def collect(self) -> dict[str, Any] | None:
        """
        Collects the values of the requested claims.

        Returns:
            dict[str, Any] | None: Claim values keyed by claim name (with its tag, if any).
            Claims without a value are left out; None if no claim has a value.
        """
        if not self.claim_names:
            return None

        claims: dict[str, Any] = {}
        for claim_name in self.claim_names:
            if not claim_name:
                continue

            name, sep, tag = claim_name.partition("#")
            if not name:
                continue

            value = self._get_claim_value(name, tag or None)
            if value is None:
                continue

            claims[claim_name if sep else name] = value

        return claims or None

    def _get_claim_value(self, name: str, tag: str | None) -> Any:
        if tag:
            return self.claim_provider.get_user_claim_value(self.subject, name, tag)

        if not self.claim_locales:
            return self.claim_provider.get_user_claim_value(self.subject, name)

        for locale in self.claim_locales:
            value = self.claim_provider.get_user_claim_value(self.subject, name, locale)
            if value is not None:
                return value

        return self.claim_provider.get_user_claim_value(self.subject, name)
