"""Credential lookup tolerant of key naming differences between brokers."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from ..exceptions import CredentialLookupError


def get_alternative(credentials: Mapping[str, Any], *alternatives: str) -> str:
    """Return the value of the first key in *alternatives* present in *credentials*.

    Returns an empty string when none are present. Raises CredentialLookupError
    when the first present key holds something other than a string.
    """
    for key in alternatives:
        if key in credentials:
            value = credentials[key]
            if not isinstance(value, str):
                raise CredentialLookupError(key, value)
            return value
    return ""
