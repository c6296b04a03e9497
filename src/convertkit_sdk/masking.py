"""
Redaction helpers applied before anything is logged.

Secrets keep their last 4 characters, email addresses keep the first
character of the local part and the full domain.
"""

import re
from collections.abc import Mapping
from typing import Any

MASK_CHAR = "*"
VISIBLE_SECRET_CHARS = 4

SECRET_KEYS = frozenset(
    {
        "api_key",
        "api_secret",
        "access_token",
        "refresh_token",
        "client_secret",
        "code",
        "authorization",
    }
)
EMAIL_KEYS = frozenset({"email", "email_address"})

_EMAIL_RE = re.compile(r"([A-Za-z0-9._%+-]+)@([A-Za-z0-9.-]+\.[A-Za-z]{2,})")


def mask_secret(value: str) -> str:
    """Redact all but the last 4 characters of ``value``."""
    if len(value) <= VISIBLE_SECRET_CHARS:
        return MASK_CHAR * len(value)
    hidden = len(value) - VISIBLE_SECRET_CHARS
    return MASK_CHAR * hidden + value[hidden:]


def mask_email(value: str) -> str:
    """Partially redact the local part: ``jane@example.com`` -> ``j***@example.com``."""
    local, sep, domain = value.partition("@")
    if not sep:
        return mask_secret(value)
    if len(local) <= 1:
        return f"{MASK_CHAR}@{domain}"
    return f"{local[0]}{MASK_CHAR * (len(local) - 1)}@{domain}"


def mask_emails_in_text(text: str) -> str:
    """Redact every email address found in free text."""
    return _EMAIL_RE.sub(lambda match: mask_email(match.group(0)), text)


def _mask_authorization(value: str) -> str:
    scheme, sep, token = value.partition(" ")
    if sep:
        return f"{scheme} {mask_secret(token)}"
    return mask_secret(value)


def mask_value(key: str, value: Any) -> Any:
    """Mask ``value`` according to ``key``; recurse into containers."""
    lowered = key.lower()
    if isinstance(value, str):
        if lowered == "authorization":
            return _mask_authorization(value)
        if lowered in SECRET_KEYS:
            return mask_secret(value)
        if lowered in EMAIL_KEYS:
            return mask_email(value)
        return mask_emails_in_text(value)
    return mask_data(value)


def mask_data(data: Any) -> Any:
    """
    Return a masked copy of ``data``.

    Mappings are masked key by key, sequences element by element, free text
    has its email addresses redacted. The input is never modified.
    """
    if isinstance(data, Mapping):
        return {key: mask_value(str(key), value) for key, value in data.items()}
    if isinstance(data, (list, tuple)):
        return [mask_data(item) for item in data]
    if isinstance(data, str):
        return mask_emails_in_text(data)
    return data
