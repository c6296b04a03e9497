"""
Response normalization.

Resources are passed through as decoded JSON. The only reshaping the SDK
does lives here:

- the ``forms`` collection holds both forms and hosted landing pages and
  is split on the ``type`` field, dropping archived entries
- subscription forms are reduced to an ``id -> form_id`` mapping
- subscriber lookups by email pick the first matching record
- v4 list responses carry a ``pagination`` object, parsed into
  :class:`PaginationInfo`
"""

import logging
from typing import Any
from typing import Literal

from pydantic import BaseModel

from convertkit_sdk.types import Payload

logger = logging.getLogger("convertkit_sdk.normalizers")

FormKind = Literal["forms", "landing_pages"]

HOSTED = "hosted"


class PaginationInfo(BaseModel):
    """Cursor metadata returned with every v4 list response."""

    has_previous_page: bool = False
    has_next_page: bool = False
    start_cursor: str | None = None
    end_cursor: str | None = None
    per_page: int | None = None
    total_count: int | None = None

    @classmethod
    def from_payload(cls, payload: Payload) -> "PaginationInfo | None":
        """Return the pagination block of ``payload``, or None if it has none."""
        if not isinstance(payload, dict):
            return None
        pagination = payload.get("pagination")
        if not isinstance(pagination, dict):
            return None
        return cls.model_validate(pagination)


def is_archived(entry: Any) -> bool:
    return isinstance(entry, dict) and bool(entry.get("archived"))


def collection(payload: Payload, key: str) -> list[Any]:
    """Return ``payload[key]`` as a list, or an empty list when absent."""
    if not isinstance(payload, dict):
        return []
    items = payload.get(key)
    if not isinstance(items, list):
        logger.debug(f"No '{key}' collection in response")
        return []
    return items


def split_forms(payload: Payload, kind: FormKind) -> list[dict]:
    """
    Pick forms or landing pages out of a ``forms`` response.

    Entries with ``type == "hosted"`` are landing pages, every other type is
    a form. Archived entries are excluded from both.

    Args:
        payload: Decoded ``GET forms`` response.
        kind: ``"forms"`` or ``"landing_pages"``.

    Returns:
        list[dict]: Matching entries in API order.
    """
    want_hosted = kind == "landing_pages"
    result = []
    for entry in collection(payload, "forms"):
        if not isinstance(entry, dict) or is_archived(entry):
            continue
        if (entry.get("type") == HOSTED) == want_hosted:
            result.append(entry)
    return result


def subscription_form_mapping(payload: Payload) -> dict[Any, Any]:
    """
    Map subscription form ids to form ids.

    Archived mappings and entries without an ``id`` are excluded.
    """
    if isinstance(payload, dict):
        entries = collection(payload, "subscription_forms")
    elif isinstance(payload, list):
        entries = payload
    else:
        entries = []

    mapping = {}
    for entry in entries:
        if not isinstance(entry, dict) or is_archived(entry):
            continue
        if entry.get("id") is None:
            continue
        mapping[entry["id"]] = entry.get("form_id")
    return mapping


def find_subscriber_id(subscribers: list[Any], email_address: str) -> int | None:
    """
    Return the id of the first subscriber whose email matches.

    Matching ignores case, as email addresses are stored lowercased by the API.
    """
    target = email_address.strip().casefold()
    for subscriber in subscribers:
        if not isinstance(subscriber, dict):
            continue
        candidate = subscriber.get("email_address") or ""
        if candidate.casefold() == target:
            return subscriber.get("id")
    return None


def first_subscriber_id(payload: Payload) -> int | None:
    """Return the id of the first entry of a ``subscribers`` listing, if any."""
    subscribers = collection(payload, "subscribers")
    if not subscribers or not isinstance(subscribers[0], dict):
        return None
    return subscribers[0].get("id")
