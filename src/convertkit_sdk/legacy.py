"""
ConvertKit API v3 client (API key / API secret).

The legacy generation authenticates by adding ``api_key`` or ``api_secret``
to each parameter bag and paginates with page numbers. Two behaviors only
exist here:

- forms and landing pages come from the same ``forms`` collection and are
  split client-side
- looking a subscriber up by email walks the subscriber pages until a match

Failures raise typed errors; "subscriber not found" is returned as ``None``.
Listings are not cached, every call fetches fresh data.
"""

import logging
from collections.abc import Mapping
from typing import Any

from pydantic import EmailStr
from pydantic import TypeAdapter
from pydantic import ValidationError

from convertkit_sdk.auth import AuthError
from convertkit_sdk.base_client import JSON_CONTENT_TYPE
from convertkit_sdk.base_client import BaseClient
from convertkit_sdk.exceptions import InvalidArgumentError
from convertkit_sdk.normalizers import collection
from convertkit_sdk.normalizers import find_subscriber_id
from convertkit_sdk.normalizers import split_forms
from convertkit_sdk.normalizers import subscription_form_mapping
from convertkit_sdk.types import Params
from convertkit_sdk.types import Payload

logger = logging.getLogger("convertkit_sdk.legacy")

SUPPORTED_RESOURCES = ("forms", "landing_pages", "subscription_forms", "tags")

_email_adapter = TypeAdapter(EmailStr)


class LegacyConvertKitClient(BaseClient):
    """
    Async client for the ConvertKit API v3.

    Args:
        settings (ConvertKitSettings): SDK configuration with api_key and api_secret.
        transport_name (str | None): Transport backend ('httpx', 'aiohttp', 'requests').
        middlewares (list[Middleware] | None): Optional request/response hooks.
        transport (BaseTransport | None): Ready-made transport instance.

    Example:
        settings = ConvertKitSettings(api_key="key", api_secret="secret")
        async with LegacyConvertKitClient(settings) as client:
            forms = await client.get_forms()
            subscriber_id = await client.get_subscriber_id("jane@example.com")
    """

    api_version = "v3"

    def get_request_headers(
        self, content_type: str = JSON_CONTENT_TYPE, auth: bool = True
    ) -> dict[str, str]:
        # Credentials travel in the parameter bag, not in headers
        return {
            "Accept": "application/json",
            "Content-Type": content_type,
            "User-Agent": self.user_agent,
        }

    @property
    def api_key(self) -> str:
        if not self.settings.api_key:
            raise AuthError("API key is missing")
        return self.settings.api_key

    @property
    def api_secret(self) -> str:
        if not self.settings.api_secret:
            raise AuthError("API secret is missing")
        return self.settings.api_secret

    async def get_account(self) -> Payload:
        return await self.get("account", {"api_secret": self.api_secret})

    async def get_forms(self) -> list[dict]:
        """Active, non-hosted forms."""
        return await self.get_resources("forms")

    async def get_landing_pages(self) -> list[dict]:
        """Active landing pages (hosted forms)."""
        return await self.get_resources("landing_pages")

    async def get_sequences(self) -> Payload:
        return await self.get("sequences", {"api_key": self.api_key})

    async def get_sequence_subscriptions(
        self, sequence_id: int, sort_order: str = "asc"
    ) -> Payload:
        return await self.get(
            f"sequences/{sequence_id}/subscriptions",
            {"api_secret": self.api_secret, "sort_order": sort_order},
        )

    async def add_subscriber_to_sequence(self, sequence_id: int, email: str) -> Payload:
        return await self.post(
            f"courses/{sequence_id}/subscribe",
            {"api_key": self.api_key, "email": email},
        )

    async def add_tag(self, tag_id: int, options: Mapping[str, Any]) -> Payload:
        """
        Tag a subscriber.

        Args:
            tag_id: Tag ID.
            options: Subscriber data, at least ``email``; may include
                ``first_name``, ``fields`` and ``tags``.

        Raises:
            InvalidArgumentError: On a non-integer tag ID or non-mapping options.
        """
        _require_int(tag_id, "tag_id")
        _require_mapping(options, "options")
        return await self.post(
            f"tags/{tag_id}/subscribe", {**options, "api_key": self.api_key}
        )

    async def get_resources(self, resource: str) -> list[dict] | dict[Any, Any]:
        """
        Fetch and normalize a resource listing.

        Args:
            resource: ``forms``, ``landing_pages``, ``subscription_forms`` or ``tags``.

        Returns:
            list[dict] | dict: A list of records, or for ``subscription_forms``
            a mapping of subscription form ID to form ID. Archived records are
            excluded. A response without the expected collection yields an empty
            result.

        Raises:
            InvalidArgumentError: For an unsupported resource; no request is sent.
        """
        if not isinstance(resource, str) or resource not in SUPPORTED_RESOURCES:
            raise InvalidArgumentError(
                f"An unsupported resource was specified: {resource!r}. "
                f"Supported: {', '.join(SUPPORTED_RESOURCES)}"
            )

        # Landing pages are included in the forms endpoint
        endpoint = "forms" if resource == "landing_pages" else resource
        payload = await self.get(endpoint, {"api_key": self.api_key})

        if resource in ("forms", "landing_pages"):
            result = split_forms(payload, resource)
        elif resource == "subscription_forms":
            result = subscription_form_mapping(payload)
        else:
            result = collection(payload, "tags")

        logger.debug(f"{resource}: {len(result)} entries")
        return result

    async def form_subscribe(self, form_id: int, options: Mapping[str, Any]) -> Payload:
        """
        Subscribe an email address to a form.

        Args:
            form_id: Form ID.
            options: Subscriber data, at least ``email``.
        """
        _require_int(form_id, "form_id")
        _require_mapping(options, "options")
        return await self.post(
            f"forms/{form_id}/subscribe", {**options, "api_key": self.api_key}
        )

    async def form_unsubscribe(self, options: Mapping[str, Any]) -> Payload:
        """Unsubscribe an email address (``options["email"]``) from all mailings."""
        _require_mapping(options, "options")
        return await self.put("unsubscribe", {**options, "api_secret": self.api_secret})

    async def get_subscriber_id(
        self, email_address: str, max_pages: int | None = None
    ) -> int | None:
        """
        Find a subscriber's ID by email address.

        Pages of the subscriber listing are requested one after another, in the
        API's order, until a subscriber with this email is found or the pages
        run out. The first match wins.

        Args:
            email_address: Email to look for.
            max_pages: Stop after this many pages. None scans every page.

        Returns:
            int | None: The subscriber ID, or None when not found.

        Raises:
            InvalidArgumentError: On a malformed email address; no request is sent.
        """
        _require_email(email_address)

        params: Params = {
            "api_secret": self.api_secret,
            "status": "all",
            "email_address": email_address,
        }
        page = 1
        payload = await self.get("subscribers", params)

        while True:
            subscriber_id = find_subscriber_id(
                collection(payload, "subscribers"), email_address
            )
            if subscriber_id is not None:
                return subscriber_id

            total_pages = _total_pages(payload)
            if page >= total_pages:
                break
            if max_pages is not None and page >= max_pages:
                logger.warning(
                    f"Stopped subscriber lookup after {page} of {total_pages} pages"
                )
                break

            page += 1
            logger.debug(f"Subscriber not on page {page - 1}, requesting page {page}")
            payload = await self.get("subscribers", {**params, "page": page})

        logger.info("Subscriber not found")
        return None

    async def get_subscriber(self, subscriber_id: int) -> Payload:
        _require_positive_int(subscriber_id, "subscriber_id")
        return await self.get(
            f"subscribers/{subscriber_id}", {"api_secret": self.api_secret}
        )

    async def get_subscriber_tags(self, subscriber_id: int) -> Payload:
        _require_positive_int(subscriber_id, "subscriber_id")
        return await self.get(
            f"subscribers/{subscriber_id}/tags", {"api_key": self.api_key}
        )

    async def list_purchases(self, options: Mapping[str, Any] | None = None) -> Payload:
        """List purchases. ``options`` may hold ``page`` and ``sort_order``."""
        _require_mapping(options or {}, "options")
        return await self.get(
            "purchases", {**(options or {}), "api_secret": self.api_secret}
        )

    async def create_purchase(self, options: Mapping[str, Any]) -> Payload:
        """Record a purchase. ``options`` holds the ``purchase`` object."""
        _require_mapping(options, "options")
        return await self.post("purchases", {**options, "api_secret": self.api_secret})


def _total_pages(payload: Payload) -> int:
    if not isinstance(payload, dict):
        return 1
    try:
        return int(payload.get("total_pages") or 1)
    except (TypeError, ValueError):
        return 1


def _require_int(value: Any, name: str) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidArgumentError(f"{name} must be an integer, got {value!r}")


def _require_positive_int(value: Any, name: str) -> None:
    _require_int(value, name)
    if value < 1:
        raise InvalidArgumentError(f"{name} must be a positive integer, got {value!r}")


def _require_mapping(value: Any, name: str) -> None:
    if not isinstance(value, Mapping):
        raise InvalidArgumentError(f"{name} must be a mapping, got {type(value).__name__}")


def _require_email(value: Any) -> None:
    if not isinstance(value, str):
        raise InvalidArgumentError("email_address must be a string")
    try:
        _email_adapter.validate_python(value)
    except ValidationError as err:
        logger.warning("Rejected malformed email address")
        raise InvalidArgumentError("Invalid email address") from err
