"""
Async-first ConvertKit API v4 client.

This module provides the main ConvertKitClient class that handles all interactions
with the OAuth generation of the ConvertKit API. Features include:

- Async-first design with async/await for all API operations
- OAuth authorization URL, code exchange and token refresh
- Multiple HTTP transport backends (httpx, aiohttp, requests)
- Pluggable middleware system for request/response processing
- Cursor pagination with a shared parameter builder
- Typed errors for 4xx, 5xx and undecodable responses

Example usage:
    from convertkit_sdk import ConvertKitClient, ConvertKitSettings

    settings = ConvertKitSettings(access_token="your-token")
    async with ConvertKitClient(settings) as client:
        page = await client.get_subscribers(per_page=50)
        next_page = await client.get_subscribers(
            per_page=50, after_cursor=page["pagination"]["end_cursor"]
        )
"""

import logging
from collections.abc import Mapping
from collections.abc import Sequence
from datetime import date
from datetime import datetime
from typing import Any

from convertkit_sdk.auth import AuthManager
from convertkit_sdk.base_client import JSON_CONTENT_TYPE
from convertkit_sdk.base_client import BaseClient
from convertkit_sdk.config import ConvertKitSettings
from convertkit_sdk.exceptions import InvalidArgumentError
from convertkit_sdk.middleware import Middleware
from convertkit_sdk.normalizers import first_subscriber_id
from convertkit_sdk.params import DEFAULT_PER_PAGE
from convertkit_sdk.params import add_date_filters
from convertkit_sdk.params import build_pagination_params
from convertkit_sdk.params import format_datetime
from convertkit_sdk.params import strip_blank_values
from convertkit_sdk.transport import BaseTransport
from convertkit_sdk.types import Params
from convertkit_sdk.types import Payload

logger = logging.getLogger("convertkit_sdk.client")

# Webhook event name -> key holding the event parameter (None: no parameter).
WEBHOOK_EVENTS: dict[str, str | None] = {
    "subscriber.subscriber_activate": None,
    "subscriber.subscriber_unsubscribe": None,
    "subscriber.subscriber_bounce": None,
    "subscriber.subscriber_complain": None,
    "purchase.purchase_create": None,
    "subscriber.form_subscribe": "form_id",
    "subscriber.course_subscribe": "course_id",
    "subscriber.course_complete": "course_id",
    "subscriber.link_click": "initiator_value",
    "subscriber.product_purchase": "product_id",
    "subscriber.tag_add": "tag_id",
    "subscriber.tag_remove": "tag_id",
}

# Broadcast fields that only apply to public (web-published) broadcasts.
PUBLIC_ONLY_BROADCAST_FIELDS = ("published_at", "thumbnail_alt", "thumbnail_url")


class ConvertKitClient(BaseClient):
    """
    Async client for the ConvertKit API v4.

    Every list operation accepts the same pagination controls, forwarded to
    :func:`~convertkit_sdk.params.build_pagination_params`:

    - include_total_count (bool): Ask for ``pagination.total_count``.
    - after_cursor / before_cursor (str): Opaque cursors from a previous
      response's ``pagination`` block.
    - per_page (int): Page size (default 100).

    Args:
        settings (ConvertKitSettings): SDK configuration (client_id, client_secret,
            access_token, ...).
        transport_name (str | None): Transport backend ('httpx', 'aiohttp', 'requests').
        middlewares (list[Middleware] | None): Optional request/response hooks.
        transport (BaseTransport | None): Ready-made transport instance.

    Example:
        settings = ConvertKitSettings(client_id="id", client_secret="secret")
        client = ConvertKitClient(settings)

        url = client.get_oauth_url("https://example.com/callback")
        # ... user authorizes, ConvertKit redirects back with ?code=...
        await client.get_access_token(code, "https://example.com/callback")

        result = await client.add_subscriber_to_form_by_email(123, "jane@example.com")
        await client.aclose()
    """

    api_version = "v4"

    def __init__(
        self,
        settings: ConvertKitSettings,
        transport_name: str | None = None,
        middlewares: list[Middleware] | None = None,
        transport: BaseTransport | None = None,
    ):
        super().__init__(
            settings,
            transport_name=transport_name,
            middlewares=middlewares,
            transport=transport,
        )
        self.auth = AuthManager(
            settings=self.settings,
            transport=self.transport,
            user_agent=self.user_agent,
        )

    def get_request_headers(
        self, content_type: str = JSON_CONTENT_TYPE, auth: bool = True
    ) -> dict[str, str]:
        """
        Headers for v4 requests.

        Raises:
            AuthError: If auth is requested and no access token is available.
        """
        headers = {
            "Accept": "application/json",
            "Content-Type": content_type,
            "User-Agent": self.user_agent,
        }
        if auth:
            headers["Authorization"] = f"Bearer {self.auth.access_token}"
        return headers

    # --- OAuth ---------------------------------------------------------------

    def get_oauth_url(self, redirect_uri: str | None = None, state: str | None = None) -> str:
        """Return the authorization URL to send the user to."""
        return self.auth.get_oauth_url(redirect_uri=redirect_uri, state=state)

    async def get_access_token(
        self, authorization_code: str, redirect_uri: str | None = None
    ) -> dict:
        """
        Exchange an authorization code for tokens.

        The returned access token is used for all following calls of this client.

        Returns:
            dict: Token response with ``access_token`` and ``refresh_token``.

        Raises:
            AuthError: If the exchange is rejected.
        """
        return await self.auth.exchange_code(authorization_code, redirect_uri)

    async def refresh_token(
        self, refresh_token: str | None = None, redirect_uri: str | None = None
    ) -> dict:
        """Refresh the access token; the new token replaces the current one."""
        return await self.auth.refresh(refresh_token, redirect_uri)

    # --- Account -------------------------------------------------------------

    async def get_account(self) -> Payload:
        return await self.get("account")

    async def get_account_colors(self) -> Payload:
        return await self.get("account/colors")

    async def update_account_colors(self, colors: Sequence[str]) -> Payload:
        """Replace the account's colors with a list of hex values."""
        return await self.put("account/colors", {"colors": list(colors)})

    async def get_creator_profile(self) -> Payload:
        return await self.get("account/creator_profile")

    async def get_email_stats(self) -> Payload:
        return await self.get("account/email_stats")

    async def get_growth_stats(
        self, starting: date | None = None, ending: date | None = None
    ) -> Payload:
        """
        Get growth stats for a date range.

        Args:
            starting: First day of the range; the API defaults to 90 days ago.
            ending: Last day of the range; the API defaults to today.
        """
        return await self.get(
            "account/growth_stats",
            add_date_filters({}, starting=starting, ending=ending),
        )

    # --- Forms and landing pages --------------------------------------------

    async def get_forms(
        self,
        status: str = "active",
        include_total_count: bool = False,
        after_cursor: str = "",
        before_cursor: str = "",
        per_page: int = DEFAULT_PER_PAGE,
    ) -> Payload:
        """
        List embedded forms.

        Args:
            status: active, archived, trashed or all.
        """
        return await self.get(
            "forms",
            build_pagination_params(
                {"type": "embed", "status": status},
                include_total_count,
                after_cursor,
                before_cursor,
                per_page,
            ),
        )

    async def get_landing_pages(
        self,
        status: str = "active",
        include_total_count: bool = False,
        after_cursor: str = "",
        before_cursor: str = "",
        per_page: int = DEFAULT_PER_PAGE,
    ) -> Payload:
        """List landing pages (hosted forms)."""
        return await self.get(
            "forms",
            build_pagination_params(
                {"type": "hosted", "status": status},
                include_total_count,
                after_cursor,
                before_cursor,
                per_page,
            ),
        )

    async def add_subscriber_to_form_by_email(
        self, form_id: int, email_address: str
    ) -> Payload:
        return await self.post(
            f"forms/{form_id}/subscribers", {"email_address": email_address}
        )

    async def add_subscriber_to_form(self, form_id: int, subscriber_id: int) -> Payload:
        return await self.post(f"forms/{form_id}/subscribers/{subscriber_id}")

    async def get_form_subscriptions(
        self,
        form_id: int,
        subscriber_state: str = "active",
        created_after: date | None = None,
        created_before: date | None = None,
        added_after: date | None = None,
        added_before: date | None = None,
        include_total_count: bool = False,
        after_cursor: str = "",
        before_cursor: str = "",
        per_page: int = DEFAULT_PER_PAGE,
    ) -> Payload:
        """
        List subscribers of a form.

        Args:
            form_id: Form ID.
            subscriber_state: active, bounced, cancelled, complained or inactive.
            created_after / created_before: Filter on subscriber creation date.
            added_after / added_before: Filter on the date the subscriber joined the form.
        """
        params = _state_filter(subscriber_state)
        add_date_filters(
            params,
            created_after=created_after,
            created_before=created_before,
            added_after=added_after,
            added_before=added_before,
        )
        return await self.get(
            f"forms/{form_id}/subscribers",
            build_pagination_params(
                params, include_total_count, after_cursor, before_cursor, per_page
            ),
        )

    # --- Sequences -----------------------------------------------------------

    async def get_sequences(
        self,
        include_total_count: bool = False,
        after_cursor: str = "",
        before_cursor: str = "",
        per_page: int = DEFAULT_PER_PAGE,
    ) -> Payload:
        return await self.get(
            "sequences",
            build_pagination_params(
                {}, include_total_count, after_cursor, before_cursor, per_page
            ),
        )

    async def add_subscriber_to_sequence_by_email(
        self, sequence_id: int, email_address: str
    ) -> Payload:
        return await self.post(
            f"sequences/{sequence_id}/subscribers", {"email_address": email_address}
        )

    async def add_subscriber_to_sequence(
        self, sequence_id: int, subscriber_id: int
    ) -> Payload:
        return await self.post(f"sequences/{sequence_id}/subscribers/{subscriber_id}")

    async def get_sequence_subscriptions(
        self,
        sequence_id: int,
        subscriber_state: str = "active",
        created_after: date | None = None,
        created_before: date | None = None,
        added_after: date | None = None,
        added_before: date | None = None,
        include_total_count: bool = False,
        after_cursor: str = "",
        before_cursor: str = "",
        per_page: int = DEFAULT_PER_PAGE,
    ) -> Payload:
        """List subscribers of a sequence. Filters as in :meth:`get_form_subscriptions`."""
        params = _state_filter(subscriber_state)
        add_date_filters(
            params,
            created_after=created_after,
            created_before=created_before,
            added_after=added_after,
            added_before=added_before,
        )
        return await self.get(
            f"sequences/{sequence_id}/subscribers",
            build_pagination_params(
                params, include_total_count, after_cursor, before_cursor, per_page
            ),
        )

    # --- Tags ----------------------------------------------------------------

    async def get_tags(
        self,
        include_total_count: bool = False,
        after_cursor: str = "",
        before_cursor: str = "",
        per_page: int = DEFAULT_PER_PAGE,
    ) -> Payload:
        return await self.get(
            "tags",
            build_pagination_params(
                {}, include_total_count, after_cursor, before_cursor, per_page
            ),
        )

    async def create_tag(self, name: str) -> Payload:
        return await self.post("tags", {"name": name})

    async def create_tags(self, names: Sequence[str], callback_url: str = "") -> Payload:
        """
        Create tags in bulk.

        Args:
            names: Tag names, created in the given order.
            callback_url: URL notified when an asynchronous bulk job completes.
        """
        body: Params = {"tags": [{"name": str(name)} for name in names]}
        if callback_url:
            body["callback_url"] = callback_url
        return await self.post("bulk/tags", body)

    async def tag_subscriber_by_email(self, tag_id: int, email_address: str) -> Payload:
        return await self.post(
            f"tags/{tag_id}/subscribers", {"email_address": email_address}
        )

    async def tag_subscriber(self, tag_id: int, subscriber_id: int) -> Payload:
        return await self.post(f"tags/{tag_id}/subscribers/{subscriber_id}")

    async def remove_tag_from_subscriber(self, tag_id: int, subscriber_id: int) -> Payload:
        return await self.delete(f"tags/{tag_id}/subscribers/{subscriber_id}")

    async def remove_tag_from_subscriber_by_email(
        self, tag_id: int, email_address: str
    ) -> Payload:
        return await self.delete(
            f"tags/{tag_id}/subscribers", {"email_address": email_address}
        )

    async def get_tag_subscriptions(
        self,
        tag_id: int,
        subscriber_state: str = "active",
        created_after: date | None = None,
        created_before: date | None = None,
        tagged_after: date | None = None,
        tagged_before: date | None = None,
        include_total_count: bool = False,
        after_cursor: str = "",
        before_cursor: str = "",
        per_page: int = DEFAULT_PER_PAGE,
    ) -> Payload:
        """
        List subscribers holding a tag.

        Args:
            tagged_after / tagged_before: Filter on the date the tag was applied.
        """
        params = _state_filter(subscriber_state)
        add_date_filters(
            params,
            created_after=created_after,
            created_before=created_before,
            tagged_after=tagged_after,
            tagged_before=tagged_before,
        )
        return await self.get(
            f"tags/{tag_id}/subscribers",
            build_pagination_params(
                params, include_total_count, after_cursor, before_cursor, per_page
            ),
        )

    # --- Email templates -----------------------------------------------------

    async def get_email_templates(
        self,
        include_total_count: bool = False,
        after_cursor: str = "",
        before_cursor: str = "",
        per_page: int = DEFAULT_PER_PAGE,
    ) -> Payload:
        return await self.get(
            "email_templates",
            build_pagination_params(
                {}, include_total_count, after_cursor, before_cursor, per_page
            ),
        )

    # --- Subscribers ---------------------------------------------------------

    async def get_subscribers(
        self,
        subscriber_state: str = "active",
        email_address: str = "",
        created_after: date | None = None,
        created_before: date | None = None,
        updated_after: date | None = None,
        updated_before: date | None = None,
        sort_field: str = "id",
        sort_order: str = "desc",
        include_total_count: bool = False,
        after_cursor: str = "",
        before_cursor: str = "",
        per_page: int = DEFAULT_PER_PAGE,
    ) -> Payload:
        """
        List subscribers.

        Args:
            subscriber_state: active, bounced, cancelled, complained or inactive.
            email_address: Only return the subscriber with this email.
            created_after / created_before: Filter on creation date.
            updated_after / updated_before: Filter on last update date.
            sort_field: id, created_at or updated_at.
            sort_order: asc or desc.
        """
        params = _state_filter(subscriber_state)
        if email_address:
            params["email_address"] = email_address
        add_date_filters(
            params,
            created_after=created_after,
            created_before=created_before,
            updated_after=updated_after,
            updated_before=updated_before,
        )
        if sort_field:
            params["sort_field"] = sort_field
        if sort_order:
            params["sort_order"] = sort_order

        return await self.get(
            "subscribers",
            build_pagination_params(
                params, include_total_count, after_cursor, before_cursor, per_page
            ),
        )

    async def create_subscriber(
        self,
        email_address: str,
        first_name: str = "",
        subscriber_state: str = "",
        fields: Mapping[str, Any] | None = None,
    ) -> Payload:
        """
        Create a subscriber, or update the first name and fields of an existing one.

        Args:
            email_address: Subscriber email.
            first_name: Optional first name.
            subscriber_state: Optional initial state (e.g. active, inactive).
            fields: Custom field values keyed by field key.
        """
        body: Params = {"email_address": email_address}
        if first_name:
            body["first_name"] = first_name
        if subscriber_state:
            body["state"] = subscriber_state
        if fields:
            body["fields"] = dict(fields)
        return await self.post("subscribers", body)

    async def create_subscribers(
        self, subscribers: Sequence[Mapping[str, Any]], callback_url: str = ""
    ) -> Payload:
        """
        Create subscribers in bulk.

        Args:
            subscribers: Subscriber objects, e.g. ``{"email_address": ..., "first_name": ...}``.
                Order is preserved.
            callback_url: URL notified when an asynchronous bulk job completes.
        """
        body: Params = {"subscribers": [dict(subscriber) for subscriber in subscribers]}
        if callback_url:
            body["callback_url"] = callback_url
        return await self.post("bulk/subscribers", body)

    async def get_subscriber_id(self, email_address: str) -> int | None:
        """
        Look up a subscriber's ID by email address.

        Returns:
            int | None: The ID, or None when no subscriber has this email.
            A failed request raises instead, so None always means "not found".
        """
        payload = await self.get("subscribers", {"email_address": email_address})
        subscriber_id = first_subscriber_id(payload)
        if subscriber_id is None:
            logger.info("No subscriber found for email lookup")
        return subscriber_id

    async def get_subscriber(self, subscriber_id: int) -> Payload:
        return await self.get(f"subscribers/{subscriber_id}")

    async def update_subscriber(
        self,
        subscriber_id: int,
        first_name: str = "",
        email_address: str = "",
        fields: Mapping[str, Any] | None = None,
    ) -> Payload:
        """Update a subscriber. Only non-empty arguments are sent."""
        body: Params = {}
        if first_name:
            body["first_name"] = first_name
        if email_address:
            body["email_address"] = email_address
        if fields:
            body["fields"] = dict(fields)
        return await self.put(f"subscribers/{subscriber_id}", body)

    async def unsubscribe_by_email(self, email_address: str) -> Payload:
        """
        Unsubscribe the subscriber with this email.

        Returns:
            Payload: API response, or None when no subscriber has this email
            (no unsubscribe request is sent in that case).
        """
        subscriber_id = await self.get_subscriber_id(email_address)
        if subscriber_id is None:
            return None
        return await self.unsubscribe(subscriber_id)

    async def unsubscribe(self, subscriber_id: int) -> Payload:
        return await self.post(f"subscribers/{subscriber_id}/unsubscribe")

    async def get_subscriber_tags(
        self,
        subscriber_id: int,
        include_total_count: bool = False,
        after_cursor: str = "",
        before_cursor: str = "",
        per_page: int = DEFAULT_PER_PAGE,
    ) -> Payload:
        return await self.get(
            f"subscribers/{subscriber_id}/tags",
            build_pagination_params(
                {}, include_total_count, after_cursor, before_cursor, per_page
            ),
        )

    # --- Broadcasts ----------------------------------------------------------

    async def get_broadcasts(
        self,
        include_total_count: bool = False,
        after_cursor: str = "",
        before_cursor: str = "",
        per_page: int = DEFAULT_PER_PAGE,
    ) -> Payload:
        return await self.get(
            "broadcasts",
            build_pagination_params(
                {}, include_total_count, after_cursor, before_cursor, per_page
            ),
        )

    async def create_broadcast(
        self,
        subject: str = "",
        content: str = "",
        description: str = "",
        public: bool = False,
        published_at: datetime | None = None,
        send_at: datetime | None = None,
        email_address: str = "",
        email_template_id: str = "",
        thumbnail_alt: str = "",
        thumbnail_url: str = "",
        preview_text: str = "",
        subscriber_filter: Sequence[Mapping[str, Any]] | None = None,
    ) -> Payload:
        """
        Create a broadcast. A broadcast with ``send_at`` is scheduled, one without
        is saved as a draft.

        Args:
            subject: Email subject.
            content: HTML content.
            description: Internal description.
            public: Publish to the creator's web archive.
            published_at: Web publication time (public broadcasts only).
            send_at: Scheduled send time.
            email_address: Sending address; defaults to the account's.
            email_template_id: Template to render the content with.
            thumbnail_alt / thumbnail_url: Web thumbnail (public broadcasts only).
            preview_text: Inbox preview text.
            subscriber_filter: Recipient filter groups; all subscribers when omitted.
        """
        return await self.post(
            "broadcasts",
            _broadcast_body(
                subject=subject,
                content=content,
                description=description,
                public=public,
                published_at=published_at,
                send_at=send_at,
                email_address=email_address,
                email_template_id=email_template_id,
                thumbnail_alt=thumbnail_alt,
                thumbnail_url=thumbnail_url,
                preview_text=preview_text,
                subscriber_filter=subscriber_filter,
            ),
        )

    async def get_broadcast(self, broadcast_id: int) -> Payload:
        return await self.get(f"broadcasts/{broadcast_id}")

    async def get_broadcast_stats(self, broadcast_id: int) -> Payload:
        return await self.get(f"broadcasts/{broadcast_id}/stats")

    async def update_broadcast(
        self,
        broadcast_id: int,
        subject: str = "",
        content: str = "",
        description: str = "",
        public: bool = False,
        published_at: datetime | None = None,
        send_at: datetime | None = None,
        email_address: str = "",
        email_template_id: str = "",
        thumbnail_alt: str = "",
        thumbnail_url: str = "",
        preview_text: str = "",
        subscriber_filter: Sequence[Mapping[str, Any]] | None = None,
    ) -> Payload:
        """Update a broadcast. Same body rules as :meth:`create_broadcast`."""
        return await self.put(
            f"broadcasts/{broadcast_id}",
            _broadcast_body(
                subject=subject,
                content=content,
                description=description,
                public=public,
                published_at=published_at,
                send_at=send_at,
                email_address=email_address,
                email_template_id=email_template_id,
                thumbnail_alt=thumbnail_alt,
                thumbnail_url=thumbnail_url,
                preview_text=preview_text,
                subscriber_filter=subscriber_filter,
            ),
        )

    async def delete_broadcast(self, broadcast_id: int) -> Payload:
        return await self.delete(f"broadcasts/{broadcast_id}")

    # --- Webhooks ------------------------------------------------------------

    async def get_webhooks(
        self,
        include_total_count: bool = False,
        after_cursor: str = "",
        before_cursor: str = "",
        per_page: int = DEFAULT_PER_PAGE,
    ) -> Payload:
        return await self.get(
            "webhooks",
            build_pagination_params(
                {}, include_total_count, after_cursor, before_cursor, per_page
            ),
        )

    async def create_webhook(self, url: str, event: str, parameter: str = "") -> Payload:
        """
        Register a webhook.

        Args:
            url: Target URL receiving the event payloads.
            event: Event name, e.g. ``subscriber.tag_add``.
            parameter: Event argument where the event needs one (form, course,
                tag or product ID, or the link for ``subscriber.link_click``).

        Raises:
            InvalidArgumentError: For an unsupported event; no request is sent.
        """
        if event not in WEBHOOK_EVENTS:
            raise InvalidArgumentError(f"The event {event} is not supported")

        event_data: Params = {"name": event}
        parameter_key = WEBHOOK_EVENTS[event]
        if parameter_key:
            event_data[parameter_key] = parameter

        return await self.post("webhooks", {"target_url": url, "event": event_data})

    async def delete_webhook(self, webhook_id: int) -> Payload:
        return await self.delete(f"webhooks/{webhook_id}")

    # --- Custom fields -------------------------------------------------------

    async def get_custom_fields(
        self,
        include_total_count: bool = False,
        after_cursor: str = "",
        before_cursor: str = "",
        per_page: int = DEFAULT_PER_PAGE,
    ) -> Payload:
        return await self.get(
            "custom_fields",
            build_pagination_params(
                {}, include_total_count, after_cursor, before_cursor, per_page
            ),
        )

    async def create_custom_field(self, label: str) -> Payload:
        return await self.post("custom_fields", {"label": label})

    async def create_custom_fields(
        self, labels: Sequence[str], callback_url: str = ""
    ) -> Payload:
        """Create custom fields in bulk, in the given order."""
        body: Params = {"custom_fields": [{"label": str(label)} for label in labels]}
        if callback_url:
            body["callback_url"] = callback_url
        return await self.post("bulk/custom_fields", body)

    async def update_custom_field(self, custom_field_id: int, label: str) -> Payload:
        return await self.put(f"custom_fields/{custom_field_id}", {"label": label})

    async def delete_custom_field(self, custom_field_id: int) -> Payload:
        return await self.delete(f"custom_fields/{custom_field_id}")

    # --- Purchases -----------------------------------------------------------

    async def get_purchases(
        self,
        include_total_count: bool = False,
        after_cursor: str = "",
        before_cursor: str = "",
        per_page: int = DEFAULT_PER_PAGE,
    ) -> Payload:
        return await self.get(
            "purchases",
            build_pagination_params(
                {}, include_total_count, after_cursor, before_cursor, per_page
            ),
        )

    async def get_purchase(self, purchase_id: int) -> Payload:
        return await self.get(f"purchases/{purchase_id}")

    async def create_purchase(
        self,
        email_address: str,
        transaction_id: str,
        products: Sequence[Mapping[str, Any]],
        currency: str = "USD",
        first_name: str | None = None,
        status: str | None = None,
        subtotal: float = 0,
        tax: float = 0,
        shipping: float = 0,
        discount: float = 0,
        total: float = 0,
        transaction_time: datetime | None = None,
    ) -> Payload:
        """
        Record a purchase.

        Args:
            email_address: Buyer email.
            transaction_id: Unique ID of the transaction in the seller's system.
            products: Line items, each with ``name``, ``pid``, ``lid``, ``quantity``,
                ``unit_price`` and optionally ``sku``.
            currency: ISO currency code.
            first_name / status: Optional buyer name and purchase status.
            subtotal / tax / shipping / discount / total: Amounts.
            transaction_time: When the purchase happened.
        """
        body: Params = {
            "email_address": email_address,
            "transaction_id": transaction_id,
            "products": [dict(product) for product in products],
            "currency": currency,
            "first_name": first_name,
            "status": status,
            "subtotal": subtotal,
            "tax": tax,
            "shipping": shipping,
            "discount": discount,
            "total": total,
            "transaction_time": format_datetime(transaction_time),
        }
        return await self.post("purchases", strip_blank_values(body))

    # --- Segments ------------------------------------------------------------

    async def get_segments(
        self,
        include_total_count: bool = False,
        after_cursor: str = "",
        before_cursor: str = "",
        per_page: int = DEFAULT_PER_PAGE,
    ) -> Payload:
        return await self.get(
            "segments",
            build_pagination_params(
                {}, include_total_count, after_cursor, before_cursor, per_page
            ),
        )


def _state_filter(subscriber_state: str) -> Params:
    return {"status": subscriber_state} if subscriber_state else {}


def _broadcast_body(
    *,
    subject: str,
    content: str,
    description: str,
    public: bool,
    published_at: datetime | None,
    send_at: datetime | None,
    email_address: str,
    email_template_id: str,
    thumbnail_alt: str,
    thumbnail_url: str,
    preview_text: str,
    subscriber_filter: Sequence[Mapping[str, Any]] | None,
) -> Params:
    body: Params = {
        "email_template_id": email_template_id,
        "email_address": email_address,
        "content": content,
        "description": description,
        "public": public,
        "published_at": format_datetime(published_at),
        "send_at": format_datetime(send_at),
        "thumbnail_alt": thumbnail_alt,
        "thumbnail_url": thumbnail_url,
        "preview_text": preview_text,
        "subject": subject,
    }
    if subscriber_filter:
        body["subscriber_filter"] = [dict(group) for group in subscriber_filter]

    body = strip_blank_values(body)
    if not public:
        for key in PUBLIC_ONLY_BROADCAST_FIELDS:
            body.pop(key, None)
    return body
