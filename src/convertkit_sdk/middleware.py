"""
Middleware interface for the ConvertKit clients.

This module defines the `Middleware` protocol used in the ConvertKit SDK.
It allows users to hook into the request/response lifecycle of all HTTP operations
performed by `ConvertKitClient` and `LegacyConvertKitClient`.

Any class that implements this interface can be passed to a client as a middleware.
Middlewares run in list order and are called once per HTTP request, so a
multi-page lookup produces one call pair per page.

Current implementations:
- Logging (see: LoggingMiddleware) - logs masked requests/responses with timing
"""

from typing import Any
from typing import Protocol

from convertkit_sdk.transport.base import UnifiedResponse


class Middleware(Protocol):
    async def on_request(
        self,
        method: str,
        url: str,
        headers: dict[str, str],
        params: dict[str, Any] | None,
        json: Any,
        data: Any,
    ) -> None:
        """
        Called before the HTTP request is executed.

        This can be used to:
        - Log request details (current: LoggingMiddleware)
        - Add or modify headers
        - Cancel or abort execution (by raising)

        Args:
            method (str): HTTP method, e.g., 'GET', 'POST'
            url (str): Full URL of the request
            headers (dict): Request headers (modifiable)
            params (dict | None): Query parameters
            json (Any): JSON body payload
            data (Any): Alternative body (e.g., for form-data)
        """

    async def on_response(self, response: UnifiedResponse) -> None:
        """
        Called after the HTTP response is received (but before it's parsed).

        Args:
            response (UnifiedResponse): Unified response object from transport layer
        """
