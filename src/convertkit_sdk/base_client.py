"""
Shared request/response glue for both API generations.

``BaseClient`` owns the capability set every generation provides: the
``get``/``post``/``put``/``delete`` verbs, request headers, timeout and user
agent. Concrete clients only decide how they authenticate and which
endpoints they expose:

- :class:`~convertkit_sdk.client.ConvertKitClient` - API v4, OAuth bearer token
- :class:`~convertkit_sdk.legacy.LegacyConvertKitClient` - API v3, key/secret

Each public operation issues exactly one request through :meth:`BaseClient.request`
(the legacy subscriber scan issues one per page). Failures are never retried.
"""

import logging
import platform
from abc import ABC
from abc import abstractmethod
from typing import Any

from convertkit_sdk._version import __version__
from convertkit_sdk.config import ConvertKitSettings
from convertkit_sdk.exceptions import ClientError
from convertkit_sdk.exceptions import ResponseDecodeError
from convertkit_sdk.exceptions import ServerError
from convertkit_sdk.exceptions import TransportError
from convertkit_sdk.logging_middleware import LoggingMiddleware
from convertkit_sdk.middleware import Middleware
from convertkit_sdk.params import strip_blank_values
from convertkit_sdk.transport import BaseTransport
from convertkit_sdk.transport import UnifiedResponse
from convertkit_sdk.transport import get_transport
from convertkit_sdk.types import Params
from convertkit_sdk.types import Payload

logger = logging.getLogger("convertkit_sdk.request")

QUERY_METHODS = frozenset({"GET", "DELETE"})
BODY_METHODS = frozenset({"POST", "PUT"})
JSON_CONTENT_TYPE = "application/json"


class BaseClient(ABC):
    """
    Base class for the ConvertKit API clients.

    Args:
        settings (ConvertKitSettings): SDK configuration.
        transport_name (str | None): Transport backend ('httpx', 'aiohttp', 'requests').
            Defaults to settings.transport.
        middlewares (list[Middleware] | None): Request/response hooks, run in order.
            A LoggingMiddleware is appended when settings.debug is true.
        transport (BaseTransport | None): Ready-made transport; overrides transport_name.
    """

    api_version: str = ""

    def __init__(
        self,
        settings: ConvertKitSettings,
        transport_name: str | None = None,
        middlewares: list[Middleware] | None = None,
        transport: BaseTransport | None = None,
    ):
        self.settings = settings
        self.transport = transport or get_transport(
            transport_name or settings.transport, timeout=settings.timeout
        )
        self.middlewares = list(middlewares or [])
        if settings.debug and not any(
            isinstance(mw, LoggingMiddleware) for mw in self.middlewares
        ):
            self.middlewares.append(LoggingMiddleware())

    @property
    def timeout(self) -> float:
        """Upper bound in seconds requested from the transport for each call."""
        return self.settings.timeout

    @property
    def user_agent(self) -> str:
        return f"ConvertKitPythonSDK/{__version__};Python/{platform.python_version()}"

    @property
    def api_url(self) -> str:
        return f"{self.settings.base_url.rstrip('/')}/{self.api_version}"

    @abstractmethod
    def get_request_headers(
        self, content_type: str = JSON_CONTENT_TYPE, auth: bool = True
    ) -> dict[str, str]:
        """Headers sent with every API request of this generation."""

    def build_url(self, endpoint: str) -> str:
        return f"{self.api_url}/{endpoint.lstrip('/')}"

    async def get(self, endpoint: str, params: Params | None = None) -> Payload:
        return await self.request(endpoint, "GET", params)

    async def post(self, endpoint: str, params: Params | None = None) -> Payload:
        return await self.request(endpoint, "POST", params)

    async def put(self, endpoint: str, params: Params | None = None) -> Payload:
        return await self.request(endpoint, "PUT", params)

    async def delete(self, endpoint: str, params: Params | None = None) -> Payload:
        return await self.request(endpoint, "DELETE", params)

    async def request(
        self, endpoint: str, method: str, params: Params | None = None
    ) -> Payload:
        """
        Send one request and return the decoded JSON body.

        GET and DELETE send the parameter bag as a query string, POST and PUT
        as a JSON body. Blank top-level values are stripped first.

        Returns:
            Payload: Decoded JSON, or None for an empty success body.

        Raises:
            ClientError: 4xx response.
            ServerError: 5xx or other non-success response.
            ResponseDecodeError: Success response whose body is not JSON.
            TransportError: No response (timeout, connection failure); not retried.
        """
        method = method.upper()
        bag = strip_blank_values(params)
        url = self.build_url(endpoint)

        if method in QUERY_METHODS:
            query, body = bag or None, None
        elif method in BODY_METHODS:
            query, body = None, bag or None
        else:
            raise ValueError(f"Unsupported HTTP method: {method}")
        headers = self.get_request_headers()

        # === MIDDLEWARE: before request ===
        for mw in self.middlewares:
            await mw.on_request(
                method=method,
                url=url,
                headers=headers,
                params=query,
                json=body,
                data=None,
            )

        try:
            response = await self.transport.request(
                method=method,
                url=url,
                headers=headers,
                params=query,
                json=body,
                timeout=self.timeout,
            )
        except TransportError as err:
            logger.error(f"{method} {endpoint} failed without a response: {err}")
            raise

        # === MIDDLEWARE: after response ===
        for mw in self.middlewares:
            await mw.on_response(response)

        return await self._decode_response(response, method, endpoint)

    async def _decode_response(
        self, response: UnifiedResponse, method: str, endpoint: str
    ) -> Payload:
        if not response.is_success:
            details = await _try_json(response)
            message = f"{method} {endpoint} failed: {response.status_code}"
            logger.error(message)
            error_cls = ClientError if 400 <= response.status_code < 500 else ServerError
            raise error_cls(
                message,
                status_code=response.status_code,
                body=response.text,
                details=details,
            )

        if not (response.text or "").strip():
            return None

        try:
            return await response.json()
        except ValueError as err:
            logger.error(f"{method} {endpoint}: response body is not valid JSON")
            raise ResponseDecodeError(
                f"Invalid JSON in response to {method} {endpoint}",
                details=response.text,
            ) from err

    async def aclose(self):
        """Close the underlying transport and release its connections."""
        await self.transport.close()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.aclose()


async def _try_json(response: UnifiedResponse) -> Any:
    try:
        return await response.json()
    except ValueError:
        return None
