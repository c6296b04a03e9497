"""
Synchronous wrappers for the async clients.

This module provides a synchronous interface on top of ConvertKitClient and
LegacyConvertKitClient to support users who need sync operations. Every
coroutine method of the wrapped client is exposed as a blocking method with
the same name and signature.
"""

import asyncio
import functools
import inspect

from .base_client import BaseClient
from .client import ConvertKitClient
from .config import ConvertKitSettings
from .legacy import LegacyConvertKitClient
from .middleware import Middleware
from .transport import BaseTransport


class _SyncClient:
    """
    Runs the wrapped async client on a private event loop.

    The loop lives as long as the wrapper, so the transport's connection pool
    is reused across calls. Call :meth:`close` (or use the wrapper as a context
    manager) to release both.
    """

    _client_cls: type[BaseClient]

    def __init__(
        self,
        settings: ConvertKitSettings,
        transport_name: str | None = None,
        middlewares: list[Middleware] | None = None,
        transport: BaseTransport | None = None,
    ):
        """
        Initialize the synchronous client.

        Args:
            settings: API configuration settings
            transport_name: HTTP transport to use (httpx, aiohttp, requests)
            middlewares: Optional request/response hooks
            transport: Ready-made transport instance
        """
        self._loop = asyncio.new_event_loop()
        self._closed = False
        self._async_client = self._client_cls(
            settings=settings,
            transport_name=transport_name,
            middlewares=middlewares,
            transport=transport,
        )

    def __getattr__(self, name):
        if name.startswith("_"):
            raise AttributeError(name)
        attr = getattr(self._async_client, name)
        if not inspect.iscoroutinefunction(attr):
            return attr

        @functools.wraps(attr)
        def blocking(*args, **kwargs):
            return self._run(attr(*args, **kwargs))

        return blocking

    def _run(self, coro):
        if self._closed:
            coro.close()
            raise RuntimeError("Client is closed")
        return self._loop.run_until_complete(coro)

    def close(self):
        """
        Synchronous cleanup of client resources.
        """
        if self._closed:
            return
        try:
            self._run(self._async_client.aclose())
        finally:
            self._closed = True
            self._loop.close()

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()


class ConvertKitClientSync(_SyncClient):
    """
    Synchronous wrapper for ConvertKitClient (API v4).

    Example:
        with ConvertKitClientSync(settings) as client:
            tags = client.get_tags(per_page=10)
            client.tag_subscriber_by_email(tags["tags"][0]["id"], "jane@acme.io")
    """

    _client_cls = ConvertKitClient


class LegacyConvertKitClientSync(_SyncClient):
    """
    Synchronous wrapper for LegacyConvertKitClient (API v3).

    Example:
        with LegacyConvertKitClientSync(settings) as client:
            landing_pages = client.get_landing_pages()
    """

    _client_cls = LegacyConvertKitClient
