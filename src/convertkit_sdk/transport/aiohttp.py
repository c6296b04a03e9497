"""
Aiohttp transport implementation for the ConvertKit SDK.

An alternative async HTTP client backend. Install with the ``aiohttp``
extra. The body is read inside the response context so the returned
:class:`UnifiedResponse` does not depend on the released connection.
"""

import asyncio
from typing import Any

import aiohttp

from convertkit_sdk.exceptions import TransportError

from .base import BaseTransport
from .base import UnifiedResponse


class AiohttpTransport(BaseTransport):
    """
    Async transport implementation using aiohttp.ClientSession.
    """

    def __init__(self, timeout: float = 10.0):
        self._timeout = timeout
        self._session: aiohttp.ClientSession | None = None

    async def request(
        self,
        method: str,
        url: str,
        headers: dict[str, str] | None = None,
        params: dict[str, Any] | None = None,
        json: Any = None,
        data: Any = None,
        timeout: float | None = None,
    ) -> UnifiedResponse:
        # Session must be created inside a running loop
        if self._session is None:
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self._timeout)
            )

        timeout_obj = aiohttp.ClientTimeout(total=timeout or self._timeout)
        try:
            async with self._session.request(
                method=method,
                url=url,
                headers=headers,
                params=_stringify_params(params),
                json=json,
                data=data,
                timeout=timeout_obj,
            ) as response:
                text = await response.text()
                return UnifiedResponse(
                    status_code=response.status,
                    text=text,
                    headers=dict(response.headers),
                )
        except (aiohttp.ClientError, asyncio.TimeoutError) as err:
            raise TransportError(
                f"{method} {url}: {type(err).__name__}: {err}"
            ) from err

    async def close(self):
        if self._session:
            await self._session.close()
            self._session = None


def _stringify_params(params: dict[str, Any] | None) -> dict[str, str] | None:
    # aiohttp rejects bool query values
    if params is None:
        return None
    return {
        key: ("true" if value else "false") if isinstance(value, bool) else str(value)
        for key, value in params.items()
    }
