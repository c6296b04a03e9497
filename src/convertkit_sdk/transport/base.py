import json as jsonlib
from collections.abc import Mapping
from typing import Any


class UnifiedResponse:
    """
    Unified response wrapper that handles differences between HTTP clients.

    Every transport reads the body eagerly and hands over the status code,
    headers and raw text, so the response stays usable after the underlying
    connection is released. Non-success statuses are never raised here; the
    client inspects them itself.
    """

    def __init__(
        self,
        status_code: int,
        text: str = "",
        headers: Mapping[str, str] | None = None,
    ):
        self.status_code = status_code
        self.text = text
        self.headers = dict(headers or {})

    @classmethod
    def from_response(cls, response) -> "UnifiedResponse":
        """Build from any response object exposing status_code, text and headers."""
        return cls(
            status_code=response.status_code,
            text=response.text,
            headers=getattr(response, "headers", None),
        )

    @property
    def is_success(self) -> bool:
        """True for 2xx and 3xx statuses."""
        return 200 <= self.status_code < 400

    async def json(self) -> Any:
        """
        Decode the body as JSON.

        Raises:
            ValueError: If the body is not valid JSON.
        """
        return jsonlib.loads(self.text)


class BaseTransport:
    """
    Abstract transport layer interface for the ConvertKit SDK.
    All HTTP client backends should inherit from this class.

    Supported transports:
    - httpx: Native async HTTP client
    - aiohttp: Native async HTTP client
    - requests: Sync HTTP client wrapped in async interface
    """

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
        """
        Async request method for all transports.
        Override this method in transport implementations.
        """
        raise NotImplementedError(
            "Transport implementations must override this method."
        )

    async def close(self) -> None:
        """Release connections held by the transport."""
