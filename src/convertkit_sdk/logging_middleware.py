"""
Logging middleware for the ConvertKit SDK.

This module provides LoggingMiddleware, a built-in middleware that logs
all HTTP requests and responses with timing information. Credentials and
email addresses are masked before anything reaches the logger.

Enabled automatically when ``ConvertKitSettings.debug`` is true.
"""

import json
import logging
import time
from contextvars import ContextVar

from convertkit_sdk.masking import mask_data
from convertkit_sdk.masking import mask_emails_in_text
from convertkit_sdk.transport.base import UnifiedResponse

logger = logging.getLogger("convertkit_sdk.middleware.logging")

MAX_BODY_LOG_LENGTH = 500


class LoggingMiddleware:
    """
    Middleware for logging HTTP requests and responses in the ConvertKit clients.
    Uses standard Python logging.

    The start time lives in a context variable, so requests running
    concurrently on one client (e.g. under ``asyncio.gather``) are timed
    independently.
    """

    def __init__(self, level: int = logging.INFO):
        self.level = level
        self._start_time: ContextVar[float | None] = ContextVar(
            f"convertkit_sdk_request_start_{id(self)}", default=None
        )

    async def on_request(
        self,
        method: str,
        url: str,
        headers: dict,
        params,
        json,
        data,
    ):
        self._start_time.set(time.monotonic())
        logger.log(
            self.level,
            f"Request: {method} {url} | headers={mask_data(headers)} | "
            f"params={mask_data(params)} | json={mask_data(json)}",
        )

    async def on_response(self, response: UnifiedResponse):
        start_time = self._start_time.get()
        elapsed = (time.monotonic() - start_time) if start_time is not None else None
        body = _masked_body(response.text or "")[:MAX_BODY_LOG_LENGTH]
        logger.log(
            self.level,
            f"Response: {response.status_code}"
            + (f" | elapsed={elapsed:.3f}s" if elapsed is not None else "")
            + (f" | body={body}" if body else ""),
        )


def _masked_body(text: str) -> str:
    # Bodies can echo subscriber emails and API credentials; mask decoded JSON key by key
    try:
        decoded = json.loads(text)
    except ValueError:
        return mask_emails_in_text(text)
    return json.dumps(mask_data(decoded))
