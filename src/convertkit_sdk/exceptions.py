"""
Custom exceptions for the ConvertKit SDK.
Provides meaningful error classes for client consumers.

Hierarchy:

    ConvertKitAPIError
    ├── InvalidArgumentError   (local validation, no request sent)
    ├── HTTPStatusError        (non-2xx/3xx response)
    │   ├── ClientError        (4xx)
    │   └── ServerError        (5xx and anything else)
    ├── ResponseDecodeError    (body is not valid JSON)
    └── TransportError         (no response: timeout, connection failure)
"""

from typing import Any, Optional


class ConvertKitAPIError(Exception):
    """
    Base exception for all SDK-level API failures.

    Args:
        message (str): Short explanation of the error.
        details (Any | None): Optional structured details (e.g., decoded error body).
    """

    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(message)
        self.details = details


class InvalidArgumentError(ConvertKitAPIError, ValueError):
    """Raised when a call is rejected locally, before any request is made."""


class HTTPStatusError(ConvertKitAPIError):
    """
    The API answered with a status outside the 2xx/3xx range.

    Args:
        status_code (int): HTTP status of the response.
        body (str): Raw response body.
        details (Any | None): Decoded JSON body, when it could be decoded.
    """

    def __init__(
        self,
        message: str,
        status_code: int,
        body: str = "",
        details: Optional[Any] = None,
    ):
        super().__init__(message, details=details)
        self.status_code = status_code
        self.body = body


class ClientError(HTTPStatusError):
    """4xx response: the request was understood but refused."""


class ServerError(HTTPStatusError):
    """5xx (or otherwise unexpected) response."""


class ResponseDecodeError(ConvertKitAPIError):
    """The response body could not be decoded as JSON."""


class TransportError(ConvertKitAPIError):
    """
    The request did not produce a response (timeout, DNS or connection failure).

    Raised by every transport backend in place of its own exception type; the
    backend exception is chained as ``__cause__``.
    """
