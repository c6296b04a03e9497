"""
ConvertKit SDK - Async-first SDK for the ConvertKit API.

This SDK provides:
- Async client for the OAuth API (v4) and the legacy key/secret API (v3)
- Synchronous wrappers for sync operations
- Multiple HTTP transport support
- OAuth authorization URL, code exchange and token refresh
- Middleware support, including masked request logging
"""

from ._version import __version__
from .auth import AuthError
from .auth import AuthManager
from .client import ConvertKitClient
from .client_sync import ConvertKitClientSync
from .client_sync import LegacyConvertKitClientSync
from .config import ConvertKitSettings
from .exceptions import ClientError
from .exceptions import ConvertKitAPIError
from .exceptions import HTTPStatusError
from .exceptions import InvalidArgumentError
from .exceptions import ResponseDecodeError
from .exceptions import ServerError
from .exceptions import TransportError
from .legacy import LegacyConvertKitClient
from .logging_middleware import LoggingMiddleware
from .middleware import Middleware
from .normalizers import PaginationInfo

__all__ = [
    "__version__",
    "ConvertKitClient",
    "ConvertKitClientSync",
    "LegacyConvertKitClient",
    "LegacyConvertKitClientSync",
    "ConvertKitSettings",
    "AuthManager",
    "AuthError",
    "ConvertKitAPIError",
    "InvalidArgumentError",
    "HTTPStatusError",
    "ClientError",
    "ServerError",
    "ResponseDecodeError",
    "TransportError",
    "Middleware",
    "LoggingMiddleware",
    "PaginationInfo",
]
