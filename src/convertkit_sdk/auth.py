"""
This module provides an asynchronous AuthManager class responsible for:
- building the OAuth authorization URL
- exchanging an authorization code for tokens
- refreshing the access token with a refresh token.

Token requests are sent once; failures raise AuthError and are not retried.
"""

import logging

import httpx

from convertkit_sdk.config import ConvertKitSettings
from convertkit_sdk.exceptions import ConvertKitAPIError
from convertkit_sdk.exceptions import TransportError
from convertkit_sdk.masking import mask_secret
from convertkit_sdk.transport.base import BaseTransport

logger = logging.getLogger("convertkit_sdk.auth")


class AuthError(ConvertKitAPIError):
    """Custom exception for authentication errors."""

    pass


class AuthManager:
    """
    Holds the OAuth credentials of one client and runs the token flows.

    The access token is immutable except through :meth:`exchange_code` and
    :meth:`refresh`, which replace it with the value returned by the token
    endpoint.

    Attributes:
        settings (ConvertKitSettings): Configuration with client credentials and OAuth URLs.
        client_id (str): OAuth application client ID.
        client_secret (str): OAuth application client secret.
        redirect_uri (str): Default redirect URI for authorization and token calls.
        _access_token (str): The currently active access token.
        _refresh_token (str): The most recent refresh token.
    """

    def __init__(
        self,
        settings: ConvertKitSettings,
        transport: BaseTransport,
        user_agent: str | None = None,
    ):
        """
        Initializes the AuthManager.

        Args:
            settings (ConvertKitSettings): Configuration instance with client credentials.
            transport (BaseTransport): Transport used for token requests.
            user_agent (str | None): User-Agent header for token requests.
        """
        self.settings = settings
        self.transport = transport
        self.user_agent = user_agent
        self.client_id = settings.client_id
        self.client_secret = settings.client_secret
        self.redirect_uri = settings.redirect_uri
        self._access_token: str = settings.access_token
        self._refresh_token: str = settings.refresh_token

    @property
    def access_token(self) -> str:
        """
        Returns the current access token.

        Raises:
            AuthError: If no access token is available.
        """
        if not self._access_token:
            raise AuthError(
                "No access token. Pass one in settings or call 'get_access_token()' first."
            )
        return self._access_token

    @property
    def has_access_token(self) -> bool:
        return bool(self._access_token)

    @property
    def refresh_token(self) -> str:
        return self._refresh_token

    def get_oauth_url(self, redirect_uri: str | None = None, state: str | None = None) -> str:
        """
        Build the URL a user visits to authorize the application.

        Returns:
            str: ``{authorize_url}?client_id=...&redirect_uri=...&response_type=code``
        """
        if not self.client_id:
            raise AuthError("Client ID is missing")

        params = {
            "client_id": self.client_id,
            "redirect_uri": redirect_uri or self.redirect_uri,
            "response_type": "code",
        }
        if state:
            params["state"] = state
        return str(httpx.URL(self.settings.oauth_authorize_url, params=params))

    async def exchange_code(
        self, authorization_code: str, redirect_uri: str | None = None
    ) -> dict:
        """
        Exchange an authorization code for an access and refresh token.

        Returns:
            dict: Decoded token response (``access_token``, ``refresh_token``, ...).

        Raises:
            AuthError: On a missing code or credential, or a non-2xx response.
        """
        if not authorization_code or not authorization_code.strip():
            raise AuthError("Authorization code is missing or empty")

        return await self._token_request(
            {
                "code": authorization_code,
                "client_id": self.client_id,
                "client_secret": self.client_secret,
                "grant_type": "authorization_code",
                "redirect_uri": redirect_uri or self.redirect_uri,
            }
        )

    async def refresh(
        self, refresh_token: str | None = None, redirect_uri: str | None = None
    ) -> dict:
        """
        Obtain a new access token using a refresh token.

        Args:
            refresh_token (str | None): Defaults to the last known refresh token.
            redirect_uri (str | None): Defaults to settings.redirect_uri.
        """
        token = refresh_token or self._refresh_token
        if not token or not token.strip():
            raise AuthError("Refresh token is missing or empty")

        return await self._token_request(
            {
                "refresh_token": token,
                "client_id": self.client_id,
                "client_secret": self.client_secret,
                "grant_type": "refresh_token",
                "redirect_uri": redirect_uri or self.redirect_uri,
            }
        )

    async def _token_request(self, body: dict) -> dict:
        if not self.client_id or not self.client_secret:
            raise AuthError("Client ID and client secret are required for token requests")

        headers = {
            "Accept": "application/json",
            "Content-Type": "application/json",
        }
        if self.user_agent:
            headers["User-Agent"] = self.user_agent

        logger.debug(f"Requesting token ({body['grant_type']})")
        try:
            response = await self.transport.request(
                method="POST",
                url=self.settings.oauth_token_url,
                headers=headers,
                json=body,
                timeout=self.settings.timeout,
            )
        except TransportError as err:
            logger.error(f"Token request failed without a response: {err}")
            raise

        if not response.is_success:
            logger.error(f"Token request failed: {response.status_code}")
            raise AuthError(
                f"Auth error: {response.status_code}",
                details={"status_code": response.status_code, "body": response.text},
            )

        try:
            data = await response.json()
        except ValueError as err:
            logger.error("Token response is not valid JSON")
            raise AuthError("Invalid JSON in token response") from err

        if not isinstance(data, dict) or not data.get("access_token"):
            logger.error("Token response has no access_token")
            raise AuthError("Token response has no access_token", details=data)

        self._access_token = data["access_token"]
        if data.get("refresh_token"):
            self._refresh_token = data["refresh_token"]
        logger.debug(f"New access token acquired ({mask_secret(self._access_token)})")
        return data
