"""
Configuration management for the ConvertKit SDK.

This module provides ConvertKitSettings class that handles all SDK configuration
with support for environment variables, .env files, and sensible defaults.

Environment variables are automatically loaded with CONVERTKIT_API_ prefix.
Example: CONVERTKIT_API_ACCESS_TOKEN=your_token
"""

from pydantic import Field
from pydantic_settings import BaseSettings
from pydantic_settings import SettingsConfigDict


class ConvertKitSettings(BaseSettings):
    """
    Configuration settings for the ConvertKit SDK with environment variable support.

    The OAuth fields drive :class:`~convertkit_sdk.client.ConvertKitClient` (API v4);
    ``api_key``/``api_secret`` drive
    :class:`~convertkit_sdk.legacy.LegacyConvertKitClient` (API v3).

    This class automatically loads configuration from:
    - Environment variables (with CONVERTKIT_API_ prefix)
    - .env files
    - Default values for optional settings

    Example:
        # From environment
        export CONVERTKIT_API_CLIENT_ID=your_client_id
        export CONVERTKIT_API_ACCESS_TOKEN=your_token

        # In code
        settings = ConvertKitSettings()
    """

    # OAuth generation
    client_id: str = Field(default="", description="OAuth application client ID")
    client_secret: str = Field(default="", description="OAuth application client secret")
    access_token: str = Field(default="", description="OAuth bearer access token")
    refresh_token: str = Field(default="", description="OAuth refresh token")
    redirect_uri: str = Field(default="", description="OAuth redirect URI")

    # Legacy generation
    api_key: str = Field(default="", description="Legacy v3 API key")
    api_secret: str = Field(default="", description="Legacy v3 API secret")

    base_url: str = "https://api.convertkit.com"
    oauth_authorize_url: str = "https://app.convertkit.com/oauth/authorize"
    oauth_token_url: str = "https://api.convertkit.com/oauth/token"
    timeout: float = 10.0
    transport: str = "httpx"  # default, can be 'aiohttp' or 'requests'
    debug: bool = False

    model_config = SettingsConfigDict(
        env_prefix="CONVERTKIT_API_", env_file=".env", extra="ignore"
    )
