from convertkit_sdk.config import ConvertKitSettings


def test_convertkit_settings_env(monkeypatch):
    # Set environment variables to test values
    monkeypatch.setenv("CONVERTKIT_API_ACCESS_TOKEN", "test-access-token")
    monkeypatch.setenv("CONVERTKIT_API_API_KEY", "test-api-key")
    monkeypatch.setenv("CONVERTKIT_API_BASE_URL", "https://api.staging.acme.io")
    monkeypatch.setenv("CONVERTKIT_API_TIMEOUT", "15")
    monkeypatch.setenv("CONVERTKIT_API_DEBUG", "true")

    settings = ConvertKitSettings()
    assert settings.access_token == "test-access-token"
    assert settings.api_key == "test-api-key"
    assert settings.base_url == "https://api.staging.acme.io"
    assert settings.timeout == 15
    assert settings.debug is True


def test_convertkit_settings_defaults():
    settings = ConvertKitSettings()

    assert settings.base_url == "https://api.convertkit.com"
    assert settings.oauth_authorize_url == "https://app.convertkit.com/oauth/authorize"
    assert settings.oauth_token_url == "https://api.convertkit.com/oauth/token"
    assert settings.timeout == 10.0
    assert settings.transport == "httpx"
    assert settings.debug is False
    assert settings.access_token == ""
    assert settings.api_secret == ""


def test_convertkit_settings_env_file(tmp_path):
    # isolated_env has already moved into tmp_path
    (tmp_path / ".env").write_text("CONVERTKIT_API_CLIENT_ID=from-dotenv\n")

    settings = ConvertKitSettings()
    assert settings.client_id == "from-dotenv"


def test_explicit_values_override_environment(monkeypatch):
    monkeypatch.setenv("CONVERTKIT_API_ACCESS_TOKEN", "from-env")

    settings = ConvertKitSettings(access_token="explicit")
    assert settings.access_token == "explicit"
