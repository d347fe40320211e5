"""Tests for Settings."""

from bitfinex_rest.config import Settings


class TestSettings:
    def test_defaults(self, settings):
        assert settings.base_url == "https://api.bitfinex.com/v1"
        assert settings.request_timeout == 30.0
        assert settings.symbols_schema_ref == "definitions.json#/flatJsonSchema"
        assert not settings.is_production

    def test_env_prefix(self, monkeypatch):
        monkeypatch.setenv("BFX_API_KEY", "env-key")
        monkeypatch.setenv("BFX_API_SECRET", "env-secret")
        monkeypatch.setenv("BFX_API_HOST", "https://api.example.com/")
        monkeypatch.setenv("BFX_REQUEST_TIMEOUT", "5")

        settings = Settings(_env_file=None)

        assert settings.api_key == "env-key"
        assert settings.api_secret.get_secret_value() == "env-secret"
        assert "env-secret" not in repr(settings)
        assert settings.base_url == "https://api.example.com/v1"
        assert settings.request_timeout == 5.0

    def test_version_slashes_stripped(self):
        settings = Settings(_env_file=None, api_version="/v1/")

        assert settings.base_url == "https://api.bitfinex.com/v1"
