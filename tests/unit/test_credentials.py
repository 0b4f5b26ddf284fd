"""Unit tests for Settings, CredentialStore and ApiSettings."""

from __future__ import annotations

import pytest

from twitch_helix.config.settings import Settings, get_settings
from twitch_helix.core.credentials import ApiSettings, CredentialStore


class TestCredentialStore:
    def test_empty_store_has_no_token(self) -> None:
        assert CredentialStore().get_current_token() is None

    def test_empty_string_is_treated_as_unset(self) -> None:
        assert CredentialStore(access_token="").get_current_token() is None

    def test_set_token_replaces_both_tokens(self) -> None:
        store = CredentialStore(access_token="old", refresh_token="old-refresh")
        store.set_token("new", "new-refresh")

        assert store.get_current_token() == "new"
        assert store.refresh_token == "new-refresh"

    def test_set_token_keeps_refresh_token_when_not_given(self) -> None:
        store = CredentialStore(access_token="old", refresh_token="keep-me")
        store.set_token("new")

        assert store.refresh_token == "keep-me"

    def test_clear_forgets_everything(self) -> None:
        store = CredentialStore(access_token="a", refresh_token="r")
        store.clear()

        assert store.get_current_token() is None
        assert store.refresh_token is None


class TestSettings:
    def test_reads_prefixed_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TWITCH_CLIENT_ID", "env-client")
        monkeypatch.setenv("TWITCH_ACCESS_TOKEN", "env-token")
        monkeypatch.setenv("TWITCH_REQUEST_TIMEOUT_SECONDS", "12.5")

        settings = Settings()

        assert settings.client_id == "env-client"
        assert settings.access_token == "env-token"
        assert settings.request_timeout_seconds == 12.5

    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("TWITCH_HELIX_BASE_URL", raising=False)
        monkeypatch.delenv("TWITCH_REDIS_URL", raising=False)

        settings = Settings(_env_file=None)

        assert settings.helix_base_url == "https://api.twitch.tv/helix"
        assert settings.auth_base_url == "https://id.twitch.tv/oauth2"
        assert settings.redis_url is None

    def test_get_settings_is_cached(self) -> None:
        assert get_settings() is get_settings()

    def test_api_settings_from_settings(self) -> None:
        settings = Settings(
            _env_file=None,
            client_id="cid",
            client_secret="secret",
            access_token="token",
            helix_base_url="http://localhost:8080/mock/",
            request_timeout_seconds=3,
        )

        api_settings = ApiSettings.from_settings(settings)

        assert api_settings.client_id == "cid"
        assert api_settings.client_secret == "secret"
        assert api_settings.credentials.get_current_token() == "token"
        assert api_settings.helix_base_url == "http://localhost:8080/mock"
        assert api_settings.timeout_seconds == 3
