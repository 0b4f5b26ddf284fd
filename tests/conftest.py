"""Shared pytest fixtures for twitch-helix tests.

Fixture summary
---------------
api_settings   : ApiSettings with test base URLs and a stored default token.
api            : TwitchAPI bound to ``api_settings``; closed after the test.
load_fixture   : Loader for recorded JSON bodies under fixtures/api_responses/.

Every test runs without network access: HTTP is mocked with respx and Redis
with ``unittest.mock.AsyncMock``.
"""

from __future__ import annotations

import json
from collections.abc import AsyncGenerator, Callable
from pathlib import Path
from typing import Any

import pytest
import pytest_asyncio

from twitch_helix.client import TwitchAPI
from twitch_helix.config.settings import get_settings
from twitch_helix.core.credentials import ApiSettings, CredentialStore

HELIX_BASE = "https://api.twitch.tv/helix"
AUTH_BASE = "https://id.twitch.tv/oauth2"

TEST_CLIENT_ID = "test-client-id"
TEST_CLIENT_SECRET = "test-client-secret"
STORED_TOKEN = "stored-access-token"

FIXTURES_DIR = Path(__file__).parent / "fixtures" / "api_responses"


def make_settings(access_token: str | None = STORED_TOKEN) -> ApiSettings:
    """Build an :class:`ApiSettings` pointing at the real Twitch base URLs."""
    return ApiSettings(
        client_id=TEST_CLIENT_ID,
        client_secret=TEST_CLIENT_SECRET,
        credentials=CredentialStore(access_token=access_token),
        helix_base_url=HELIX_BASE,
        auth_base_url=AUTH_BASE,
        timeout_seconds=5.0,
    )


@pytest.fixture(autouse=True)
def _clear_settings_cache() -> None:
    """Make every test re-read ``TWITCH_*`` variables."""
    get_settings.cache_clear()


@pytest.fixture
def api_settings() -> ApiSettings:
    return make_settings()


@pytest_asyncio.fixture
async def api(api_settings: ApiSettings) -> AsyncGenerator[TwitchAPI, None]:
    client = TwitchAPI(api_settings)
    yield client
    await client.aclose()


@pytest.fixture
def load_fixture() -> Callable[[str], Any]:
    """Return a loader taking a path relative to ``fixtures/api_responses``."""

    def _load(relative_path: str) -> Any:
        return json.loads((FIXTURES_DIR / relative_path).read_text(encoding="utf-8"))

    return _load
