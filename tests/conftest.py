"""Pytest configuration and shared fixtures for all tests."""

from collections.abc import Callable

import httpx
import pytest
from fastapi.testclient import TestClient

from twitchtools.app import create_app
from twitchtools.core.config import get_settings
from twitchtools.core.dependencies import get_twitch_api
from twitchtools.services import AppTokenCache, TwitchAPIClient

TEST_CLIENT_ID = "test-client-id"
TEST_CLIENT_SECRET = "test-client-secret"


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def helix_user(login: str, user_id: str | None = None) -> dict:
    """Helix /users record as Twitch returns it."""
    return {
        "id": user_id or f"id-{login}",
        "login": login,
        "display_name": login.capitalize(),
        "type": "",
        "broadcaster_type": "",
        "description": "",
        "profile_image_url": f"https://static-cdn.jtvnw.net/{login}.png",
        "offline_image_url": "",
        "view_count": 0,
        "created_at": "2016-12-14T20:32:28Z",
    }


def token_response(token: str = "T", expires_in: int = 3600) -> httpx.Response:
    return httpx.Response(
        200, json={"access_token": token, "expires_in": expires_in, "token_type": "bearer"}
    )


class UpstreamRecorder:
    """MockTransport handler that records calls and routes them by upstream host."""

    def __init__(
        self,
        *,
        helix: Callable[[httpx.Request], httpx.Response] | None = None,
        tmi: Callable[[httpx.Request], httpx.Response] | None = None,
        oauth: Callable[[httpx.Request], httpx.Response] | None = None,
    ):
        self.helix = helix or (lambda request: httpx.Response(200, json={"data": []}))
        self.tmi = tmi or (lambda request: httpx.Response(200, json={"chatters": {}}))
        self.oauth = oauth or (lambda request: token_response())
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        host = request.url.host
        if host == "id.twitch.tv":
            return self.oauth(request)
        if host == "tmi.twitch.tv":
            return self.tmi(request)
        return self.helix(request)

    def calls_to(self, host: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.host == host]

    @property
    def helix_calls(self) -> list[httpx.Request]:
        return self.calls_to("api.twitch.tv")

    @property
    def token_calls(self) -> list[httpx.Request]:
        return self.calls_to("id.twitch.tv")


def build_twitch_api(
    recorder: UpstreamRecorder,
    *,
    clock: FakeClock | None = None,
    client_id: str = TEST_CLIENT_ID,
    client_secret: str = TEST_CLIENT_SECRET,
) -> TwitchAPIClient:
    http = httpx.AsyncClient(transport=httpx.MockTransport(recorder))
    token_cache = AppTokenCache(
        http,
        client_id,
        client_secret,
        clock=clock or FakeClock(),
    )
    return TwitchAPIClient(client_id, client_secret, http=http, token_cache=token_cache)


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    """Isolate settings from the developer's environment."""
    for name in (
        "TWITCH_CLIENT_ID",
        "TWITCH_CLIENT_SECRET",
        "STRICT_ERROR_STATUS",
        "PORT",
        "CORS_ORIGINS",
    ):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def recorder() -> UpstreamRecorder:
    return UpstreamRecorder()


@pytest.fixture
def make_test_client():
    """Build a TestClient whose routes use the given TwitchAPIClient (or stand-in)."""

    def _make(twitch_api) -> TestClient:
        app = create_app()
        app.dependency_overrides[get_twitch_api] = lambda: twitch_api
        return TestClient(app)

    return _make
