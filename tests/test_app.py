"""Tests for application startup."""

import logging

from fastapi.testclient import TestClient

import twitchtools.app
from twitchtools.app import create_app


class TestLifespan:
    def test_missing_credentials_warn_but_serve(self, monkeypatch, caplog):
        # basicConfig(force=True) would drop the caplog handler
        monkeypatch.setattr(twitchtools.app, "setup_logging", lambda settings: None)
        caplog.set_level(logging.INFO, logger="twitchtools.app")

        with TestClient(create_app()) as client:
            response = client.get("/")

        assert response.status_code == 200
        warnings = [r.getMessage() for r in caplog.records if r.levelno == logging.WARNING]
        assert any("TWITCH_CLIENT_ID or TWITCH_CLIENT_SECRET is not set" in w for w in warnings)

    def test_no_warning_with_credentials(self, monkeypatch, caplog):
        monkeypatch.setattr(twitchtools.app, "setup_logging", lambda settings: None)
        monkeypatch.setenv("TWITCH_CLIENT_ID", "cid")
        monkeypatch.setenv("TWITCH_CLIENT_SECRET", "secret")
        caplog.set_level(logging.INFO, logger="twitchtools.app")

        with TestClient(create_app()) as client:
            assert client.get("/health").status_code == 200

        assert not [r for r in caplog.records if r.levelno == logging.WARNING]
        assert any("running on port 3000" in r.getMessage() for r in caplog.records)
