"""Shared fixtures: keep tests away from the real home directory and cwd."""

import json

import pytest


@pytest.fixture(autouse=True)
def isolated_home(tmp_path, monkeypatch):
    """Point HOME and the working directory at a temp dir."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.chdir(tmp_path)
    for var in (
        "TWITTER_CONSUMER_KEY",
        "TWITTER_CONSUMER_SECRET",
        "TWITTER_ACCESS_TOKEN",
        "TWITTER_ACCESS_SECRET",
    ):
        # removed again on teardown
        monkeypatch.setenv(var, "")
        monkeypatch.delenv(var)
    return home


@pytest.fixture
def client_secret(tmp_path):
    """Create a mock client secret file."""
    creds = {
        "installed": {
            "client_id": "test-client-id.apps.googleusercontent.com",
            "client_secret": "test-client-secret",
            "auth_uri": "https://accounts.google.com/o/oauth2/auth",
            "token_uri": "https://oauth2.googleapis.com/token",
            "redirect_uris": ["http://localhost"],
        }
    }
    path = tmp_path / "client_secret.json"
    with open(path, "w") as f:
        json.dump(creds, f)
    return path


@pytest.fixture
def cached_token(tmp_path):
    """Create a mock cached token file."""
    token = {
        "token": "test-access-token",
        "refresh_token": "test-refresh-token",
        "token_uri": "https://oauth2.googleapis.com/token",
        "client_id": "test-client-id.apps.googleusercontent.com",
        "client_secret": "test-client-secret",
        "scopes": ["https://www.googleapis.com/auth/spreadsheets.readonly"],
        "type": "Bearer",
        "expiry": "2099-01-01T00:00:00Z",
    }
    path = tmp_path / "token.json"
    with open(path, "w") as f:
        json.dump(token, f)
    return path
