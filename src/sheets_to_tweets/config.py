"""Credential locations and run configuration.

Credentials live in two places:
    ~/.credentials/sheets-to-tweets - cached Google OAuth token
    ./client_secret.json            - Google OAuth client credentials
    ./.env                          - Twitter keys (TWITTER_CONSUMER_KEY, etc.)

The CLI loads the .env file once at startup; variables already present in
the environment take precedence.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from urllib.parse import quote_plus

CREDENTIALS_DIR_NAME = ".credentials"
TOKEN_CACHE_NAME = "sheets-to-tweets"

DEFAULT_CLIENT_SECRET = Path("client_secret.json")
DEFAULT_SHEET_NAME = "Sheet1"
ENV_FILE = Path(".env")

TWITTER_ENV_VARS = {
    "consumer_key": "TWITTER_CONSUMER_KEY",
    "consumer_secret": "TWITTER_CONSUMER_SECRET",
    "access_token": "TWITTER_ACCESS_TOKEN",
    "access_secret": "TWITTER_ACCESS_SECRET",
}


def credentials_dir() -> Path:
    """Directory holding the token cache, under the user's home."""
    return Path.home() / CREDENTIALS_DIR_NAME


def token_cache_path() -> Path:
    """Path of the cached OAuth token file."""
    return credentials_dir() / quote_plus(TOKEN_CACHE_NAME)


def ensure_credentials_dir(path: Path | None = None) -> Path:
    """Create the credentials directory (owner-only) if it doesn't exist.

    Args:
        path: Directory to create. Defaults to ~/.credentials.

    Returns:
        Path to the directory.
    """
    directory = path or credentials_dir()
    directory.mkdir(mode=0o700, parents=True, exist_ok=True)
    return directory


def load_env_file(env_path: Path = ENV_FILE) -> dict[str, str]:
    """Load environment variables from a file.

    Args:
        env_path: Path to .env file.

    Returns:
        Dictionary of loaded variables.
    """
    loaded = {}
    if not env_path.exists():
        return loaded

    with open(env_path) as f:
        for line in f:
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            if "=" not in line:
                continue

            key, _, value = line.partition("=")
            key = key.strip()
            value = value.strip()

            # Remove surrounding quotes
            if (value.startswith('"') and value.endswith('"')) or (
                value.startswith("'") and value.endswith("'")
            ):
                value = value[1:-1]

            # Only set if not already in environment (env vars take precedence)
            if key and key not in os.environ:
                os.environ[key] = value
                loaded[key] = value

    return loaded


@dataclass(frozen=True)
class SheetsConfig:
    """Where to read from: client secret file, spreadsheet and cell range."""

    secret_path: Path
    spreadsheet_id: str
    sheet_name: str = DEFAULT_SHEET_NAME
    cell_range: str = ""


@dataclass(frozen=True)
class TwitterConfig:
    """OAuth 1.0a credentials for the Twitter account that posts."""

    consumer_key: str = ""
    consumer_secret: str = field(default="", repr=False)
    access_token: str = ""
    access_secret: str = field(default="", repr=False)

    @classmethod
    def from_env(cls, **overrides: str | None) -> TwitterConfig:
        """Build from explicit values, falling back to TWITTER_* env vars."""
        values = {}
        for name, env_var in TWITTER_ENV_VARS.items():
            values[name] = overrides.get(name) or os.environ.get(env_var, "")
        return cls(**values)

    def missing(self) -> list[str]:
        """Names of credentials that are empty."""
        return [name for name in TWITTER_ENV_VARS if not getattr(self, name)]
