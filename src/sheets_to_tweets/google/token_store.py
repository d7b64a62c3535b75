"""On-disk cache for the Google OAuth token.

The token is stored in Google's authorized-user JSON layout, with ``expiry``
as a POSIX timestamp:

    {
      "token": "...",
      "refresh_token": "...",
      "token_uri": "https://oauth2.googleapis.com/token",
      "client_id": "...",
      "client_secret": "...",
      "scopes": ["https://www.googleapis.com/auth/spreadsheets.readonly"],
      "type": "Bearer",
      "expiry": 1767225600.0
    }
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any

from sheets_to_tweets.config import ensure_credentials_dir, token_cache_path
from sheets_to_tweets.google.exceptions import (
    CacheIOError,
    TokenDecodeError,
    TokenNotFoundError,
)

logger = logging.getLogger(__name__)


@dataclass
class OAuthToken:
    """A cached OAuth 2.0 token."""

    access_token: str
    refresh_token: str | None = None
    expires_at: float | None = None
    scopes: list[str] = field(default_factory=list)
    token_type: str = "Bearer"

    @classmethod
    def from_authlib(cls, token: dict[str, Any]) -> OAuthToken:
        """Build from an Authlib token dict."""
        return cls(
            access_token=token["access_token"],
            refresh_token=token.get("refresh_token"),
            expires_at=token.get("expires_at"),
            scopes=token.get("scope", "").split(),
            token_type=token.get("token_type", "Bearer"),
        )

    def to_authlib(self) -> dict[str, Any]:
        """Convert to the dict layout Authlib sessions expect."""
        return {
            "access_token": self.access_token,
            "refresh_token": self.refresh_token,
            "token_type": self.token_type,
            "expires_at": self.expires_at,
            "scope": " ".join(self.scopes),
        }

    @classmethod
    def from_google(cls, data: dict[str, Any]) -> OAuthToken:
        """Parse Google's authorized-user JSON layout."""
        if not data.get("token") or not isinstance(data["token"], str):
            raise ValueError("missing or invalid token field")

        scopes = data.get("scopes") or []
        if not isinstance(scopes, list) or not all(isinstance(s, str) for s in scopes):
            raise ValueError("scopes must be a list of strings")

        # Convert expiry to timestamp if in ISO format
        expiry = data.get("expiry")
        if isinstance(expiry, bool) or not isinstance(expiry, (int, float, str, type(None))):
            raise ValueError("expiry must be a timestamp or ISO 8601 string")
        if expiry and isinstance(expiry, str):
            expires_at = datetime.fromisoformat(expiry.replace("Z", "+00:00")).timestamp()
        else:
            expires_at = expiry

        return cls(
            access_token=data["token"],
            refresh_token=data.get("refresh_token"),
            expires_at=expires_at,
            scopes=list(scopes),
            token_type=data.get("type", "Bearer"),
        )

    def to_google(self, token_uri: str, client_id: str, client_secret: str) -> dict[str, Any]:
        """Render in Google's authorized-user JSON layout."""
        return {
            "token": self.access_token,
            "refresh_token": self.refresh_token,
            "token_uri": token_uri,
            "client_id": client_id,
            "client_secret": client_secret,
            "scopes": self.scopes,
            "type": self.token_type,
            "expiry": self.expires_at,
        }


class TokenStore:
    """Reads and writes the OAuth token cache file.

    Example:
        >>> store = TokenStore()
        >>> store.path
        PosixPath('/home/me/.credentials/sheets-to-tweets')
    """

    def __init__(self, path: str | Path | None = None):
        """Initialize the store.

        Args:
            path: Cache file path. Defaults to ~/.credentials/sheets-to-tweets.
        """
        self.path = Path(path) if path else token_cache_path()

    def exists(self) -> bool:
        return self.path.exists()

    def load(self) -> OAuthToken:
        """Load the cached token.

        Raises:
            TokenNotFoundError: If there is no cache file.
            TokenDecodeError: If the file is not a valid token.
        """
        if not self.path.exists():
            raise TokenNotFoundError(str(self.path))

        try:
            with open(self.path) as f:
                data = json.load(f)
            if not isinstance(data, dict):
                raise ValueError("expected a JSON object")
            return OAuthToken.from_google(data)
        except (OSError, ValueError, TypeError) as e:
            raise TokenDecodeError(str(self.path), str(e)) from e

    def save(
        self,
        token: OAuthToken,
        token_uri: str = "",
        client_id: str = "",
        client_secret: str = "",
    ) -> None:
        """Overwrite the cache file with ``token``.

        Raises:
            CacheIOError: If the directory or file cannot be written.
        """
        logger.info(f"Saving credential file to: {self.path}")
        data = token.to_google(token_uri, client_id, client_secret)

        try:
            ensure_credentials_dir(self.path.parent)
            fd = os.open(self.path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
            with os.fdopen(fd, "w") as f:
                json.dump(data, f, indent=2)
        except OSError as e:
            raise CacheIOError(str(self.path), str(e)) from e

    def clear(self) -> None:
        """Remove the cache file if present."""
        if self.path.exists():
            self.path.unlink()
