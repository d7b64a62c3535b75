"""Google OAuth management using Authlib.

This module provides OAuth 2.0 authentication for the Sheets API with:
- A cached token reused across runs (see ``token_store``)
- An interactive authorization-code flow when the cache is missing or unusable
- Automatic token refresh, with refreshed tokens written back to the cache
- Google API service creation

The client secret file is the JSON downloaded from Google Cloud Console
(``installed`` or ``web`` layout). The token cache defaults to
~/.credentials/sheets-to-tweets.
"""

import json
import logging
import webbrowser
from collections.abc import Callable
from datetime import datetime, timedelta
from pathlib import Path
from typing import Any
from urllib.parse import parse_qs, urlparse

import requests
from authlib.common.errors import AuthlibBaseError
from authlib.integrations.requests_client import OAuth2Session
from google.oauth2.credentials import Credentials as GoogleCredentials
from googleapiclient.discovery import build

from sheets_to_tweets.config import DEFAULT_CLIENT_SECRET
from sheets_to_tweets.google.exceptions import (
    AuthError,
    ConfigReadError,
    CredentialsNotFoundError,
    ScopeMismatchError,
    TokenError,
)
from sheets_to_tweets.google.token_store import OAuthToken, TokenStore

logger = logging.getLogger(__name__)


SCOPES = {
    "sheets": "https://www.googleapis.com/auth/spreadsheets",
    "sheets_readonly": "https://www.googleapis.com/auth/spreadsheets.readonly",
}

DEFAULT_REDIRECT_URI = "http://localhost"

CodeProvider = Callable[[str], str]


def extract_code(value: str) -> str:
    """Return the authorization code from a bare code or a pasted redirect URL."""
    value = value.strip()
    if "code=" in value:
        params = parse_qs(urlparse(value).query)
        if params.get("code"):
            return params["code"][0]
    return value


def prompt_for_code(authorization_url: str, open_browser: bool = False) -> str:
    """Ask the user to authorize in a browser and paste back the code.

    Blocks on standard input until a line is entered.

    Raises:
        AuthError: If no code could be read.
    """
    print("Go to the following link in your browser then type the authorization code:")
    print(f"\n{authorization_url}\n")
    if open_browser:
        webbrowser.open(authorization_url)

    try:
        line = input("Authorization code: ")
    except EOFError as e:
        raise AuthError(f"Unable to read authorization code: {e}") from e

    code = extract_code(line)
    if not code:
        raise AuthError("Unable to read authorization code: empty input")
    return code


class GoogleOAuth:
    """Google OAuth management using Authlib.

    Handles the authorization-code flow, the token cache, and Google API
    service creation.

    Example:
        >>> auth = GoogleOAuth(credentials_path="client_secret.json")
        >>> session = auth.get_authorized_session()  # prompts only on first run
        >>> sheets = auth.build_service("sheets", "v4")
    """

    AUTHORIZE_URL = "https://accounts.google.com/o/oauth2/auth"
    TOKEN_URL = "https://oauth2.googleapis.com/token"
    REVOKE_URL = "https://oauth2.googleapis.com/revoke"

    def __init__(
        self,
        scopes: list[str] | None = None,
        client_id: str | None = None,
        client_secret: str | None = None,
        token_path: str | Path | None = None,
        credentials_path: str | Path | None = None,
    ):
        """Initialize Google OAuth.

        Args:
            scopes: List of scope names (e.g., ["sheets_readonly"]) or full URLs.
                   If None, defaults to ["sheets_readonly"].
            client_id: OAuth client ID (loaded from credentials file if not provided).
            client_secret: OAuth client secret (loaded from credentials file if not provided).
            token_path: Path to store/load tokens. Defaults to ~/.credentials/sheets-to-tweets.
            credentials_path: Path to OAuth client secret file. Defaults to ./client_secret.json.

        Raises:
            CredentialsNotFoundError: If the client secret file does not exist.
            ConfigReadError: If the client secret file is malformed.
        """
        self.store = TokenStore(token_path)
        self.credentials_path = (
            Path(credentials_path) if credentials_path else DEFAULT_CLIENT_SECRET
        )

        # Resolve scope names to full URLs
        self.required_scopes = self._resolve_scopes(scopes or ["sheets_readonly"])

        self.redirect_uri = DEFAULT_REDIRECT_URI
        if not client_id or not client_secret:
            client_id, client_secret = self._load_client_credentials()

        self.client_id = client_id
        self.client_secret = client_secret

        self.session = OAuth2Session(
            client_id=self.client_id,
            client_secret=self.client_secret,
            scope=" ".join(self.required_scopes),
            redirect_uri=self.redirect_uri,
            token=self._load_token(),
            update_token=self._save_token,
            token_endpoint=self.TOKEN_URL,
            token_endpoint_auth_method="client_secret_post",
        )

        self.last_refresh: datetime | None = None
        self.refresh_count = 0

    def _resolve_scopes(self, scopes: list[str]) -> list[str]:
        """Resolve scope names to full URLs."""
        resolved = []
        for scope in scopes:
            if scope.startswith("https://"):
                resolved.append(scope)
            elif scope in SCOPES:
                resolved.append(SCOPES[scope])
            else:
                raise ValueError(
                    f"Unknown scope: {scope}. Use full URL or one of: {list(SCOPES.keys())}"
                )
        return resolved

    def _load_client_credentials(self) -> tuple[str, str]:
        """Load OAuth client credentials from file."""
        path = str(self.credentials_path)
        if not self.credentials_path.exists():
            raise CredentialsNotFoundError(path)

        try:
            with open(self.credentials_path) as f:
                creds = json.load(f)
        except (OSError, ValueError) as e:
            raise ConfigReadError(path, str(e)) from e

        # Handle both web and installed app credential formats
        if not isinstance(creds, dict):
            raise ConfigReadError(path, "expected a JSON object")
        if "installed" in creds:
            app_creds = creds["installed"]
        elif "web" in creds:
            app_creds = creds["web"]
        else:
            raise ConfigReadError(path, "expected 'installed' or 'web' key")

        if not app_creds.get("client_id") or not app_creds.get("client_secret"):
            raise ConfigReadError(path, "missing client_id or client_secret")

        redirect_uris = app_creds.get("redirect_uris") or []
        if redirect_uris:
            self.redirect_uri = redirect_uris[0]

        return app_creds["client_id"], app_creds["client_secret"]

    def _load_token(self) -> dict[str, Any] | None:
        """Load token from the cache, or None if it is unusable."""
        try:
            token = self.store.load()
        except TokenError as e:
            logger.info(f"No usable cached token: {e}")
            return None

        current_scopes = set(token.scopes)
        missing = set(self.required_scopes) - current_scopes
        if missing:
            logger.warning(f"Token missing required scopes: {missing}")
            return None

        logger.info(f"Loaded token with scopes: {current_scopes}")
        return token.to_authlib()

    def _save_token(
        self,
        token: dict[str, Any],
        refresh_token: str | None = None,
        access_token: str | None = None,
    ):
        """Save token to the cache (Authlib callback)."""
        if access_token:
            token["access_token"] = access_token
        if refresh_token and not token.get("refresh_token"):
            token["refresh_token"] = refresh_token

        # Google omits scope from some responses; fall back to what was requested
        if not token.get("scope"):
            token["scope"] = " ".join(self.required_scopes)

        cached = OAuthToken.from_authlib(token)
        missing = set(self.required_scopes) - set(cached.scopes)
        if missing:
            raise ScopeMismatchError(missing)

        self.store.save(cached, self.TOKEN_URL, self.client_id, self.client_secret)

        self.last_refresh = datetime.now()
        self.refresh_count += 1

        logger.info(f"Token saved with scopes: {set(cached.scopes)}")

    def is_authorized(self) -> bool:
        """Check if we have a token with the required scopes.

        Returns:
            True if authorized with all required scopes, False otherwise.
        """
        if not self.session.token:
            return False

        token_scopes = set(self.session.token.get("scope", "").split())
        return set(self.required_scopes).issubset(token_scopes)

    def get_authorization_url(self) -> str:
        """Start OAuth authorization flow.

        Returns:
            Authorization URL for user to visit.
        """
        authorization_url, _state = self.session.create_authorization_url(
            self.AUTHORIZE_URL,
            access_type="offline",
            prompt="consent",
        )
        return authorization_url

    def fetch_token(self, code: str) -> dict[str, Any]:
        """Exchange an authorization code for a token and cache it.

        Args:
            code: The authorization code pasted back by the user.

        Returns:
            The fetched OAuth token dict.

        Raises:
            AuthError: If the token endpoint rejects the exchange.
            CacheIOError: If the token cannot be cached.
        """
        try:
            token = self.session.fetch_token(
                self.TOKEN_URL,
                grant_type="authorization_code",
                code=code,
            )
        except (AuthlibBaseError, requests.RequestException) as e:
            raise AuthError(f"Unable to retrieve token from web: {e}") from e

        self.session.token = token
        self._save_token(token)
        return token

    def get_authorized_session(self, code_provider: CodeProvider | None = None) -> OAuth2Session:
        """Return an HTTP session carrying a valid token.

        Uses the cached token when there is one; otherwise runs the
        authorization-code flow once through ``code_provider`` and caches the
        result. The session refreshes expired tokens on its own.

        Args:
            code_provider: Callable taking the authorization URL and returning
                the code. Defaults to prompting on standard input.

        Raises:
            AuthError: If the code cannot be read or exchanged.
            CacheIOError: If the new token cannot be cached.
        """
        if self.is_authorized():
            return self.session

        provider = code_provider or prompt_for_code
        code = provider(self.get_authorization_url())
        if not code:
            raise AuthError("No authorization code provided")

        self.fetch_token(code)
        return self.session

    def get_credentials(self) -> GoogleCredentials:
        """Get Google Credentials object for API client libraries.

        Returns:
            Google Credentials object with current token.

        Raises:
            TokenError: If not authorized or token refresh fails.
        """
        if not self.is_authorized():
            raise TokenError("Not authorized or missing required scopes")

        # Refresh if expired
        expires_at = self.session.token.get("expires_at", 0)
        if expires_at and expires_at < datetime.now().timestamp():
            logger.info("Token expired, refreshing...")
            try:
                self.session.refresh_token(
                    self.TOKEN_URL,
                    refresh_token=self.session.token.get("refresh_token"),
                )
            except (AuthlibBaseError, requests.RequestException) as e:
                raise TokenError(f"Failed to refresh token: {e}") from e

        return GoogleCredentials(
            token=self.session.token["access_token"],
            refresh_token=self.session.token.get("refresh_token"),
            token_uri=self.TOKEN_URL,
            client_id=self.client_id,
            client_secret=self.client_secret,
            scopes=self.required_scopes,
        )

    def build_service(self, service_name: str = "sheets", version: str = "v4"):
        """Build a Google API service with current credentials.

        Args:
            service_name: Name of the service (e.g., 'sheets').
            version: API version (e.g., 'v4').

        Returns:
            Google API service object.
        """
        creds = self.get_credentials()
        return build(service_name, version, credentials=creds, cache_discovery=False)

    def revoke_token(self):
        """Revoke the current token and clear the local cache."""
        if not self.session.token:
            logger.warning("No token to revoke")
            return

        try:
            self.session.post(
                self.REVOKE_URL,
                params={"token": self.session.token["access_token"]},
                withhold_token=True,
            )
        except requests.RequestException as e:
            logger.warning(f"Failed to revoke token remotely: {e}")

        self.store.clear()
        self.session.token = None

        logger.info("Token revoked successfully")

    def get_token_info(self) -> dict[str, Any]:
        """Get information about the current token.

        Returns:
            Dictionary with token status, scopes, expiry, etc.
        """
        if not self.session.token:
            return {"status": "no_token"}

        token = self.session.token
        expires_at = token.get("expires_at", 0)

        if expires_at:
            expires_in = expires_at - datetime.now().timestamp()
            expires_str = str(timedelta(seconds=max(0, int(expires_in))))
            is_expired = expires_at < datetime.now().timestamp()
        else:
            expires_str = "unknown"
            is_expired = False

        return {
            "status": "valid" if not is_expired else "expired",
            "path": str(self.store.path),
            "scopes": token.get("scope", "").split(),
            "expires_in": expires_str,
            "has_refresh_token": bool(token.get("refresh_token")),
            "refresh_count": self.refresh_count,
            "last_refresh": self.last_refresh.isoformat() if self.last_refresh else None,
        }
