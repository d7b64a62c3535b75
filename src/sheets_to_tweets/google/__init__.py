"""Google OAuth authentication and token caching."""

from sheets_to_tweets.google.exceptions import (
    AuthError,
    CacheIOError,
    ConfigReadError,
    CredentialsNotFoundError,
    GoogleAuthError,
    ScopeMismatchError,
    TokenDecodeError,
    TokenError,
    TokenNotFoundError,
)
from sheets_to_tweets.google.oauth import GoogleOAuth, prompt_for_code
from sheets_to_tweets.google.token_store import OAuthToken, TokenStore

__all__ = [
    "GoogleOAuth",
    "OAuthToken",
    "TokenStore",
    "prompt_for_code",
    "GoogleAuthError",
    "ConfigReadError",
    "CredentialsNotFoundError",
    "AuthError",
    "TokenError",
    "TokenNotFoundError",
    "TokenDecodeError",
    "CacheIOError",
    "ScopeMismatchError",
]
