"""Google authentication exceptions."""


class GoogleAuthError(Exception):
    """Base exception for Google authentication errors."""

    pass


class ConfigReadError(GoogleAuthError):
    """Raised when the OAuth client secret file cannot be read or parsed."""

    def __init__(self, path: str, reason: str):
        self.path = path
        super().__init__(f"Failed to read client secret file at {path}: {reason}")


class CredentialsNotFoundError(ConfigReadError):
    """Raised when OAuth client secret file is not found."""

    def __init__(self, path: str):
        self.path = path
        GoogleAuthError.__init__(
            self,
            f"Client secret file not found at {path}. "
            "Please download OAuth credentials from Google Cloud Console.",
        )


class AuthError(GoogleAuthError):
    """Raised when the interactive authorization-code exchange fails."""

    pass


class TokenError(GoogleAuthError):
    """Raised when there's an issue with the OAuth token."""

    pass


class TokenNotFoundError(TokenError):
    """Raised when no cached token exists."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"No cached token at {path}")


class TokenDecodeError(TokenError):
    """Raised when the cached token file is corrupt."""

    def __init__(self, path: str, reason: str):
        self.path = path
        super().__init__(f"Cached token at {path} is unreadable: {reason}")


class CacheIOError(GoogleAuthError):
    """Raised when the token cache cannot be written."""

    def __init__(self, path: str, reason: str):
        self.path = path
        super().__init__(f"Unable to cache OAuth token at {path}: {reason}")


class ScopeMismatchError(GoogleAuthError):
    """Raised when token scopes don't match required scopes."""

    def __init__(self, missing_scopes: set[str]):
        self.missing_scopes = missing_scopes
        super().__init__(f"Token missing required scopes: {missing_scopes}")
