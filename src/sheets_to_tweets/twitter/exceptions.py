"""Twitter publishing exceptions."""


class TwitterError(Exception):
    """Base exception for Twitter publishing errors."""

    pass


class PublisherConfigError(TwitterError):
    """Raised when OAuth 1.0a credentials are incomplete."""

    def __init__(self, missing: list[str]):
        self.missing = missing
        super().__init__(
            f"Twitter credentials missing: {', '.join(missing)}. "
            "Pass --twitter_* flags or set TWITTER_* env vars."
        )


class PostError(TwitterError):
    """Raised when the status update is rejected or cannot be sent."""

    def __init__(self, message: str, status_code: int | None = None):
        self.status_code = status_code
        super().__init__(message)
