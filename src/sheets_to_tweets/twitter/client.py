"""Twitter status publisher with OAuth 1.0a request signing.

Posting uses its own credential set (consumer key/secret plus access
token/secret), unrelated to the Google OAuth flow.
"""

import logging
from typing import Any

import httpx
from authlib.integrations.httpx_client import OAuth1Client

from sheets_to_tweets.config import TwitterConfig
from sheets_to_tweets.twitter.exceptions import PostError, PublisherConfigError

logger = logging.getLogger(__name__)


class TwitterPublisher:
    """Posts status updates to Twitter (X).

    Example:
        >>> publisher = TwitterPublisher(TwitterConfig.from_env())
        >>> publisher.post("some cool data: [[a b]]")
        {'id': '1850000000000000000', 'text': 'some cool data: [[a b]]'}
    """

    BASE_URL = "https://api.twitter.com/2"

    def __init__(self, config: TwitterConfig, timeout: float = 30.0, **client_kwargs: Any):
        """Initialize the publisher.

        Args:
            config: OAuth 1.0a credentials.
            timeout: Request timeout in seconds.
            **client_kwargs: Extra httpx client options (e.g. ``transport``).

        Raises:
            PublisherConfigError: If any credential is empty.
        """
        missing = config.missing()
        if missing:
            raise PublisherConfigError(missing)

        self._client = OAuth1Client(
            client_id=config.consumer_key,
            client_secret=config.consumer_secret,
            token=config.access_token,
            token_secret=config.access_secret,
            # JSON bodies are sent but left out of the signature base string
            force_include_body=True,
            timeout=timeout,
            **client_kwargs,
        )

    def post(self, status: str, **params: Any) -> dict[str, Any]:
        """Publish a status update.

        Args:
            status: Text of the update.
            **params: Extra fields for the request body (e.g. ``reply``).

        Returns:
            The created tweet's data (``id`` and ``text``).

        Raises:
            PostError: If the request fails or the API rejects it.
        """
        url = f"{self.BASE_URL}/tweets"
        payload = {"text": status, **params}

        try:
            response = self._client.post(url, json=payload)
        except httpx.HTTPError as e:
            raise PostError(f"Request failed: {e}") from e

        if response.status_code >= 400:
            raise PostError(
                f"API error: {response.text}",
                status_code=response.status_code,
            )

        try:
            data = response.json().get("data", {})
        except ValueError as e:
            raise PostError(
                f"Unexpected response: {response.text}",
                status_code=response.status_code,
            ) from e
        logger.info(f"Posted status {data.get('id')}")
        return data

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "TwitterPublisher":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
