"""Twitter status publishing."""

from sheets_to_tweets.twitter.client import TwitterPublisher
from sheets_to_tweets.twitter.exceptions import PostError, PublisherConfigError, TwitterError

__all__ = [
    "TwitterPublisher",
    "TwitterError",
    "PostError",
    "PublisherConfigError",
]
