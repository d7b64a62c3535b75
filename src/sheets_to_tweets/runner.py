"""One pass of sheets-to-tweets: authorize, read, format, publish, mark.

Any failure propagates to the caller and aborts the pass. Nothing outside the
token cache is mutated before the publish call, so there is nothing to roll
back.
"""

from __future__ import annotations

import logging
from pathlib import Path

from sheets_to_tweets.config import SheetsConfig, TwitterConfig
from sheets_to_tweets.google import GoogleOAuth
from sheets_to_tweets.google.oauth import CodeProvider
from sheets_to_tweets.sheets import SheetsClient
from sheets_to_tweets.status import format_status, mark_complete
from sheets_to_tweets.twitter import TwitterPublisher

logger = logging.getLogger(__name__)


def run(
    sheets_config: SheetsConfig,
    twitter_config: TwitterConfig,
    code_provider: CodeProvider | None = None,
    token_path: str | Path | None = None,
    dry_run: bool = False,
) -> str:
    """Read the configured range and post it as a status.

    Args:
        sheets_config: Spreadsheet to read and client secret file.
        twitter_config: Credentials for the posting account.
        code_provider: Supplies the authorization code when no token is cached.
        token_path: Token cache override. Defaults to ~/.credentials/sheets-to-tweets.
        dry_run: Log the status instead of posting it.

    Returns:
        The status message.

    Raises:
        ConfigReadError: Client secret file missing or malformed.
        AuthError: Authorization code could not be read or exchanged.
        CacheIOError: New token could not be cached.
        ReadError: Spreadsheet read failed.
        EmptyResultError: Range held no rows.
        PublisherConfigError: Twitter credentials incomplete.
        PostError: Status update rejected.
    """
    auth = GoogleOAuth(
        credentials_path=sheets_config.secret_path,
        token_path=token_path,
    )
    publisher = None if dry_run else TwitterPublisher(twitter_config)

    auth.get_authorized_session(code_provider)
    logger.info("Authorized for Google Sheets")

    rows = SheetsClient(auth).read_range(
        sheets_config.spreadsheet_id,
        sheets_config.sheet_name,
        sheets_config.cell_range,
    )
    status = format_status(rows)

    if publisher is None:
        logger.info(f"Dry run, would have tweeted: {status}")
        return status

    with publisher:
        publisher.post(status)

    mark_complete()
    return status
