"""CLI for sheets-to-tweets.

Usage:
    sheets-to-tweets --sheet_id ID --read_range A2:E      # Read range, post status
    sheets-to-tweets --sheet_id ID --read_range A2:E --dry-run
    sheets-to-tweets --token-status                        # Show cached token status
    sheets-to-tweets --revoke                              # Revoke cached token

Twitter credentials come from the --twitter_* flags or the TWITTER_CONSUMER_KEY,
TWITTER_CONSUMER_SECRET, TWITTER_ACCESS_TOKEN and TWITTER_ACCESS_SECRET
variables (a ./.env file is loaded on startup).
"""

from __future__ import annotations

import argparse
import functools
import logging
import sys
from pathlib import Path

from sheets_to_tweets.config import (
    DEFAULT_CLIENT_SECRET,
    DEFAULT_SHEET_NAME,
    SheetsConfig,
    TwitterConfig,
    load_env_file,
)
from sheets_to_tweets.google import GoogleAuthError, GoogleOAuth, prompt_for_code
from sheets_to_tweets.runner import run
from sheets_to_tweets.sheets import SheetsError
from sheets_to_tweets.twitter import TwitterError

logger = logging.getLogger(__name__)


def token_status(secret_path: Path, token_path: Path | None) -> int:
    """Show cached token status."""
    auth = GoogleOAuth(credentials_path=secret_path, token_path=token_path)
    info = auth.get_token_info()

    if info["status"] == "no_token":
        print(f"No token found at {auth.store.path} - run once to authorize")
        return 1

    print(f"Path       : {info['path']}")
    print(f"Status     : {info['status']}")
    print(f"Scopes     : {', '.join(info.get('scopes', []))}")
    print(f"Expires in : {info.get('expires_in', 'unknown')}")
    print(f"Refresh    : {'yes' if info['has_refresh_token'] else 'no'}")
    return 0


def revoke(secret_path: Path, token_path: Path | None) -> int:
    """Revoke the cached token and delete it."""
    auth = GoogleOAuth(credentials_path=secret_path, token_path=token_path)
    auth.revoke_token()
    print("Token revoked and local cache cleared")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sheets-to-tweets",
        description="Read rows from a Google Sheet and post them as a tweet",
    )

    # Sheets flags
    parser.add_argument(
        "--client_secret_file",
        type=Path,
        default=DEFAULT_CLIENT_SECRET,
        help="the path of the Sheets client secret file (default: ./client_secret.json)",
    )
    parser.add_argument("--sheet_id", help="the id of the spreadsheet to read")
    parser.add_argument(
        "--sheet_name",
        default=DEFAULT_SHEET_NAME,
        help="the name of the sheet from which to read (default: Sheet1)",
    )
    parser.add_argument("--read_range", help="the range to read from the sheet (e.g. 'A2:E')")
    parser.add_argument(
        "--token_file",
        type=Path,
        default=None,
        help="cached OAuth token path (default: ~/.credentials/sheets-to-tweets)",
    )

    # Twitter flags
    parser.add_argument("--twitter_consumer_key", help="the consumer key for the Twitter account")
    parser.add_argument(
        "--twitter_consumer_secret", help="the consumer secret for the Twitter account"
    )
    parser.add_argument("--twitter_access_token", help="the access token for the Twitter account")
    parser.add_argument(
        "--twitter_access_secret", help="the access token secret for the Twitter account"
    )

    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Log the status instead of posting it",
    )
    parser.add_argument(
        "--no-browser",
        action="store_true",
        help="Don't open browser automatically during authorization",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    actions = parser.add_mutually_exclusive_group()
    actions.add_argument(
        "--token-status", action="store_true", help="Show cached token status and exit"
    )
    actions.add_argument("--revoke", action="store_true", help="Revoke cached token and exit")

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv if argv is not None else sys.argv[1:])

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    load_env_file()

    try:
        if args.token_status:
            return token_status(args.client_secret_file, args.token_file)
        if args.revoke:
            return revoke(args.client_secret_file, args.token_file)

        if not args.sheet_id or not args.read_range:
            parser.error("--sheet_id and --read_range are required")

        sheets_config = SheetsConfig(
            secret_path=args.client_secret_file,
            spreadsheet_id=args.sheet_id,
            sheet_name=args.sheet_name,
            cell_range=args.read_range,
        )
        twitter_config = TwitterConfig.from_env(
            consumer_key=args.twitter_consumer_key,
            consumer_secret=args.twitter_consumer_secret,
            access_token=args.twitter_access_token,
            access_secret=args.twitter_access_secret,
        )

        run(
            sheets_config,
            twitter_config,
            code_provider=functools.partial(prompt_for_code, open_browser=not args.no_browser),
            token_path=args.token_file,
            dry_run=args.dry_run,
        )
    except (GoogleAuthError, SheetsError, TwitterError) as e:
        logger.critical(str(e))
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
