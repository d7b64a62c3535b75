"""sheets-to-tweets - post Google Sheets rows as a tweet.

Usage:
    from sheets_to_tweets import SheetsConfig, TwitterConfig, run

    run(
        SheetsConfig(secret_path=Path("client_secret.json"), spreadsheet_id="...",
                     cell_range="A2:E"),
        TwitterConfig.from_env(),
    )
"""

from sheets_to_tweets.config import SheetsConfig, TwitterConfig
from sheets_to_tweets.runner import run

__version__ = "0.1.0"

__all__ = ["SheetsConfig", "TwitterConfig", "run"]
