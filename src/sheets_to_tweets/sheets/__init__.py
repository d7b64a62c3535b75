"""Google Sheets range reads.

Usage:
    from sheets_to_tweets.google import GoogleOAuth
    from sheets_to_tweets.sheets import SheetsClient

    auth = GoogleOAuth(credentials_path="client_secret.json")
    auth.get_authorized_session()

    rows = SheetsClient(auth).read_range(spreadsheet_id, "Sheet1", "A2:E")
"""

from __future__ import annotations

from sheets_to_tweets.sheets.client import CellGrid, SheetsClient, range_notation
from sheets_to_tweets.sheets.exceptions import EmptyResultError, ReadError, SheetsError

__all__ = [
    "CellGrid",
    "SheetsClient",
    "range_notation",
    "SheetsError",
    "ReadError",
    "EmptyResultError",
]
