"""Google Sheets API client implementation."""

from __future__ import annotations

import logging
from typing import Any

import httplib2
from google.auth.exceptions import GoogleAuthError as GoogleTransportError
from googleapiclient.errors import HttpError

from sheets_to_tweets.google import GoogleOAuth
from sheets_to_tweets.sheets.exceptions import EmptyResultError, ReadError

logger = logging.getLogger(__name__)

CellGrid = list[list[Any]]


def range_notation(sheet_name: str, cell_range: str) -> str:
    """Join a sheet name and cell range into an A1 range, e.g. ``Sheet1!A2:E``."""
    return f"{sheet_name}!{cell_range}"


class SheetsClient:
    """Read-only Google Sheets client.

    Usage:
        auth = GoogleOAuth(credentials_path="client_secret.json")
        auth.get_authorized_session()

        client = SheetsClient(auth)
        rows = client.read_range(spreadsheet_id, "Sheet1", "A2:E")

    Note:
        ``auth`` must already hold a token; call
        ``GoogleOAuth.get_authorized_session`` first.
    """

    def __init__(self, auth: GoogleOAuth | None = None, service: Any = None) -> None:
        """Initialize Sheets client.

        Args:
            auth: Authorized OAuth manager used to build the API service.
            service: Prebuilt Sheets v4 service (skips ``auth``).
        """
        if auth is None and service is None:
            raise ValueError("SheetsClient needs an auth manager or a service")
        self._auth = auth
        self._service = service

    def _get_service(self) -> Any:
        """Get or create Sheets API service."""
        if self._service is None:
            self._service = self._auth.build_service("sheets", "v4")
        return self._service

    def read_range(
        self,
        spreadsheet_id: str,
        sheet_name: str,
        cell_range: str,
        value_render_option: str = "FORMATTED_VALUE",
    ) -> CellGrid:
        """Read values from a range.

        Args:
            spreadsheet_id: Spreadsheet ID.
            sheet_name: Name of the sheet (tab) to read.
            cell_range: Cell range within the sheet (e.g., "A2:E").
            value_render_option: How to render values ("FORMATTED_VALUE", "UNFORMATTED_VALUE", "FORMULA").

        Returns:
            2D list of cell values, rows of columns.

        Raises:
            ReadError: If the API call fails.
            EmptyResultError: If the range holds no rows.
        """
        notation = range_notation(sheet_name, cell_range)
        service = self._get_service()
        try:
            result = (
                service.spreadsheets()
                .values()
                .get(
                    spreadsheetId=spreadsheet_id,
                    range=notation,
                    valueRenderOption=value_render_option,
                )
                .execute()
            )
        except (HttpError, GoogleTransportError, httplib2.HttpLib2Error, OSError) as e:
            raise ReadError(spreadsheet_id, notation, str(e)) from e

        values = result.get("values", [])
        if not values:
            raise EmptyResultError(spreadsheet_id, notation)

        logger.info(f"Read {len(values)} rows from {notation}")
        return values
