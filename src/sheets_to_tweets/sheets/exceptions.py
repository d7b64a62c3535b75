"""Google Sheets read exceptions."""


class SheetsError(Exception):
    """Base exception for spreadsheet reads."""

    pass


class ReadError(SheetsError):
    """Raised when the values read call fails."""

    def __init__(self, spreadsheet_id: str, range_notation: str, reason: str):
        self.spreadsheet_id = spreadsheet_id
        self.range_notation = range_notation
        super().__init__(
            f"Failed to read sheet with id={spreadsheet_id!r} "
            f"and range={range_notation!r}: {reason}"
        )


class EmptyResultError(SheetsError):
    """Raised when a range read returns no rows."""

    def __init__(self, spreadsheet_id: str, range_notation: str):
        self.spreadsheet_id = spreadsheet_id
        self.range_notation = range_notation
        super().__init__(
            f"No data found from spreadsheet {spreadsheet_id!r} in range {range_notation!r}"
        )
