"""Google Sheets API exceptions."""

from sheets_proxy.google.exceptions import SheetsProxyError


class SheetsAPIError(SheetsProxyError):
    """Raised when the Sheets API call fails."""

    def __init__(self, message: str, status_code: int | None = None):
        self.status_code = status_code
        super().__init__(message)
