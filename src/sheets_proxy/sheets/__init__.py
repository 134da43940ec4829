"""Google Sheets values API over an authorized session.

Usage:
    from sheets_proxy.sheets import SheetsClient

    client = SheetsClient(session)
    rows = client.read_range(spreadsheet_id, "'Sheet1'!A1:C10")
"""

from __future__ import annotations

from sheets_proxy.sheets.client import SheetsClient, normalize_values
from sheets_proxy.sheets.exceptions import SheetsAPIError

__all__ = ["SheetsClient", "SheetsAPIError", "normalize_values"]
