"""Google Sheets API client implementation."""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from typing import Any

from google.auth import exceptions as ga_exceptions
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from sheets_proxy.sheets.exceptions import SheetsAPIError

logger = logging.getLogger(__name__)


def normalize_values(values: list[list[Any]]) -> list[list[str]]:
    """Render every cell as a string.

    The API returns strings for formatted values, but numbers and booleans
    show up with UNFORMATTED_VALUE. Strings pass through, empty cells become
    ``""`` and anything else becomes its JSON text (``1.5`` -> ``"1.5"``,
    ``True`` -> ``"true"``). Rows keep their length; nothing is padded.
    """
    rows = []
    for row in values:
        cells = []
        for cell in row:
            if isinstance(cell, str):
                cells.append(cell)
            elif cell is None:
                cells.append("")
            else:
                cells.append(json.dumps(cell))
        rows.append(cells)
    return rows



class SheetsClient:
    """Read-only Google Sheets client on top of an authorized session.

    The session's credentials sign the Sheets API calls. A client holds its
    own API service object, so create one per request thread.

    Usage:
        client = SheetsClient(session)
        values = client.read_range(spreadsheet_id, "Sheet1!A1:C10")
    """

    def __init__(
        self,
        session: Any,
        service_factory: Callable[..., Any] = build,
    ) -> None:
        """Initialize Sheets client.

        Args:
            session: A ``google.auth.transport.requests.AuthorizedSession``.
            service_factory: Builds the API service (tests swap this).
        """
        self._session = session
        self._service_factory = service_factory
        self._service: Any = None

    def _get_service(self) -> Any:
        """Get or create Sheets API service."""
        if self._service is None:
            self._service = self._service_factory(
                "sheets", "v4", credentials=self._session.credentials, cache_discovery=False
            )
        return self._service

    def read_range(
        self,
        spreadsheet_id: str,
        range_notation: str,
        value_render_option: str = "FORMATTED_VALUE",
    ) -> list[list[Any]]:
        """Read values from a range.

        Args:
            spreadsheet_id: Spreadsheet ID.
            range_notation: A1 notation (e.g., "'Form responses 1'!A2:K").
            value_render_option: How to render values ("FORMATTED_VALUE", "UNFORMATTED_VALUE", "FORMULA").

        Returns:
            2D list of cell values. Trailing empty cells and rows are omitted by the API.

        Raises:
            SheetsAPIError: If the call fails or the API returns something other
                than a value range.
        """
        service = self._get_service()
        try:
            result = (
                service.spreadsheets()
                .values()
                .get(
                    spreadsheetId=spreadsheet_id,
                    range=range_notation,
                    valueRenderOption=value_render_option,
                )
                .execute()
            )
        except HttpError as e:
            logger.error(f"spreadsheets.values.get {spreadsheet_id} {range_notation}: {e}")
            raise SheetsAPIError(
                f"Sheets API error: {e.resp.status}", status_code=e.resp.status
            ) from e
        except (ga_exceptions.GoogleAuthError, OSError) as e:
            logger.error(f"spreadsheets.values.get: {e}")
            raise SheetsAPIError(f"Sheets request failed: {e}") from e

        if not isinstance(result, dict):
            raise SheetsAPIError(f"Unexpected Sheets API response: {type(result).__name__}")
        values = result.get("values", [])
        if not isinstance(values, list) or not all(isinstance(row, list) for row in values):
            raise SheetsAPIError("Unexpected Sheets API response: values is not a list of rows")
        return values
