"""Google Service Account authentication from an in-memory key.

The proxy never reads key files from disk. The key document arrives as the
payload of a Secret Manager secret and is parsed here.

Example:
    >>> auth = GoogleServiceAccount(json.loads(payload))
    >>> auth.email
    'worker@my-project.iam.gserviceaccount.com'
    >>> session = auth.authorized_session()
"""

from __future__ import annotations

import logging
from typing import Any

from google.auth.transport.requests import AuthorizedSession
from google.oauth2 import service_account

from sheets_proxy.google.exceptions import InvalidCredentialPayloadError
from sheets_proxy.google.scopes import REQUIRED_SCOPES, resolve_scopes

logger = logging.getLogger(__name__)


class GoogleServiceAccount:
    """Google Service Account authentication.

    Uses a service account key document for server-to-server authentication.
    No user interaction required.

    Note: To read a spreadsheet, it must be shared with the service account
    email address.
    """

    def __init__(
        self,
        key_data: dict[str, Any],
        scopes: list[str] | None = None,
    ):
        """Initialize service account authentication.

        Args:
            key_data: Parsed service account key document.
            scopes: List of scope names (e.g., ["sheets", "drive"]) or full URLs.
                   If None, defaults to the proxy's required scopes.

        Raises:
            InvalidCredentialPayloadError: If the document is not a usable
                service account key.
        """
        if key_data.get("type") != "service_account":
            raise InvalidCredentialPayloadError(
                f"Invalid key: expected type 'service_account', got '{key_data.get('type')}'"
            )

        self.scopes = resolve_scopes(scopes or list(REQUIRED_SCOPES))
        self.client_email = key_data.get("client_email", "")
        self.project_id = key_data.get("project_id", "")

        try:
            self._credentials = service_account.Credentials.from_service_account_info(
                key_data,
                scopes=self.scopes,
            )
        except (ValueError, KeyError) as e:
            raise InvalidCredentialPayloadError(f"Invalid service account key: {e}") from e

        logger.info(f"Service account initialized: {self.client_email}")

    @property
    def email(self) -> str:
        """Get the service account email address.

        Share your spreadsheets with this email to grant access.
        """
        return self.client_email

    def authorized_session(self) -> AuthorizedSession:
        """Get an HTTP session that signs every request as this account."""
        return AuthorizedSession(self._credentials)

    def get_info(self) -> dict:
        """Get information about the service account.

        Returns:
            Dictionary with service account details.
        """
        return {
            "type": "service_account",
            "email": self.client_email,
            "project_id": self.project_id,
            "scopes": self.scopes,
        }
