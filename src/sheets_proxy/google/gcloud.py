"""Access tokens from the locally configured gcloud CLI.

Useful on developer machines where ``gcloud auth login`` has been run but no
application default credentials exist. Tokens are read from::

    gcloud config config-helper --format=json

which prints the active account's access token and its expiry, refreshing it
through gcloud when needed.
"""

import json
import logging
import subprocess
from datetime import datetime, timezone
from typing import Any

from google.auth import credentials

from sheets_proxy.google.exceptions import GcloudError

logger = logging.getLogger(__name__)


def _parse_expiry(value: str | None) -> datetime | None:
    """Convert gcloud's ISO expiry to the naive UTC datetime google.auth expects.

    Raises:
        GcloudError: If the expiry is not an ISO 8601 timestamp.
    """
    if not value:
        return None
    try:
        dt = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except (AttributeError, ValueError) as e:
        raise GcloudError(f"Invalid token_expiry from gcloud: {value!r}") from e
    if dt.tzinfo is not None:
        dt = dt.astimezone(timezone.utc).replace(tzinfo=None)
    return dt


def read_config_helper(command: str = "gcloud") -> dict[str, Any]:
    """Run ``gcloud config config-helper`` and return its JSON output.

    Raises:
        GcloudError: If gcloud is not installed, fails, or prints invalid JSON.
    """
    try:
        result = subprocess.run(
            [command, "config", "config-helper", "--format=json"],
            capture_output=True,
            text=True,
            check=True,
        )
    except FileNotFoundError as e:
        raise GcloudError(f"{command} not found on PATH") from e
    except subprocess.CalledProcessError as e:
        raise GcloudError(f"{command} config-helper failed: {e.stderr.strip()}") from e

    try:
        data = json.loads(result.stdout)
    except json.JSONDecodeError as e:
        raise GcloudError(f"Invalid JSON from {command} config-helper: {e}") from e

    if not isinstance(data, dict):
        raise GcloudError(f"Unexpected output from {command} config-helper")
    return data


class GcloudCredentials(credentials.Credentials):
    """Credentials backed by the active gcloud account.

    Each refresh shells out to gcloud, so tokens follow whatever account
    ``gcloud auth`` currently has active.
    """

    def __init__(self, command: str = "gcloud"):
        super().__init__()
        self._command = command
        self.account: str | None = None
        self.project_id: str | None = None

    def refresh(self, request):
        data = read_config_helper(self._command)

        credential = data.get("credential") or {}
        token = credential.get("access_token")
        if not token:
            raise GcloudError("gcloud has no active credentials; run 'gcloud auth login'")

        core = data.get("configuration", {}).get("properties", {}).get("core", {})
        self.account = core.get("account")
        self.project_id = core.get("project")

        self.token = token
        self.expiry = _parse_expiry(credential.get("token_expiry"))
        logger.debug(f"Refreshed gcloud token for {self.account}")


def gcloud_token_source(command: str = "gcloud") -> GcloudCredentials:
    """Create gcloud-backed credentials and fetch a first token.

    The eager refresh makes a missing or logged-out CLI fail here instead of
    on the first API call.

    Raises:
        GcloudError: If no token can be obtained.
    """
    creds = GcloudCredentials(command=command)
    creds.refresh(None)
    logger.info(f"Using gcloud credentials for account={creds.account}")
    return creds
