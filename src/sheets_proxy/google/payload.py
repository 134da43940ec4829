"""Turn a credential payload from Secret Manager into an authenticated session.

Payload shapes are tried in order and the first that parses wins:

1. Service account key (``"type": "service_account"``)
2. Any other credentials JSON ``google.auth`` understands: authorized_user,
   external_account (workload identity federation),
   impersonated_service_account, ...

OAuth client configs (``installed`` / ``web``) need an interactive consent
flow and are not accepted.

Parsing never fetches a token. Expired or revoked credentials fail later,
on the first API call.
"""

import json
import logging
from typing import Any

import google.auth
from google.auth import exceptions as ga_exceptions
from google.auth.transport.requests import AuthorizedSession

from sheets_proxy.google.exceptions import InvalidCredentialPayloadError
from sheets_proxy.google.scopes import REQUIRED_SCOPES
from sheets_proxy.google.service_account import GoogleServiceAccount

logger = logging.getLogger(__name__)


def _load_payload(payload: bytes) -> dict[str, Any]:
    try:
        data = json.loads(payload)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise InvalidCredentialPayloadError(f"invalid json file: {e}") from e
    if not isinstance(data, dict):
        raise InvalidCredentialPayloadError("invalid json file: expected a JSON object")
    return data


def authenticated_client(payload: bytes) -> AuthorizedSession:
    """Build an authorized HTTP session from a credential payload.

    Args:
        payload: Raw JSON bytes read from Secret Manager.

    Returns:
        A ``requests`` session that attaches a bearer token to every request.

    Raises:
        InvalidCredentialPayloadError: If the payload matches no known shape.
    """
    data = _load_payload(payload)

    # Service account first: it tells us which identity the proxy runs as
    if data.get("type") == "service_account":
        try:
            account = GoogleServiceAccount(data)
        except InvalidCredentialPayloadError as e:
            logger.info(f"Payload is not a usable service account key: {e}")
        else:
            info = account.get_info()
            logger.info(
                f"using credential file for authentication; email={info['email']} "
                f"project_id={info['project_id']}"
            )
            return account.authorized_session()

    try:
        creds, project_id = google.auth.load_credentials_from_dict(
            data, scopes=list(REQUIRED_SCOPES)
        )
    except (ga_exceptions.GoogleAuthError, ValueError) as e:
        logger.warning(f"google.auth.load_credentials_from_dict: {e}")
        raise InvalidCredentialPayloadError(f"invalid json file: {e}") from e

    logger.info(f"using credential payload for project_id={project_id}")
    return AuthorizedSession(creds)
