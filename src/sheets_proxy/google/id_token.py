"""Mint ID tokens for calling a deployed proxy.

Deployed behind IAM, the proxy only accepts requests carrying a Google-signed
ID token whose audience is the proxy URL. This helper asks the IAM Credentials
API to sign one on behalf of a service account. It is client tooling and is
never used while serving requests.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from sheets_proxy.google.exceptions import IDTokenError

logger = logging.getLogger(__name__)


def generate_id_token(
    credentials: Any,
    service_account_email: str,
    audience: str,
    include_email: bool = True,
    service_factory: Callable[..., Any] = build,
) -> str:
    """Generate an ID token for ``service_account_email`` with the given audience.

    The caller's credentials need ``iam.serviceAccounts.getOpenIdToken`` on the
    target service account. Tokens are valid for one hour.

    Args:
        credentials: Credentials of the caller.
        service_account_email: Account the token is issued for.
        audience: Intended recipient, usually the proxy URL.
        include_email: Include the ``email`` claim in the token.
        service_factory: Builds the API service (tests swap this).

    Returns:
        The signed ID token.

    Raises:
        IDTokenError: If the API call fails or returns no token.
    """
    service = service_factory(
        "iamcredentials", "v1", credentials=credentials, cache_discovery=False
    )
    name = f"projects/-/serviceAccounts/{service_account_email}"
    body = {"audience": audience, "delegates": [], "includeEmail": include_email}

    try:
        result = (
            service.projects().serviceAccounts().generateIdToken(name=name, body=body).execute()
        )
    except HttpError as e:
        logger.error(f"GenerateIdToken failed for {service_account_email}: {e}")
        raise IDTokenError(f"Failed to generate ID token: {e}") from e

    token = result.get("token")
    if not token:
        raise IDTokenError(f"No ID token returned for {service_account_email}")
    return token
