"""Secret Manager access."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from google.cloud import secretmanager

from sheets_proxy.google.exceptions import SecretNotConfiguredError
from sheets_proxy.google.resolver import AuthorizationMechanism

logger = logging.getLogger(__name__)


def secret_version_name(project: str, secret: str, version: str = "latest") -> str:
    """Build a secret version resource name.

    A ``secret`` that is already a full ``projects/...`` name is returned as-is
    when it names a version, or gets ``/versions/{version}`` appended otherwise.
    """
    if secret.startswith("projects/"):
        if "/versions/" in secret:
            return secret
        return f"{secret}/versions/{version}"
    return f"projects/{project}/secrets/{secret}/versions/{version}"


def fetch_secret(
    mechanism: AuthorizationMechanism,
    name: str,
    client_factory: Callable[..., Any] = secretmanager.SecretManagerServiceClient,
) -> bytes:
    """Read one secret version's payload.

    Args:
        mechanism: Authorization for the Secret Manager client.
        name: Secret version resource name.
        client_factory: Builds the Secret Manager client (tests swap this).

    Returns:
        The raw payload bytes.

    Raises:
        SecretNotConfiguredError: If ``name`` is empty.
        google.api_core.exceptions.GoogleAPICallError: Propagated unmodified.
    """
    if not name:
        raise SecretNotConfiguredError()

    with client_factory(credentials=mechanism.credentials) as client:
        response = client.access_secret_version(request={"name": name})
    logger.info(f"Read secret version {name}")
    return response.payload.data
