"""Build the proxy's authenticated Sheets session from a secret."""

from __future__ import annotations

import logging
from collections.abc import Callable

from google.auth.transport.requests import AuthorizedSession

from sheets_proxy.google.payload import authenticated_client
from sheets_proxy.google.resolver import AuthorizationMechanism, resolve
from sheets_proxy.secrets import fetch_secret

logger = logging.getLogger(__name__)


def build_client(
    secret_name: str,
    resolver: Callable[[], AuthorizationMechanism] = resolve,
    fetcher: Callable[[AuthorizationMechanism, str], bytes] = fetch_secret,
    interpreter: Callable[[bytes], AuthorizedSession] = authenticated_client,
) -> AuthorizedSession:
    """Resolve the proxy's identity, read the secret and build a session from it.

    Args:
        secret_name: Secret version resource name holding the credential payload.
        resolver: Finds credentials allowed to read the secret.
        fetcher: Reads the secret payload.
        interpreter: Turns the payload into a session.

    Returns:
        Session authorized as the identity stored in the secret.
    """
    logger.info("setting up a client")

    mechanism = resolver()
    payload = fetcher(mechanism, secret_name)
    return interpreter(payload)
