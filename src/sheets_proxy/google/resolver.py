"""Credential resolution for talking to Secret Manager.

The proxy's own identity (the one allowed to read the secret) is found by
trying each source in order; the first one that produces credentials wins:

1. Application default credentials (``google.auth.default``)
2. The active gcloud CLI account
3. The Compute Engine metadata server

Resolution is not cached. It runs every time a client is built.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass

import google.auth
from google.auth import compute_engine
from google.auth import credentials as ga_credentials
from google.auth import exceptions as ga_exceptions
from google.auth.transport.requests import Request

from sheets_proxy.google.exceptions import CredentialResolutionError
from sheets_proxy.google.gcloud import gcloud_token_source
from sheets_proxy.google.scopes import REQUIRED_SCOPES

logger = logging.getLogger(__name__)

BOUND_CREDENTIALS = "credentials"
TOKEN_SOURCE = "token_source"


@dataclass(frozen=True)
class AuthorizationMechanism:
    """How the proxy authorizes its calls to Secret Manager.

    ``kind`` is ``"credentials"`` when the credentials came bound to a project
    (application default credentials), or ``"token_source"`` when they only
    know how to mint bearer tokens.
    """

    kind: str
    credentials: ga_credentials.Credentials
    source: str
    project_id: str | None = None


Strategy = Callable[[], AuthorizationMechanism]


def default_credentials() -> AuthorizationMechanism:
    """Application default credentials scoped to the proxy's scopes."""
    creds, project_id = google.auth.default(scopes=list(REQUIRED_SCOPES))
    # google.auth raises when nothing is found, so a returned object is the success signal
    if creds is None:
        raise ga_exceptions.DefaultCredentialsError("No default credentials found")
    logger.info(f"Found google credentials for project: {project_id}")
    return AuthorizationMechanism(
        kind=BOUND_CREDENTIALS,
        credentials=creds,
        source="default",
        project_id=project_id,
    )


def gcloud_credentials() -> AuthorizationMechanism:
    """Token source backed by the gcloud CLI."""
    creds = gcloud_token_source()
    return AuthorizationMechanism(
        kind=TOKEN_SOURCE,
        credentials=creds,
        source="gcloud",
        project_id=creds.project_id,
    )


def metadata_credentials() -> AuthorizationMechanism:
    """Token source backed by the Compute Engine metadata server.

    A first token is fetched up front, so off Google Cloud this fails with
    ``RefreshError`` instead of returning credentials that can never work.
    """
    creds = compute_engine.Credentials(scopes=list(REQUIRED_SCOPES))
    creds.refresh(Request())
    return AuthorizationMechanism(
        kind=TOKEN_SOURCE,
        credentials=creds,
        source="metadata",
    )


DEFAULT_STRATEGIES: tuple[Strategy, ...] = (
    default_credentials,
    gcloud_credentials,
    metadata_credentials,
)


def resolve(strategies: Sequence[Strategy] | None = None) -> AuthorizationMechanism:
    """Return the first authorization mechanism a strategy produces.

    Args:
        strategies: Ordered credential sources. Defaults to ``DEFAULT_STRATEGIES``.

    Returns:
        The mechanism from the first strategy that does not raise.

    Raises:
        CredentialResolutionError: If every strategy fails.
    """
    if strategies is None:
        strategies = DEFAULT_STRATEGIES

    failures: list[tuple[str, Exception]] = []
    for strategy in strategies:
        name = getattr(strategy, "__name__", repr(strategy))
        try:
            mechanism = strategy()
        except Exception as e:
            logger.info(f"Credential source {name} unavailable: {e}")
            failures.append((name, e))
            continue
        logger.info(f"Using {mechanism.kind} from {mechanism.source}")
        return mechanism

    raise CredentialResolutionError(failures)
