"""Process-wide holder for the authenticated session."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable

from google.auth.transport.requests import AuthorizedSession

logger = logging.getLogger(__name__)


class ClientCache:
    """Holds at most one authenticated session for the life of the process.

    The session is built on first use. Concurrent first callers wait on a lock
    so the build runs once. A failed build leaves the cache empty and the next
    call tries again. There is no invalidation: a session whose credentials
    stop working stays cached until the process restarts.
    """

    def __init__(self, builder: Callable[[], AuthorizedSession]):
        self._builder = builder
        self._client: AuthorizedSession | None = None
        self._lock = threading.Lock()

    @property
    def client(self) -> AuthorizedSession | None:
        """The cached session, or None if it has not been built yet."""
        return self._client

    @property
    def is_ready(self) -> bool:
        return self._client is not None

    def get(self) -> AuthorizedSession:
        """Return the cached session, building it if needed.

        Raises:
            Exception: Whatever the builder raises; nothing is cached then.
        """
        client = self._client
        if client is not None:
            return client

        with self._lock:
            if self._client is None:
                self._client = self._builder()
                logger.info("Authenticated client cached")
            return self._client
