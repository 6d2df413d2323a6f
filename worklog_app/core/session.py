"""Single-slot holder for the active Jira connection."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterator
from contextlib import contextmanager

from .config import SESSION_LOCK_TIMEOUT_SECONDS
from .errors import ConnectionFailed, LockError
from .jira_client import JiraAPI
from .models import Credentials

logger = logging.getLogger(__name__)

ClientFactory = Callable[[Credentials], JiraAPI]


class SessionStore:
    """Holds at most one authenticated ``JiraAPI``.

    The lock only covers reading or replacing the slot. Callers get the client
    back and perform their HTTP requests after the lock is released, so
    concurrent searches on the same session run in parallel. Concurrent
    connect/disconnect calls are last-write-wins.
    """

    def __init__(
        self,
        client_factory: ClientFactory = JiraAPI,
        *,
        lock_timeout: float = SESSION_LOCK_TIMEOUT_SECONDS,
    ):
        self._client_factory = client_factory
        self._lock = threading.Lock()
        self._lock_timeout = lock_timeout
        self._client: JiraAPI | None = None

    @contextmanager
    def _locked(self) -> Iterator[None]:
        if not self._lock.acquire(timeout=self._lock_timeout):
            raise LockError("Could not acquire the session lock")
        try:
            yield
        finally:
            self._lock.release()

    def connect(self, credentials: Credentials) -> bool:
        """Probe ``credentials`` and install the new client on success.

        A rejected probe raises ``ConnectionFailed``; a transport failure during
        the probe propagates as-is. In both cases the previous session, if
        any, is kept.
        """
        client = self._client_factory(credentials)
        if not client.test_connection():
            raise ConnectionFailed()
        with self._locked():
            self._client = client
        logger.info("Connected to %s as %s", credentials.base_url, credentials.email)
        return True

    def current(self) -> JiraAPI | None:
        with self._locked():
            return self._client

    def disconnect(self) -> None:
        with self._locked():
            had_client = self._client is not None
            self._client = None
        if had_client:
            logger.info("Disconnected from Jira")

    @property
    def is_connected(self) -> bool:
        return self.current() is not None
