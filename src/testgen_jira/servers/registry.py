"""Registry of live Jira connections, keyed by session id."""

import logging
import secrets
import threading
import time
from collections.abc import Callable

from cachetools import TTLCache

from ..exceptions import NotConnectedError
from ..jira import JiraFetcher

logger = logging.getLogger("testgen-jira.server.registry")

DEFAULT_MAX_SESSIONS = 128
DEFAULT_SESSION_TTL = 3600


class ConnectionRegistry:
    """Holds the fetchers created by connect requests.

    Each connect gets its own session id, so simultaneous connections to
    different Jira instances do not overwrite each other. Callers that send
    no session id are served by the most recent connection.
    Idle sessions expire after ``ttl`` seconds.
    """

    def __init__(
        self,
        maxsize: int = DEFAULT_MAX_SESSIONS,
        ttl: float = DEFAULT_SESSION_TTL,
        timer: Callable[[], float] = time.monotonic,
    ) -> None:
        self._sessions: TTLCache[str, JiraFetcher] = TTLCache(
            maxsize=maxsize, ttl=ttl, timer=timer
        )
        self._current: str | None = None
        self._lock = threading.Lock()

    def connect(self, fetcher: JiraFetcher) -> str:
        """Register a fetcher and make it the current connection.

        Returns:
            The new session id
        """
        session_id = secrets.token_urlsafe(16)
        with self._lock:
            self._sessions[session_id] = fetcher
            self._current = session_id
        logger.info(f"Registered Jira connection to {fetcher.config.url}")
        return session_id

    def get(self, session_id: str | None = None) -> JiraFetcher:
        """Look up a fetcher.

        Args:
            session_id: Session to use; the current one when omitted

        Returns:
            The fetcher of the session

        Raises:
            NotConnectedError: If there is no such session
        """
        with self._lock:
            key = session_id or self._current
            fetcher = self._sessions.get(key) if key else None
            if fetcher is not None:
                # reading refreshes the idle timer
                self._sessions[key] = fetcher
        if fetcher is None:
            if session_id:
                raise NotConnectedError(
                    "Unknown or expired Jira session. Please connect again."
                )
            raise NotConnectedError()
        return fetcher

    def disconnect(self, session_id: str) -> None:
        """Drop a session.

        Raises:
            NotConnectedError: If there is no such session
        """
        with self._lock:
            if self._sessions.pop(session_id, None) is None:
                raise NotConnectedError(
                    "Unknown or expired Jira session. Please connect again."
                )
            if self._current == session_id:
                self._current = None
        logger.info("Jira connection closed")

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)
