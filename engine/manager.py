"""Session manager hosting many independent shell sessions.

Each session is built from its own copy of a seed and guarded by its own
lock, so commands for one session run strictly one at a time while separate
sessions never share mutable state.
"""

import copy
import logging
import threading
from typing import Any, Optional

from engine.seed import (
    DEFAULT_HISTORY_LIMIT,
    DEFAULT_HOME,
    DEFAULT_PATH,
    DEFAULT_SEED,
    DEFAULT_USER,
)
from engine.session import ExecutionResult, ShellSession, new_session

logger = logging.getLogger(__name__)


class SessionNotFoundError(KeyError):
    """Raised when a session id is not known to the manager.

    Args:
        session_id: The id that was requested.
    """

    def __init__(self, session_id: str):
        self.session_id = session_id
        super().__init__(f"Session '{session_id}' not found")


class SessionLimitError(RuntimeError):
    """Raised when creating a session would exceed ``max_sessions``.

    Args:
        max_sessions: The configured limit.
    """

    def __init__(self, max_sessions: int):
        self.max_sessions = max_sessions
        super().__init__(f"Session limit of {max_sessions} reached")


class SessionManager:
    """Registry of live sessions keyed by session id.

    Args:
        seed: Default seed for new sessions.
        home: Home directory for new sessions.
        user: ``$USER`` for new sessions.
        path: ``$PATH`` for new sessions.
        history_limit: History entries kept per session.
        max_sessions: Maximum number of concurrent sessions.
    """

    def __init__(
        self,
        seed: Optional[dict[str, Any]] = None,
        home: str = DEFAULT_HOME,
        user: str = DEFAULT_USER,
        path: str = DEFAULT_PATH,
        history_limit: int = DEFAULT_HISTORY_LIMIT,
        max_sessions: int = 100,
    ) -> None:
        self.seed = copy.deepcopy(seed if seed is not None else DEFAULT_SEED)
        self.home = home
        self.user = user
        self.path = path
        self.history_limit = history_limit
        self.max_sessions = max_sessions

        self._sessions: dict[str, ShellSession] = {}
        self._seeds: dict[str, dict[str, Any]] = {}
        self._environments: dict[str, dict[str, str]] = {}
        self._locks: dict[str, threading.Lock] = {}
        self._registry_lock = threading.Lock()

    def create(
        self,
        seed: Optional[dict[str, Any]] = None,
        environment: Optional[dict[str, str]] = None,
    ) -> ShellSession:
        """Create a session from ``seed`` (or the manager's default seed).

        Raises:
            SessionLimitError: If ``max_sessions`` sessions already exist.
            ValueError: If the seed is not a valid directory tree.
        """
        with self._registry_lock:
            if len(self._sessions) >= self.max_sessions:
                logger.warning(
                    f"Refusing new session: limit of {self.max_sessions} reached"
                )
                raise SessionLimitError(self.max_sessions)

            session_seed = copy.deepcopy(seed) if seed is not None else self.seed
            session = self._build(session_seed, environment)
            self._sessions[session.session_id] = session
            self._seeds[session.session_id] = session_seed
            self._environments[session.session_id] = dict(environment or {})
            self._locks[session.session_id] = threading.Lock()

        return session

    def get(self, session_id: str) -> ShellSession:
        """Return the session with ``session_id``.

        Raises:
            SessionNotFoundError: If the id is unknown.
        """
        session = self._sessions.get(session_id)
        if session is None:
            raise SessionNotFoundError(session_id)
        return session

    def list(self) -> list[ShellSession]:
        return list(self._sessions.values())

    def delete(self, session_id: str) -> None:
        """Discard a session and its filesystem.

        Raises:
            SessionNotFoundError: If the id is unknown.
        """
        with self._registry_lock:
            if session_id not in self._sessions:
                raise SessionNotFoundError(session_id)
            del self._sessions[session_id]
            del self._seeds[session_id]
            del self._environments[session_id]
            del self._locks[session_id]
        logger.info(f"Deleted session {session_id}")

    def reset(self, session_id: str) -> ShellSession:
        """Rebuild a session from its original seed, keeping its id.

        Raises:
            SessionNotFoundError: If the id is unknown.
        """
        with self._registry_lock:
            if session_id not in self._sessions:
                raise SessionNotFoundError(session_id)
            seed = self._seeds[session_id]
            environment = self._environments[session_id]
            lock = self._locks[session_id]

        with lock:
            session = self._build(seed, environment, session_id)
            with self._registry_lock:
                if session_id not in self._sessions:
                    raise SessionNotFoundError(session_id)
                self._sessions[session_id] = session
        logger.info(f"Reset session {session_id}")
        return session

    def execute(self, session_id: str, line: str) -> ExecutionResult:
        """Execute ``line`` in a session while holding that session's lock.

        Raises:
            SessionNotFoundError: If the id is unknown.
        """
        with self._lock_for(session_id):
            return self.get(session_id).execute(line)

    def clear(self) -> int:
        """Drop every session and return how many were dropped."""
        with self._registry_lock:
            count = len(self._sessions)
            self._sessions.clear()
            self._seeds.clear()
            self._environments.clear()
            self._locks.clear()
        return count

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, session_id: object) -> bool:
        return session_id in self._sessions

    def _lock_for(self, session_id: str) -> threading.Lock:
        lock = self._locks.get(session_id)
        if lock is None:
            raise SessionNotFoundError(session_id)
        return lock

    def _build(
        self,
        seed: dict[str, Any],
        environment: Optional[dict[str, str]],
        session_id: Optional[str] = None,
    ) -> ShellSession:
        return new_session(
            seed,
            home=self.home,
            user=self.user,
            path=self.path,
            history_limit=self.history_limit,
            environment=environment,
            session_id=session_id,
        )
