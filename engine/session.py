"""Shell session: the execution engine façade.

A ``ShellSession`` owns one filesystem, one working-directory cursor and one
environment store. ``execute`` accepts a single input line, dispatches it to a
registered handler and returns an ``ExecutionResult``.
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any, Optional

from pydantic import BaseModel, Field, PrivateAttr

import engine.commands  # noqa: F401  (registers the builtin commands)
from engine.env_store import EnvironmentStore
from engine.errors import NotFoundError, ShellError, UnknownCommandError
from engine.filesystem import AnyNode, Filesystem
from engine.node import DirectoryNode
from engine.registry import CommandRegistry, registry as default_registry
from engine.seed import (
    DEFAULT_HISTORY_LIMIT,
    DEFAULT_HOME,
    DEFAULT_PATH,
    DEFAULT_SEED,
    DEFAULT_USER,
)

if TYPE_CHECKING:
    from engine.completion import Completion

logger = logging.getLogger(__name__)


class ExecutionResult(BaseModel):
    """Result of executing one input line.

    Args:
        output: Text to display, possibly multi-line and with ANSI styling.
        new_directory: Absolute working directory after the command ran.
            Serialized as ``newDirectory``.
    """

    output: str = Field(default="", description="Text output of the command")
    new_directory: str = Field(
        alias="newDirectory",
        description="Working directory after the command ran",
    )

    class Config:
        populate_by_name = True


class ShellSession(BaseModel):
    """One isolated shell instance.

    Attributes:
        session_id: Unique identifier for this session.
        filesystem: The session's own filesystem tree.
        environment: Shell variables.
        home: Home directory used by ``cd`` and ``~``.
        history: Non-empty input lines in execution order.
        history_limit: Maximum number of history entries kept.
        created_at: When the session was created (UTC).

    Example:
        >>> session = new_session()
        >>> session.execute("cd documents").new_directory
        '/home/user/documents'
    """

    session_id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    filesystem: Filesystem
    environment: EnvironmentStore
    home: str = DEFAULT_HOME
    history: list[str] = Field(default_factory=list)
    history_limit: int = Field(default=DEFAULT_HISTORY_LIMIT, ge=1)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    _current_directory: str = PrivateAttr(default="/")
    _registry: CommandRegistry = PrivateAttr(default_factory=lambda: default_registry)

    class Config:
        arbitrary_types_allowed = True

    def __init__(self, registry: Optional[CommandRegistry] = None, **data: Any):
        super().__init__(**data)
        if registry is not None:
            self._registry = registry
        if isinstance(self.filesystem.resolve(self.home, "/"), DirectoryNode):
            self._current_directory = self.filesystem.absolute_path(self.home, "/")
        else:
            logger.warning(
                f"Home directory {self.home} missing from seed; starting session at /"
            )
            self._current_directory = "/"
        self.environment.set("PWD", self._current_directory)

    # ===== Working Directory =====

    @property
    def current_directory(self) -> str:
        """Absolute path of the working directory (read-only)."""
        return self._current_directory

    @property
    def registry(self) -> CommandRegistry:
        return self._registry

    def change_directory(self, path: str) -> str:
        """Move the working directory to ``path``.

        Args:
            path: Path expression; ``~`` expands to the home directory.

        Returns:
            The new absolute working directory.

        Raises:
            NotFoundError: If ``path`` does not resolve to a directory.
        """
        node = self.resolve(path)
        if not isinstance(node, DirectoryNode):
            raise NotFoundError(f"bash: cd: {path}: No such file or directory")
        self._current_directory = self.absolute_path(path)
        self.environment.set("PWD", self._current_directory)
        return self._current_directory

    # ===== Path Helpers =====

    def expand_path(self, path: str) -> str:
        """Expand a leading ``~`` to the home directory."""
        if path == "~":
            return self.home
        if path.startswith("~/"):
            return self.home.rstrip("/") + path[1:]
        return path

    def resolve(self, path: Optional[str]) -> Optional[AnyNode]:
        """Resolve ``path`` against the working directory."""
        if not path:
            return None
        return self.filesystem.resolve(self.expand_path(path), self._current_directory)

    def absolute_path(self, path: str) -> str:
        return self.filesystem.absolute_path(
            self.expand_path(path), self._current_directory
        )

    def locate_parent(self, path: str) -> tuple[Optional[DirectoryNode], str]:
        return self.filesystem.locate_parent(
            self.expand_path(path), self._current_directory
        )

    # ===== Execution =====

    def execute(self, line: str) -> ExecutionResult:
        """Execute one input line.

        Blank lines produce empty output. Unknown commands and every handler
        failure come back as output text; nothing is raised.

        Args:
            line: Raw input line.

        Returns:
            The command output and the working directory afterwards.
        """
        tokens = line.split()
        if not tokens:
            return self._result("")

        self._record(line.strip())
        name, args = tokens[0], tokens[1:]
        spec = self._registry.get(name)

        try:
            if spec is None:
                raise UnknownCommandError(name)
            logger.debug(
                f"Session {self.session_id} executing '{name}' in {self._current_directory}"
            )
            output = spec.handler(self, args)
        except ShellError as e:
            logger.debug(f"Session {self.session_id}: {e.kind.value}: {e.message}")
            output = e.message

        return self._result(output)

    def complete(self, line: str) -> "Completion":
        """Suggest completions for a partial input line."""
        from engine.completion import complete

        return complete(self, line)

    def export_filesystem(self) -> dict[str, Any]:
        """Export this session's tree in seed format."""
        return self.filesystem.to_seed()

    def _record(self, line: str) -> None:
        self.history.append(line)
        overflow = len(self.history) - self.history_limit
        if overflow > 0:
            del self.history[:overflow]

    def _result(self, output: str) -> ExecutionResult:
        return ExecutionResult(output=output, new_directory=self._current_directory)


def new_session(
    seed: Optional[dict[str, Any]] = None,
    *,
    home: str = DEFAULT_HOME,
    user: str = DEFAULT_USER,
    path: str = DEFAULT_PATH,
    history_limit: int = DEFAULT_HISTORY_LIMIT,
    environment: Optional[dict[str, str]] = None,
    registry: Optional[CommandRegistry] = None,
    session_id: Optional[str] = None,
) -> ShellSession:
    """Create a session with its own copy of ``seed``.

    Args:
        seed: Seed filesystem (defaults to ``DEFAULT_SEED``).
        home: Home directory and initial working directory.
        user: Value of ``$USER``.
        path: Value of ``$PATH``.
        history_limit: Maximum history entries kept.
        environment: Extra variables set after the defaults.
        registry: Command registry (defaults to the builtin registry).
        session_id: Id to use instead of a fresh UUID.

    Returns:
        A new ShellSession.

    Raises:
        ValueError: If the seed is not a valid directory tree.
    """
    filesystem = Filesystem.from_seed(seed if seed is not None else DEFAULT_SEED)
    identity = {"session_id": session_id} if session_id is not None else {}
    session = ShellSession(
        registry=registry,
        filesystem=filesystem,
        environment=EnvironmentStore.seeded(home, user, path, extra=environment),
        home=home,
        history_limit=history_limit,
        **identity,
    )
    logger.info(f"Created session {session.session_id} ({filesystem.summary})")
    return session
