"""vshell engine package.

This package contains the sandboxed shell engine: the in-memory filesystem
tree, the environment store, the command registry with its builtin handlers,
per-session execution and tab completion, and the manager that hosts many
isolated sessions at once.
"""

from engine.node import DirectoryNode, FileNode
from engine.filesystem import Filesystem
from engine.env_store import EnvironmentStore
from engine.errors import ErrorKind, ShellError
from engine.registry import CommandRegistry, CommandSpec, registry
from engine.seed import DEFAULT_SEED
from engine.session import ExecutionResult, ShellSession, new_session
from engine.completion import Completion, apply_completion
from engine.manager import SessionLimitError, SessionManager, SessionNotFoundError

__all__ = [
    "FileNode",
    "DirectoryNode",
    "Filesystem",
    "EnvironmentStore",
    "ErrorKind",
    "ShellError",
    "CommandRegistry",
    "CommandSpec",
    "registry",
    "DEFAULT_SEED",
    "ExecutionResult",
    "ShellSession",
    "new_session",
    "Completion",
    "apply_completion",
    "SessionManager",
    "SessionNotFoundError",
    "SessionLimitError",
]
