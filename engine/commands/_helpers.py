"""Argument and lookup helpers shared by the command handlers."""

from typing import TYPE_CHECKING

from engine.errors import MissingOperandError, NotFoundError, WrongTypeError
from engine.node import DirectoryNode, FileNode

if TYPE_CHECKING:
    from engine.session import ShellSession


def split_flags(args: list[str]) -> tuple[set[str], list[str]]:
    """Separate single-letter flags from operands.

    ``-la`` contributes both ``l`` and ``a``. A lone ``-`` is an operand.

    Returns:
        Tuple of (flag letters, operands in order).
    """
    flags: set[str] = set()
    operands: list[str] = []
    for arg in args:
        if arg.startswith("-") and len(arg) > 1:
            flags.update(arg[1:])
        else:
            operands.append(arg)
    return flags, operands


def read_file(session: "ShellSession", command: str, path: str) -> FileNode:
    """Resolve ``path`` to a file or raise the conventional error.

    Raises:
        NotFoundError: ``<command>: <path>: No such file or directory``.
        WrongTypeError: ``<command>: <path>: Is a directory``.
    """
    node = session.resolve(path)
    if node is None:
        raise NotFoundError(f"{command}: {path}: No such file or directory")
    if isinstance(node, DirectoryNode):
        raise WrongTypeError(f"{command}: {path}: Is a directory")
    return node


def single_file_operand(args: list[str], command: str) -> str:
    """Return the first operand or raise ``<command>: missing file operand``."""
    if not args:
        raise MissingOperandError(f"{command}: missing file operand")
    return args[0]
