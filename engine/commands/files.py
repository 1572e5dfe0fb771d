"""File builtins: cat, mkdir, touch, rm, cp, mv, chmod.

Commands that create or remove entries take a path whose last segment is the
child name; everything before it must resolve to an existing directory.
Every precondition is checked before the tree is touched.
"""

import re
from typing import TYPE_CHECKING

from engine.commands._helpers import split_flags
from engine.errors import (
    AlreadyExistsError,
    InvalidArgumentError,
    InvalidOperationError,
    MissingOperandError,
    NotFoundError,
    WrongTypeError,
)
from engine.node import DirectoryNode, FileNode, copy_node, is_ancestor
from engine.registry import registry

if TYPE_CHECKING:
    from engine.session import ShellSession

RESERVED_NAMES = (".", "..")
OCTAL_MODE = re.compile(r"^[0-7]{3,4}$")
SYMBOLIC_MODE = re.compile(r"^[ugoa]*[+\-=][rwxXst]*$")


@registry.command(
    "cat",
    category="Files",
    summary="concatenate files and print",
    synopsis="cat FILE...",
    description="Concatenate FILE(s) to standard output, one error line per bad FILE.",
    takes_paths=True,
)
def cat(session: "ShellSession", args: list[str]) -> str:
    if not args:
        raise MissingOperandError("cat: missing file operand")

    outputs = []
    for path in args:
        node = session.resolve(path)
        if node is None:
            outputs.append(f"cat: {path}: No such file or directory")
        elif isinstance(node, DirectoryNode):
            outputs.append(f"cat: {path}: Is a directory")
        else:
            outputs.append(node.content)
    return "\n".join(outputs)


@registry.command(
    "mkdir",
    category="Files",
    summary="make directories",
    synopsis="mkdir DIRECTORY",
    description="Create the DIRECTORY if it does not already exist.",
    takes_paths=True,
)
def mkdir(session: "ShellSession", args: list[str]) -> str:
    if not args:
        raise MissingOperandError("mkdir: missing operand")

    path = args[0]
    parent, name = session.locate_parent(path)
    if parent is None and name == "":
        raise AlreadyExistsError(f"mkdir: cannot create directory '{path}': File exists")
    if parent is None:
        raise NotFoundError(
            f"mkdir: cannot create directory '{path}': No such file or directory"
        )
    if name in RESERVED_NAMES or parent.has(name):
        raise AlreadyExistsError(f"mkdir: cannot create directory '{path}': File exists")

    parent.add(name, DirectoryNode())
    return ""


@registry.command(
    "touch",
    category="Files",
    summary="create an empty file",
    synopsis="touch FILE",
    description="Create FILE empty if it does not exist. Existing content is kept.",
    takes_paths=True,
)
def touch(session: "ShellSession", args: list[str]) -> str:
    if not args:
        raise MissingOperandError("touch: missing file operand")

    path = args[0]
    parent, name = session.locate_parent(path)
    if parent is None and name == "":
        return ""
    if parent is None:
        raise NotFoundError(f"touch: cannot touch '{path}': No such file or directory")
    if name in RESERVED_NAMES or parent.has(name):
        return ""

    parent.add(name, FileNode())
    return ""


@registry.command(
    "rm",
    category="Files",
    summary="remove files or directories",
    synopsis="rm [-r] [-f] FILE",
    description=(
        "Remove FILE. Directories require -r. With -f, a missing FILE is "
        "ignored silently."
    ),
    takes_paths=True,
)
def rm(session: "ShellSession", args: list[str]) -> str:
    flags, operands = split_flags(args)
    if not operands:
        raise MissingOperandError("rm: missing operand")

    recursive = "r" in flags or "R" in flags
    force = "f" in flags
    path = operands[0]

    parent, name = session.locate_parent(path)
    if parent is None and name == "":
        raise InvalidOperationError("rm: it is dangerous to operate recursively on '/'")
    if name in RESERVED_NAMES:
        raise InvalidOperationError(
            f"rm: refusing to remove '.' or '..' directory: skipping '{path}'"
        )

    target = parent.get(name) if parent is not None else None
    if target is None:
        if force:
            return ""
        raise NotFoundError(f"rm: cannot remove '{path}': No such file or directory")
    if isinstance(target, DirectoryNode) and not recursive:
        raise WrongTypeError(f"rm: cannot remove '{path}': Is a directory")

    parent.remove(name)
    return ""


@registry.command(
    "cp",
    category="Files",
    summary="copy files and directories",
    synopsis="cp SOURCE DEST",
    description="Copy SOURCE to DEST. The copy shares nothing with the original.",
    takes_paths=True,
)
def cp(session: "ShellSession", args: list[str]) -> str:
    if len(args) < 2:
        raise MissingOperandError("cp: missing destination file operand")

    source_path, dest_path = args[0], args[1]
    source = session.resolve(source_path)
    if source is None:
        raise NotFoundError(f"cp: cannot stat '{source_path}': No such file or directory")

    parent, name = session.locate_parent(dest_path)
    if parent is None or name in RESERVED_NAMES:
        raise NotFoundError(
            f"cp: cannot create regular file '{dest_path}': No such file or directory"
        )
    if isinstance(source, DirectoryNode) and is_ancestor(source, parent):
        raise InvalidOperationError(
            f"cp: cannot copy a directory, '{source_path}', into itself, '{dest_path}'"
        )

    parent.add(name, copy_node(source))
    return ""


@registry.command(
    "mv",
    category="Files",
    summary="move (rename) files",
    synopsis="mv SOURCE DEST",
    description="Rename SOURCE to DEST, or move SOURCE to another directory.",
    takes_paths=True,
)
def mv(session: "ShellSession", args: list[str]) -> str:
    if len(args) < 2:
        raise MissingOperandError("mv: missing destination file operand")

    source_path, dest_path = args[0], args[1]
    source_parent, source_name = session.locate_parent(source_path)
    source = source_parent.get(source_name) if source_parent is not None else None
    if source is None:
        raise NotFoundError(f"mv: cannot stat '{source_path}': No such file or directory")

    dest_parent, dest_name = session.locate_parent(dest_path)
    if dest_parent is None or dest_name in RESERVED_NAMES:
        raise NotFoundError(
            f"mv: cannot move '{source_path}' to '{dest_path}': No such file or directory"
        )
    if isinstance(source, DirectoryNode) and is_ancestor(source, dest_parent):
        raise InvalidOperationError(
            f"mv: cannot move '{source_path}' to a subdirectory of itself, '{dest_path}'"
        )
    if dest_parent is source_parent and dest_name == source_name:
        return ""

    source_parent.remove(source_name)
    dest_parent.add(dest_name, source)
    return ""


@registry.command(
    "chmod",
    category="Files",
    summary="change file mode bits",
    synopsis="chmod MODE FILE",
    description=(
        "Record MODE (octal such as 755, or symbolic such as u+x) on FILE. "
        "Modes are stored as metadata and never enforced."
    ),
    takes_paths=True,
)
def chmod(session: "ShellSession", args: list[str]) -> str:
    if len(args) < 2:
        raise MissingOperandError("chmod: missing operand")

    mode, path = args[0], args[1]
    if not is_valid_mode(mode):
        raise InvalidArgumentError(f"chmod: invalid mode: '{mode}'")

    node = session.resolve(path)
    if node is None:
        raise NotFoundError(f"chmod: cannot access '{path}': No such file or directory")

    node.mode = mode
    return ""


def is_valid_mode(mode: str) -> bool:
    """Return True for octal modes and comma-separated symbolic clauses."""
    if OCTAL_MODE.match(mode):
        return True
    clauses = mode.split(",")
    return all(SYMBOLIC_MODE.match(clause) for clause in clauses)
