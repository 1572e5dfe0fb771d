"""Search builtins: grep, find."""

from typing import TYPE_CHECKING

from engine.commands._helpers import read_file
from engine.errors import MissingOperandError, NotFoundError
from engine.node import DirectoryNode
from engine.registry import registry

if TYPE_CHECKING:
    from engine.session import ShellSession


@registry.command(
    "grep",
    category="Search",
    summary="print lines that match patterns",
    synopsis="grep PATTERN FILE",
    description="Print the lines of FILE containing PATTERN as a literal substring.",
    takes_paths=True,
)
def grep(session: "ShellSession", args: list[str]) -> str:
    if len(args) < 2:
        raise MissingOperandError("Usage: grep [pattern] [file...]")

    pattern, path = args[0], args[1]
    lines = read_file(session, "grep", path).lines()
    return "\n".join(line for line in lines if pattern in line)


@registry.command(
    "find",
    category="Search",
    summary="search for files in a directory hierarchy",
    synopsis="find [PATH] -name PATTERN",
    description=(
        "List every entry below PATH (the current directory by default) whose "
        "name contains PATTERN. '*' characters in PATTERN are ignored."
    ),
    takes_paths=True,
)
def find(session: "ShellSession", args: list[str]) -> str:
    name_pattern = None
    for index, arg in enumerate(args[:-1]):
        if arg == "-name":
            name_pattern = args[index + 1]
            break
    if name_pattern is None:
        raise MissingOperandError("Usage: find [path] -name [pattern]")

    start_path = session.current_directory if args[0] == "-name" else args[0]
    start = session.resolve(start_path)
    if start is None:
        raise NotFoundError(f"find: '{start_path}': No such file or directory")
    if not isinstance(start, DirectoryNode):
        return ""

    needle = name_pattern.replace("*", "")
    return "\n".join(
        path
        for path, name, _ in session.filesystem.walk(start, start_path)
        if needle in name
    )
