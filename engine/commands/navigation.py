"""Navigation builtins: pwd, cd, ls."""

from typing import TYPE_CHECKING

from engine.commands._helpers import split_flags
from engine.errors import NotFoundError
from engine.node import DirectoryNode
from engine.registry import registry

if TYPE_CHECKING:
    from engine.session import ShellSession

DIRECTORY_COLOR = "\x1b[1;34m"
RESET_COLOR = "\x1b[0m"
LONG_FORMAT_PERMISSIONS = "rwxr-xr-x"
LONG_FORMAT_DATE = "Jan 01 12:00"


@registry.command(
    "pwd",
    category="Navigation",
    summary="print name of current/working directory",
    synopsis="pwd",
    description="Print the full pathname of the current working directory.",
)
def pwd(session: "ShellSession", args: list[str]) -> str:
    return session.current_directory


@registry.command(
    "cd",
    category="Navigation",
    summary="change the working directory",
    synopsis="cd [directory]",
    description=(
        "Change the current directory to the specified path. With no argument "
        "or '~', change to the home directory. '..' moves to the parent."
    ),
    takes_paths=True,
)
def cd(session: "ShellSession", args: list[str]) -> str:
    target = args[0] if args else "~"
    session.change_directory(target)
    return ""


@registry.command(
    "ls",
    category="Navigation",
    summary="list directory contents",
    synopsis="ls [-a] [-l] [FILE]",
    description=(
        "List information about the directory (the current directory by "
        "default). -a includes entries starting with '.', -l uses a long "
        "listing format."
    ),
    takes_paths=True,
)
def ls(session: "ShellSession", args: list[str]) -> str:
    flags, operands = split_flags(args)
    path = operands[0] if operands else session.current_directory
    directory = session.resolve(path)

    if not isinstance(directory, DirectoryNode):
        raise NotFoundError(f"ls: cannot access '{path}': No such file or directory")

    names = directory.names(include_hidden="a" in flags)

    if "l" in flags:
        lines = []
        for name in names:
            child = directory.children[name]
            kind = "d" if isinstance(child, DirectoryNode) else "-"
            lines.append(
                f"{kind}{LONG_FORMAT_PERMISSIONS} 1 user user {child.size:>5} "
                f"{LONG_FORMAT_DATE} {name}"
            )
        return "\n".join(lines)

    entries = []
    for name in names:
        if isinstance(directory.children[name], DirectoryNode):
            entries.append(f"{DIRECTORY_COLOR}{name}/{RESET_COLOR}")
        else:
            entries.append(name)
    return "  ".join(entries)
