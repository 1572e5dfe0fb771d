"""System information builtins.

Most of these print fixed or lightly parameterized text; only ``du`` reads the
tree and ``history`` reads the session's own command log.
"""

from datetime import datetime, timezone
from typing import TYPE_CHECKING

from engine.commands._helpers import split_flags
from engine.errors import NotFoundError
from engine.filesystem import join_path
from engine.node import DirectoryNode
from engine.registry import registry

if TYPE_CHECKING:
    from engine.session import ShellSession

CLEAR_SCREEN = "\x1b[2J\x1b[H"
DATE_FORMAT = "%a %b %d %H:%M:%S UTC %Y"

PS_TABLE = (
    "  PID TTY          TIME CMD\n"
    "    1 pts/0    00:00:00 bash\n"
    "   42 pts/0    00:00:00 ps"
)

DF_TABLE = (
    "Filesystem     1K-blocks    Used Available Use% Mounted on\n"
    "vshellfs         1048576   24576   1024000   3% /\n"
    "tmpfs             65536       0     65536   0% /tmp"
)


@registry.command(
    "whoami",
    category="System",
    summary="print effective user name",
    synopsis="whoami",
    description="Print the value of $USER.",
)
def whoami(session: "ShellSession", args: list[str]) -> str:
    return session.environment.get("USER") or ""


@registry.command(
    "date",
    category="System",
    summary="print the system date and time",
    synopsis="date",
    description="Print the current date and time in UTC.",
)
def date(session: "ShellSession", args: list[str]) -> str:
    return datetime.now(timezone.utc).strftime(DATE_FORMAT)


@registry.command(
    "clear",
    category="System",
    summary="clear the terminal screen",
    synopsis="clear",
    description="Emit the ANSI sequence that clears the screen and homes the cursor.",
)
def clear(session: "ShellSession", args: list[str]) -> str:
    return CLEAR_SCREEN


@registry.command(
    "history",
    category="System",
    summary="display the command history",
    synopsis="history",
    description="List the commands entered in this session, oldest first.",
)
def history(session: "ShellSession", args: list[str]) -> str:
    return "\n".join(
        f"{number:5d}  {line}" for number, line in enumerate(session.history, start=1)
    )


@registry.command(
    "help",
    category="System",
    summary="display the command reference",
    synopsis="help",
    description="List every available command grouped by category.",
)
def help_(session: "ShellSession", args: list[str]) -> str:
    lines = ["Linux Command Reference", "======================="]
    for category, specs in session.registry.by_category().items():
        lines.append("")
        lines.append(f"{category.upper()}:")
        for spec in specs:
            lines.append(f"  {spec.synopsis or spec.name:<28} - {spec.summary}")
    lines.append("")
    lines.append("Type 'man <command>' for detailed help on any command.")
    return "\n".join(lines)


@registry.command(
    "man",
    category="System",
    summary="an interface to the system reference manuals",
    synopsis="man COMMAND",
    description="Show the manual page for COMMAND.",
)
def man(session: "ShellSession", args: list[str]) -> str:
    if not args:
        return "What manual page do you want?"
    spec = session.registry.get(args[0])
    if spec is None:
        return f"No manual entry for {args[0]}"
    return spec.manual()


@registry.command(
    "ps",
    category="System",
    summary="report a snapshot of the current processes",
    synopsis="ps",
    description="Show the processes of this terminal.",
)
def ps(session: "ShellSession", args: list[str]) -> str:
    return PS_TABLE


@registry.command(
    "df",
    category="System",
    summary="report file system disk space usage",
    synopsis="df",
    description="Show disk space usage of the mounted file systems.",
)
def df(session: "ShellSession", args: list[str]) -> str:
    return DF_TABLE


def _directory_sizes(directory: DirectoryNode, path: str, rows: list[tuple[int, str]]) -> int:
    """Append ``(bytes, path)`` rows in post-order and return the total for ``path``."""
    total = 0
    for name, child in directory.children.items():
        if isinstance(child, DirectoryNode):
            total += _directory_sizes(child, join_path(path, name), rows)
        else:
            total += len(child.content.encode("utf-8"))
    rows.append((total, path))
    return total


@registry.command(
    "du",
    category="System",
    summary="estimate file space usage",
    synopsis="du [-s] [PATH]",
    description=(
        "Print the total size in bytes of the files below each directory of "
        "PATH (the current directory by default). -s prints only the total."
    ),
    takes_paths=True,
)
def du(session: "ShellSession", args: list[str]) -> str:
    flags, operands = split_flags(args)
    path = operands[0] if operands else "."
    node = session.resolve(path)
    if node is None:
        raise NotFoundError(f"du: cannot access '{path}': No such file or directory")
    if not isinstance(node, DirectoryNode):
        return f"{len(node.content.encode('utf-8'))}\t{path}"

    rows: list[tuple[int, str]] = []
    total = _directory_sizes(node, path, rows)
    if "s" in flags:
        return f"{total}\t{path}"
    return "\n".join(f"{size}\t{row_path}" for size, row_path in rows)


@registry.command(
    "which",
    category="System",
    summary="locate a command",
    synopsis="which COMMAND...",
    description="Print the path each COMMAND would run from.",
)
def which(session: "ShellSession", args: list[str]) -> str:
    search_path = session.environment.get("PATH") or ""
    lines = []
    for name in args:
        if name in session.registry:
            lines.append(f"/usr/bin/{name}")
        else:
            lines.append(f"which: no {name} in ({search_path})")
    return "\n".join(lines)
