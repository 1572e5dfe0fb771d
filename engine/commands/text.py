"""Text builtins: echo, head, tail, wc, sort, uniq."""

import re
from typing import TYPE_CHECKING

from engine.commands._helpers import read_file, single_file_operand, split_flags
from engine.errors import InvalidArgumentError, MissingOperandError
from engine.registry import registry

if TYPE_CHECKING:
    from engine.session import ShellSession

VARIABLE_PATTERN = re.compile(r"\$(\w+)")
QUOTE_CHARACTERS = re.compile(r"[\"']")
LEADING_NUMBER = re.compile(r"^\s*([-+]?\d+(?:\.\d+)?)")
DEFAULT_LINE_COUNT = 10


@registry.command(
    "echo",
    category="Text",
    summary="display a line of text",
    synopsis="echo [STRING]...",
    description=(
        "Write the STRINGs separated by spaces. Quote characters are removed "
        "and $NAME is replaced by the variable's value (empty if unset)."
    ),
)
def echo(session: "ShellSession", args: list[str]) -> str:
    text = QUOTE_CHARACTERS.sub("", " ".join(args))
    return VARIABLE_PATTERN.sub(
        lambda match: session.environment.get(match.group(1)) or "", text
    )


def _parse_line_count(command: str, args: list[str]) -> tuple[int, list[str]]:
    """Extract ``-n K`` (or ``-nK``) from ``args``.

    Returns:
        Tuple of (line count, remaining operands).

    Raises:
        InvalidArgumentError: If the count is not a non-negative integer.
    """
    count = DEFAULT_LINE_COUNT
    operands: list[str] = []
    index = 0
    while index < len(args):
        arg = args[index]
        if arg == "-n" or (arg.startswith("-n") and len(arg) > 2):
            if arg == "-n":
                if index + 1 >= len(args):
                    raise MissingOperandError(f"{command}: option requires an argument -- 'n'")
                value = args[index + 1]
                index += 1
            else:
                value = arg[2:]
            if not value.isdigit():
                raise InvalidArgumentError(f"{command}: invalid number of lines: '{value}'")
            count = int(value)
        else:
            operands.append(arg)
        index += 1
    return count, operands


@registry.command(
    "head",
    category="Text",
    summary="output the first part of files",
    synopsis="head [-n K] FILE",
    description="Print the first K lines of FILE (10 by default).",
    takes_paths=True,
)
def head(session: "ShellSession", args: list[str]) -> str:
    count, operands = _parse_line_count("head", args)
    path = single_file_operand(operands, "head")
    lines = read_file(session, "head", path).lines()
    return "\n".join(lines[:count])


@registry.command(
    "tail",
    category="Text",
    summary="output the last part of files",
    synopsis="tail [-n K] FILE",
    description="Print the last K lines of FILE (10 by default).",
    takes_paths=True,
)
def tail(session: "ShellSession", args: list[str]) -> str:
    count, operands = _parse_line_count("tail", args)
    path = single_file_operand(operands, "tail")
    lines = read_file(session, "tail", path).lines()
    if count == 0:
        return ""
    return "\n".join(lines[-count:])


@registry.command(
    "wc",
    category="Text",
    summary="print line, word, and byte counts",
    synopsis="wc [-l] [-w] [-c] FILE",
    description=(
        "Print line, word and byte counts for FILE. -l, -w and -c select "
        "individual counts; without a recognized option all three are shown."
    ),
    takes_paths=True,
)
def wc(session: "ShellSession", args: list[str]) -> str:
    flags, operands = split_flags(args)
    path = single_file_operand(operands, "wc")
    content = read_file(session, "wc", path).content

    counts = {
        "l": len(content.splitlines()),
        "w": len(content.split()),
        "c": len(content.encode("utf-8")),
    }
    selected = [key for key in ("l", "w", "c") if key in flags]
    if not selected:
        selected = ["l", "w", "c"]

    return " ".join(str(counts[key]) for key in selected) + f" {path}"


def _numeric_key(line: str) -> float:
    match = LEADING_NUMBER.match(line)
    if match is None:
        return 0.0
    return float(match.group(1))


@registry.command(
    "sort",
    category="Text",
    summary="sort lines of text files",
    synopsis="sort [-r] [-n] FILE",
    description="Sort the lines of FILE. -n compares numerically, -r reverses the order.",
    takes_paths=True,
)
def sort(session: "ShellSession", args: list[str]) -> str:
    flags, operands = split_flags(args)
    path = single_file_operand(operands, "sort")
    lines = read_file(session, "sort", path).lines()

    if "n" in flags:
        ordered = sorted(lines, key=_numeric_key, reverse="r" in flags)
    else:
        ordered = sorted(lines, reverse="r" in flags)
    return "\n".join(ordered)


@registry.command(
    "uniq",
    category="Text",
    summary="report or omit repeated lines",
    synopsis="uniq FILE",
    description="Collapse adjacent identical lines of FILE into one.",
    takes_paths=True,
)
def uniq(session: "ShellSession", args: list[str]) -> str:
    path = single_file_operand(args, "uniq")
    lines = read_file(session, "uniq", path).lines()

    collapsed: list[str] = []
    for line in lines:
        if not collapsed or collapsed[-1] != line:
            collapsed.append(line)
    return "\n".join(collapsed)
