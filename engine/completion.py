"""Tab completion over a live session.

The first token completes against registered command names. Later tokens of
commands that take paths complete against the session's own tree, so freshly
created files and directories are suggested immediately.
"""

from typing import TYPE_CHECKING

from pydantic import BaseModel, Field

from engine.node import DirectoryNode

if TYPE_CHECKING:
    from engine.session import ShellSession

MAX_SUGGESTIONS = 10


class Completion(BaseModel):
    """Suggestions for a partial input line.

    Args:
        suggestions: Candidate replacements for the last token, sorted.
        replace: The token the suggestions replace.
    """

    suggestions: list[str] = Field(default_factory=list)
    replace: str = Field(default="", description="Token being completed")


def complete(session: "ShellSession", line: str) -> Completion:
    """Suggest completions for the last token of ``line``.

    Args:
        session: Session whose registry and tree are consulted.
        line: Partial input, possibly ending in a space.

    Returns:
        A Completion (empty when nothing applies).
    """
    parts = line.split(" ")
    token = parts[-1]
    words = [part for part in parts[:-1] if part]

    if not words:
        if not token:
            return Completion(replace=token)
        names = [name for name in session.registry.names() if name.startswith(token)]
        return Completion(suggestions=names[:MAX_SUGGESTIONS], replace=token)

    spec = session.registry.get(words[0])
    if spec is None or not spec.takes_paths:
        return Completion(replace=token)

    return Completion(suggestions=_complete_path(session, token), replace=token)


def _complete_path(session: "ShellSession", token: str) -> list[str]:
    directory_part, _, prefix = token.rpartition("/")
    if "/" in token:
        lookup = directory_part or "/"
        base = directory_part + "/"
    else:
        lookup = "."
        base = ""

    directory = session.resolve(lookup)
    if not isinstance(directory, DirectoryNode):
        return []

    suggestions = []
    for name in directory.names(include_hidden=prefix.startswith(".")):
        if not name.startswith(prefix):
            continue
        suffix = "/" if isinstance(directory.children[name], DirectoryNode) else ""
        suggestions.append(f"{base}{name}{suffix}")
    return suggestions[:MAX_SUGGESTIONS]


def apply_completion(line: str, suggestion: str) -> str:
    """Replace the last token of ``line`` with ``suggestion``."""
    parts = line.split(" ")
    parts[-1] = suggestion
    return " ".join(parts)
