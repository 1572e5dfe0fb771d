"""Command registry mapping command names to handlers.

Each builtin registers itself with a decorator::

    @registry.command("pwd", summary="Print working directory", synopsis="pwd")
    def pwd(session, args):
        return session.current_directory

A handler receives the session and the argument tokens and returns the output
text. It reports failures by raising ``ShellError`` subclasses.
"""

from typing import TYPE_CHECKING, Callable, Iterator, Optional

from pydantic import BaseModel, Field

if TYPE_CHECKING:
    from engine.session import ShellSession

Handler = Callable[["ShellSession", list[str]], str]


class CommandSpec(BaseModel):
    """A registered command and the metadata used by ``help`` and ``man``.

    Args:
        name: Command name as typed.
        handler: Callable implementing the command.
        category: Heading the command is listed under in ``help``.
        summary: One-line description.
        synopsis: Usage line.
        description: Longer text for the manual page.
        takes_paths: Whether arguments are completed as paths.
    """

    name: str
    handler: Callable[..., str]
    category: str = Field(default="General")
    summary: str = Field(default="")
    synopsis: str = Field(default="")
    description: str = Field(default="")
    takes_paths: bool = Field(default=False)

    def manual(self) -> str:
        """Render the manual page for this command."""
        description = self.description or self.summary
        return (
            f"NAME\n    {self.name} - {self.summary}\n\n"
            f"SYNOPSIS\n    {self.synopsis or self.name}\n\n"
            f"DESCRIPTION\n    {description}"
        )


class CommandRegistry:
    """Mapping of command name to ``CommandSpec``.

    Registries hold no session state, so one registry can back any number of
    sessions.
    """

    def __init__(self) -> None:
        self._commands: dict[str, CommandSpec] = {}

    def register(self, spec: CommandSpec) -> None:
        """Add a command.

        Raises:
            ValueError: If a command with the same name is already registered.
        """
        if spec.name in self._commands:
            raise ValueError(f"Command '{spec.name}' is already registered")
        self._commands[spec.name] = spec

    def command(
        self,
        name: str,
        *,
        category: str = "General",
        summary: str = "",
        synopsis: str = "",
        description: str = "",
        takes_paths: bool = False,
    ) -> Callable[[Handler], Handler]:
        """Decorator registering the wrapped function as command ``name``."""

        def decorator(handler: Handler) -> Handler:
            self.register(
                CommandSpec(
                    name=name,
                    handler=handler,
                    category=category,
                    summary=summary,
                    synopsis=synopsis,
                    description=description,
                    takes_paths=takes_paths,
                )
            )
            return handler

        return decorator

    def get(self, name: str) -> Optional[CommandSpec]:
        return self._commands.get(name)

    def names(self) -> list[str]:
        return sorted(self._commands)

    def by_category(self) -> dict[str, list[CommandSpec]]:
        """Group commands by category, keeping registration order."""
        groups: dict[str, list[CommandSpec]] = {}
        for spec in self._commands.values():
            groups.setdefault(spec.category, []).append(spec)
        return groups

    def __contains__(self, name: object) -> bool:
        return name in self._commands

    def __iter__(self) -> Iterator[CommandSpec]:
        return iter(self._commands.values())

    def __len__(self) -> int:
        return len(self._commands)


registry = CommandRegistry()
