"""Environment builtins: env, export."""

from typing import TYPE_CHECKING

from engine.env_store import is_identifier
from engine.errors import InvalidIdentifierError
from engine.registry import registry

if TYPE_CHECKING:
    from engine.session import ShellSession


@registry.command(
    "env",
    category="Environment",
    summary="print the environment",
    synopsis="env",
    description="Print every shell variable as NAME=VALUE, one per line.",
)
def env(session: "ShellSession", args: list[str]) -> str:
    return "\n".join(f"{name}={value}" for name, value in session.environment.items())


@registry.command(
    "export",
    category="Environment",
    summary="set a shell variable",
    synopsis="export [NAME=VALUE]",
    description=(
        "Set NAME to VALUE. NAME must be a valid identifier and VALUE must not "
        "be empty. Without arguments, print the environment."
    ),
)
def export(session: "ShellSession", args: list[str]) -> str:
    if not args:
        return env(session, args)

    assignment = args[0]
    name, _, value = assignment.partition("=")
    if not name or not value or not is_identifier(name):
        raise InvalidIdentifierError(f"export: '{assignment}': not a valid identifier")

    session.environment.set(name, value)
    return ""
