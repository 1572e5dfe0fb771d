"""Shell-level error taxonomy.

Handlers raise these exceptions when a precondition fails. The dispatcher in
``ShellSession.execute`` catches every ``ShellError`` and turns it into the
command's output text, so none of them ever reaches a caller of the engine.
"""

from enum import Enum


class ErrorKind(str, Enum):
    """Category of a shell failure."""

    NOT_FOUND = "not_found"
    WRONG_TYPE = "wrong_type"
    ALREADY_EXISTS = "already_exists"
    MISSING_OPERAND = "missing_operand"
    UNKNOWN_COMMAND = "unknown_command"
    INVALID_IDENTIFIER = "invalid_identifier"
    INVALID_ARGUMENT = "invalid_argument"
    INVALID_OPERATION = "invalid_operation"


class ShellError(Exception):
    """Base class for failures rendered as shell output.

    Args:
        message: The exact text the user sees, e.g.
            ``"cat: foo: No such file or directory"``.
    """

    kind: ErrorKind = ErrorKind.INVALID_OPERATION

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)

    def __str__(self) -> str:
        return self.message


class NotFoundError(ShellError):
    """A path or file is absent."""

    kind = ErrorKind.NOT_FOUND


class WrongTypeError(ShellError):
    """A File was expected but a Directory was found, or vice versa."""

    kind = ErrorKind.WRONG_TYPE


class AlreadyExistsError(ShellError):
    """A creation collided with an existing name."""

    kind = ErrorKind.ALREADY_EXISTS


class MissingOperandError(ShellError):
    """A required argument was omitted."""

    kind = ErrorKind.MISSING_OPERAND


class UnknownCommandError(ShellError):
    """The first token is not a registered command.

    Args:
        name: The command name that was typed.
    """

    kind = ErrorKind.UNKNOWN_COMMAND

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"bash: {name}: command not found")


class InvalidIdentifierError(ShellError):
    """An ``export`` assignment is malformed."""

    kind = ErrorKind.INVALID_IDENTIFIER


class InvalidArgumentError(ShellError):
    """An option value could not be parsed (line counts, chmod modes)."""

    kind = ErrorKind.INVALID_ARGUMENT


class InvalidOperationError(ShellError):
    """The request is well formed but would break a tree invariant."""

    kind = ErrorKind.INVALID_OPERATION
