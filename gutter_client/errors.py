"""Error taxonomy shared by the gutter message engine and plugin."""
from __future__ import annotations


class GutterMessageError(Exception):
    """Base class for every error raised by gutter-message."""


class UserError(GutterMessageError):
    """A failure the user caused or can fix; reported on the status line."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NoMessagesError(UserError):
    def __init__(self, document: str = "") -> None:
        text = f"No messages in {document}" if document else "No messages"
        super().__init__(text)
        self.document = document


class NoMessageOnLineError(UserError):
    def __init__(self) -> None:
        super().__init__("No message in current line")


class UnknownOptionError(UserError):
    def __init__(self, option: str, command: str) -> None:
        super().__init__(f"Unknown option ({option}). See `> help {command}`")
        self.option = option


class WrongArgumentCountError(UserError):
    def __init__(self, count: int, command: str) -> None:
        super().__init__(f"Wrong number of arguments ({count}). See `> help {command}`")
        self.count = count


class InvariantViolation(AssertionError):
    """Raised when the controller or session reaches a state that indicates a bug.

    These are deliberately not subclasses of :class:`GutterMessageError` so the
    controller's user-error boundary never swallows them.
    """
