"""Exception types raised by clibase and by applications built on it.

``execute`` renders any exception as ``Error: <message>``; subclasses of
:class:`CliBaseError` may add a ``hint`` line below it.
"""

from __future__ import annotations


class CliBaseError(Exception):
    """Base exception for user-visible clibase failures."""

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint


class FlagRedefinedError(CliBaseError):
    """Raised when a persistent flag would be registered a second time."""


class PreRunError(CliBaseError):
    """Raised by an application pre-run hook to reject an invocation."""
