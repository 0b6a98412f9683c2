from __future__ import annotations

from enum import Enum

from rich.console import Console
from rich.markup import escape

from clibase.exceptions import CliBaseError


class Colors(Enum):
    ERROR = "red"
    WARNING = "yellow"


def get_err_console() -> Console:
    """Create a Rich console bound to the current ``sys.stderr``."""
    return Console(stderr=True, highlight=False, soft_wrap=True)


def print_error(exc: BaseException) -> None:
    """Render ``exc`` as ``Error: <message>`` with an optional hint line."""
    console = get_err_console()
    message = str(exc) or type(exc).__name__
    console.print(f"[bold {Colors.ERROR.value}]Error:[/] {escape(message)}")

    hint = exc.hint if isinstance(exc, CliBaseError) else None
    if hint:
        console.print(f"[{Colors.WARNING.value}]Hint:[/] {escape(hint)}")


def print_warning(message: str) -> None:
    get_err_console().print(f"[{Colors.WARNING.value}]{escape(message)}[/]")
