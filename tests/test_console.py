from __future__ import annotations

import pytest

from clibase.console import print_error, print_warning
from clibase.exceptions import CliBaseError


def test_plain_exception(capsys: pytest.CaptureFixture[str]) -> None:
    print_error(OSError("disk full"))

    captured = capsys.readouterr()
    assert captured.out == ""
    assert captured.err.strip() == "Error: disk full"


def test_exception_without_message(capsys: pytest.CaptureFixture[str]) -> None:
    print_error(KeyError())
    assert "Error: KeyError" in capsys.readouterr().err


def test_hint_is_rendered(capsys: pytest.CaptureFixture[str]) -> None:
    print_error(CliBaseError("no config", hint="pass --config"))

    lines = capsys.readouterr().err.splitlines()
    assert lines == ["Error: no config", "Hint: pass --config"]


def test_warning(capsys: pytest.CaptureFixture[str]) -> None:
    print_warning("Aborted! [x]")
    assert capsys.readouterr().err.strip() == "Aborted! [x]"
