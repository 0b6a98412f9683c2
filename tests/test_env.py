from __future__ import annotations

import os
from pathlib import Path

import pytest

from clibase.env import envvar, envvar_prefix, load_env


@pytest.mark.parametrize(
    "app_name, prefix",
    [
        ("demo", "DEMO"),
        ("my-tool", "MY_TOOL"),
        ("  spaced name ", "SPACED_NAME"),
        ("v2.cli", "V2_CLI"),
        ("ツール", "CLIBASE"),
    ],
)
def test_envvar_prefix(app_name: str, prefix: str) -> None:
    assert envvar_prefix(app_name) == prefix


def test_envvar() -> None:
    assert envvar("my-tool", "config") == "MY_TOOL_CONFIG"


def test_load_env_reads_dotenv_once(isolated_cwd: Path) -> None:
    (isolated_cwd / ".env").write_text("DEMO_CONFIG=from-dotenv.toml\n")

    assert load_env() is True
    assert load_env() is False
    assert os.environ["DEMO_CONFIG"] == "from-dotenv.toml"


def test_load_env_keeps_existing_variables(
    isolated_cwd: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    (isolated_cwd / ".env").write_text("DEMO_CONFIG=from-dotenv.toml\n")
    monkeypatch.setenv("DEMO_CONFIG", "from-shell.toml")

    load_env()

    assert os.environ["DEMO_CONFIG"] == "from-shell.toml"
