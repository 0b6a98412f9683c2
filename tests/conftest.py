from __future__ import annotations

import logging
import os
from collections.abc import Iterator
from pathlib import Path

import pytest

import clibase.env as env_mod
from clibase.flags import FLAGS

_ENV_NAMES = ("DEMO_VERBOSE", "DEMO_CONFIG")


def reset_flags() -> None:
    FLAGS.verbose = False
    FLAGS.config_file = ""
    FLAGS.extra.clear()
    FLAGS.registered = False


@pytest.fixture(autouse=True)
def fresh_process_state(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    # Every test plays the role of a new process building its own root.
    reset_flags()
    for name in _ENV_NAMES:
        monkeypatch.delenv(name, raising=False)
    yield
    reset_flags()
    for name in _ENV_NAMES:
        os.environ.pop(name, None)
    logging.getLogger("clibase").setLevel(logging.WARNING)


@pytest.fixture()
def isolated_cwd(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(env_mod, "_LOADED", False)
    return tmp_path
