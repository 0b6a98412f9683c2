from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(slots=True)
class GlobalFlags:
    """Holds process-wide CLI flags shared by every command.

    ``verbose`` and ``config_file`` are filled by ``-v/--verbose`` and
    ``-c/--config``; flags added through ``RootCommand.add_persistent_flag``
    land in ``extra`` under their parameter name.
    """

    verbose: bool = False
    config_file: str = ""
    extra: dict[str, Any] = field(default_factory=dict)
    registered: bool = False

    def get(self, name: str, default: Any = None) -> Any:
        if name == "verbose":
            return self.verbose
        if name == "config_file":
            return self.config_file
        return self.extra.get(name, default)

    def set(self, name: str, value: Any) -> None:
        if name == "verbose":
            self.verbose = bool(value)
        elif name == "config_file":
            self.config_file = "" if value is None else str(value)
        else:
            self.extra[name] = value


FLAGS = GlobalFlags()
