from .exceptions import CliBaseError, FlagRedefinedError, PreRunError
from .flags import FLAGS, GlobalFlags
from .logging import enable_debug, get_logger
from .root import (
    VERBOSE_NOTICE,
    FlagFunc,
    PreRunFunc,
    RootCommand,
    build_root_command,
    combined_pre_run,
    execute,
)
from .version import __version__

__all__ = [
    "FLAGS",
    "GlobalFlags",
    "RootCommand",
    "FlagFunc",
    "PreRunFunc",
    "VERBOSE_NOTICE",
    "build_root_command",
    "combined_pre_run",
    "execute",
    "CliBaseError",
    "FlagRedefinedError",
    "PreRunError",
    "get_logger",
    "enable_debug",
    "__version__",
]
