import re

from dotenv import find_dotenv, load_dotenv

_LOADED = False


def load_env() -> bool:
    """Load ``.env`` from the working directory (or a parent) once per process.

    Variables already present in the environment win over the file.
    """
    global _LOADED
    if _LOADED:
        return False
    _LOADED = True

    return load_dotenv(find_dotenv(usecwd=True))


def envvar_prefix(app_name: str) -> str:
    prefix = re.sub(r"[^0-9A-Za-z]+", "_", app_name).strip("_").upper()
    return prefix or "CLIBASE"


def envvar(app_name: str, flag: str) -> str:
    return f"{envvar_prefix(app_name)}_{flag.upper()}"
