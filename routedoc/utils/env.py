"""Load ``ROUTEDOC_*`` defaults from a ``.env`` file before config is read."""
from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

from dotenv import find_dotenv, load_dotenv

ENV_FILE_VARIABLE = "ROUTEDOC_ENV_FILE"

_env_loaded = False


def resolve_env_file(dotenv_path: Optional[str | Path] = None) -> str:
    """Pick the ``.env`` file to load; an empty string means none was found.

    An explicit argument wins, then ``ROUTEDOC_ENV_FILE``, then the nearest
    ``.env`` above the working directory.
    """

    if dotenv_path is not None:
        return str(dotenv_path)
    explicit = os.getenv(ENV_FILE_VARIABLE)
    if explicit:
        return explicit
    return find_dotenv(usecwd=True)


def load_env(*, dotenv_path: Optional[str | Path] = None) -> bool:
    """Load the resolved ``.env`` file once per process.

    Variables already set in the process environment keep their values.
    Returns whether this call loaded anything.
    """

    global _env_loaded
    if _env_loaded:
        return False
    _env_loaded = True

    path = resolve_env_file(dotenv_path)
    if not path:
        return False
    return load_dotenv(dotenv_path=path, override=False)


__all__ = ["ENV_FILE_VARIABLE", "load_env", "resolve_env_file"]
