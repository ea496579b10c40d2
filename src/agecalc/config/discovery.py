"""Locate ``agecalc.toml``.

``AGECALC_CONFIG`` names the file directly; otherwise the search walks up
from the starting directory, the way git finds ``.git/``.
"""

from __future__ import annotations

import os
from pathlib import Path

CONFIG_FILENAME = "agecalc.toml"
CONFIG_ENV_VAR = "AGECALC_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Path of the config file that applies to *start* (default: cwd), or None.

    A set ``AGECALC_CONFIG`` that does not name a file disables the walk-up.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        p = Path(env_path)
        return p if p.is_file() else None

    here = (start or Path.cwd()).resolve()
    for directory in (here, *here.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None
