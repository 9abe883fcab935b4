from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

HOME_ENV = "HEXGRID_HOME"
CONFIG_PATH_ENV = "HEXGRID_CONFIG_PATH"
CONFIG_FILENAME = "config.json"


def _env_path(name: str) -> Optional[Path]:
    value = os.environ.get(name, "").strip()
    return Path(value).expanduser() if value else None


def hexgrid_home() -> Path:
    """Directory holding hexgrid's files.

    $HEXGRID_HOME wins, then $XDG_CONFIG_HOME/hexgrid, then ~/.hexgrid.
    """

    home = _env_path(HOME_ENV)
    if home is not None:
        return home
    xdg = _env_path("XDG_CONFIG_HOME")
    if xdg is not None:
        return xdg / "hexgrid"
    return Path.home() / ".hexgrid"


def config_path() -> Path:
    return _env_path(CONFIG_PATH_ENV) or hexgrid_home() / CONFIG_FILENAME
