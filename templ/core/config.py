from __future__ import annotations

import os
from pathlib import Path
from typing import Mapping, Optional

from templ.core.errors import ConfigError


HOME_ENV = "TEMPL_HOME"
HOME_DIR_NAME = ".templ"


def home_path(environ: Optional[Mapping[str, str]] = None) -> Optional[Path]:
    """Template storage root: $TEMPL_HOME, else $HOME/.templ."""
    env = os.environ if environ is None else environ

    home = env.get(HOME_ENV)
    if home:
        return Path(home)

    user_home = env.get("HOME")
    if user_home:
        return Path(user_home) / HOME_DIR_NAME

    return None


def resolve_home(explicit: Optional[str] = None, environ: Optional[Mapping[str, str]] = None) -> Path:
    """Pick the storage root and make sure it exists."""
    home = Path(explicit) if explicit else home_path(environ)
    if home is None:
        raise ConfigError(
            code="E_HOME_UNSET",
            message=f"set env {HOME_ENV} first",
            path=HOME_ENV,
        )
    home.mkdir(parents=True, exist_ok=True)
    return home
