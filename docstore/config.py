"""
docstore configuration: TOML file merged over built-in defaults.

Lookup order for the file:
    1. explicit path argument (``docstore --config``)
    2. $DOCSTORE_CONFIG
    3. ~/.docstore/config.toml

Example:
    encoding = "utf-8"      # default latin-1, byte for byte
    log_level = "DEBUG"
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

from docstore._format.spec import DEFAULT_ENCODING

log = logging.getLogger(__name__)

CONFIG_ENV_VAR = "DOCSTORE_CONFIG"
DEFAULT_CONFIG_PATH = Path.home() / ".docstore" / "config.toml"

DEFAULT_CONFIG: dict[str, Any] = {
    "encoding": DEFAULT_ENCODING,
    "log_level": "WARNING",
}


def config_path(path: str | Path | None = None) -> Path:
    if path:
        return Path(path)
    env = os.environ.get(CONFIG_ENV_VAR, "")
    if env:
        return Path(env)
    return DEFAULT_CONFIG_PATH


def load_config(path: str | Path | None = None) -> dict[str, Any]:
    """Load config from TOML, falling back to defaults. Unknown keys are ignored."""
    config = dict(DEFAULT_CONFIG)

    path = config_path(path)
    if not path.is_file():
        return config

    try:
        import tomllib
    except ImportError:
        try:
            import tomli as tomllib
        except ImportError:
            log.warning("tomllib/tomli not available, using default config")
            return config

    try:
        with open(path, "rb") as f:
            file_config = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        log.warning("Failed to load config from %s: %s", path, e)
        return config

    for key, value in file_config.items():
        if key not in DEFAULT_CONFIG:
            log.debug("Ignoring unknown config key %r in %s", key, path)
            continue
        if not isinstance(value, type(DEFAULT_CONFIG[key])):
            log.warning(
                "Config key %r in %s must be %s, got %r",
                key, path, type(DEFAULT_CONFIG[key]).__name__, value,
            )
            continue
        config[key] = value

    return config
