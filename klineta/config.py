"""Configuration and logging setup for klineta.

Settings are read from ``~/.config/klineta/config.toml``::

    [data]
    db_path = "~/.config/klineta/klineta.db"

    [analysis]
    period = "1h"
    limit = 100

    [logging]
    level = "WARNING"
"""

import copy
import logging
import sys
from pathlib import Path
from typing import Optional

import toml

logger = logging.getLogger(__name__)

CONFIG_DIR = Path.home() / ".config" / "klineta"
DEFAULT_CONFIG_PATH = CONFIG_DIR / "config.toml"

DEFAULT_CONFIG = {
    "data": {"db_path": str(CONFIG_DIR / "klineta.db")},
    "analysis": {"period": "1h", "limit": 100},
    "logging": {"level": "WARNING"},
}

LOG_FORMAT = "[%(asctime)s] %(levelname)s [%(name)s] %(message)s"

_configured = False


def _merge(base: dict, override: dict) -> dict:
    """Recursively merge ``override`` into a copy of ``base``."""
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_config(path: Optional[Path] = None) -> dict:
    """Load configuration, falling back to defaults.

    Args:
        path: Config file path. Defaults to ``~/.config/klineta/config.toml``.

    Returns:
        The file's settings merged over ``DEFAULT_CONFIG``.
    """
    config_path = Path(path) if path else DEFAULT_CONFIG_PATH

    if not config_path.exists():
        return copy.deepcopy(DEFAULT_CONFIG)

    try:
        loaded = toml.load(config_path)
    except toml.TomlDecodeError as e:
        logger.warning("Ignoring unreadable config %s: %s", config_path, e)
        return copy.deepcopy(DEFAULT_CONFIG)

    return _merge(DEFAULT_CONFIG, loaded)


def get_db_path(config: dict) -> Path:
    """Resolve the candle database path from config."""
    return Path(config["data"]["db_path"]).expanduser()


def configure_logging(level: str = "WARNING") -> None:
    """Configure a single stderr handler on the klineta logger.

    Later calls only adjust the level.
    """
    global _configured

    numeric_level = getattr(logging, level.upper(), logging.WARNING)
    root = logging.getLogger("klineta")
    root.setLevel(numeric_level)

    if _configured:
        return

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    root.addHandler(handler)
    _configured = True
