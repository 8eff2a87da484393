"""Configuration loading.

The ledger path comes from, in order: an explicit value (``--db-path`` or
``GCTOOL_DB_PATH``), the ``gnucash_db_file`` key of the JSON config file,
then ``~/.gnucash.sql.gnucash``.
"""

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from gctool.domain.errors import ConfigError

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "GCTOOL_CONFIG"
DB_PATH_ENV_VAR = "GCTOOL_DB_PATH"
DEFAULT_CONFIG_FILE = "~/.gctool.json"
DEFAULT_DB_FILE = "~/.gnucash.sql.gnucash"
DEFAULT_TIMEOUT = 10.0


@dataclass(frozen=True)
class Config:
    """Resolved settings for one invocation."""

    gnucash_db_file: str
    timeout: float = DEFAULT_TIMEOUT


def load_config(
    config_file: Optional[str] = None, db_path: Optional[str] = None
) -> Config:
    """Load configuration.

    Args:
        config_file: JSON config file. If None, checks GCTOOL_CONFIG, then
            ~/.gctool.json. Only an explicitly named file must exist.
        db_path: Ledger path overriding the config file

    Raises:
        ConfigError: If the config file is missing, unreadable or malformed
    """
    explicit = config_file is not None or CONFIG_ENV_VAR in os.environ
    if config_file is None:
        config_file = os.environ.get(CONFIG_ENV_VAR, DEFAULT_CONFIG_FILE)
    path = Path(config_file).expanduser()

    data: dict = {}
    if path.exists():
        try:
            data = json.loads(path.read_text())
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigError(f"Could not read config file '{path}': {e}") from e
        if not isinstance(data, dict):
            raise ConfigError(f"Config file '{path}' must contain a JSON object")
        logger.debug("loaded config from %s", path)
    elif explicit:
        raise ConfigError(f"Config file '{path}' does not exist")

    gnucash_db_file = db_path or data.get("gnucash_db_file") or DEFAULT_DB_FILE

    try:
        timeout = float(data.get("timeout", DEFAULT_TIMEOUT))
    except (TypeError, ValueError):
        raise ConfigError(f"Invalid timeout in '{path}': {data.get('timeout')!r}")

    return Config(gnucash_db_file=str(Path(gnucash_db_file).expanduser()), timeout=timeout)
