"""Database factory functions for creating engines."""

import logging
from pathlib import Path

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine

from gctool.domain.errors import ConfigError, database_not_found

logger = logging.getLogger(__name__)


def create_sqlite_engine(
    database_path: str, timeout: float = 10.0, must_exist: bool = True
) -> Engine:
    """Create a SQLAlchemy engine for a GnuCash SQLite file.

    Args:
        database_path: Path to the GnuCash SQLite file
        timeout: Seconds to wait on a locked database before failing
        must_exist: Refuse to open a path that does not exist, since SQLite
            would otherwise create an empty file there

    Returns:
        Engine configured for SQLite

    Raises:
        ConfigError: If must_exist is set and the file is missing
    """
    path = Path(database_path).expanduser()
    if must_exist and not path.exists():
        raise ConfigError(database_not_found(str(path)))

    logger.debug("opening %s (timeout=%ss)", path, timeout)
    return create_engine(
        f"sqlite:///{path}", echo=False, connect_args={"timeout": timeout}
    )
