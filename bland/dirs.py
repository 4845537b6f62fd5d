"""Locate the directory stores live in by default."""

from pathlib import Path

from platformdirs import user_config_dir

from bland.errors import ConfigDirNotFound
from config import settings


def config_dir() -> Path:
    """Return the root directory for stores created without an explicit root.

    ``BLAND_CONFIG_DIR`` takes precedence over the platform default.

    Raises:
        ConfigDirNotFound: If no directory can be determined.
    """
    override = settings.BLAND_CONFIG_DIR
    if override:
        return Path(override).expanduser()
    base = user_config_dir()
    if not base:
        raise ConfigDirNotFound()
    return Path(base)
