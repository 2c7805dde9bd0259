"""Version lookup for the installed distribution."""

import logging
from functools import lru_cache
from importlib.metadata import PackageNotFoundError, version

logger = logging.getLogger(__name__)

DISTRIBUTION_NAME = "obs-translation-updater"


@lru_cache(maxsize=1)
def get_version() -> str:
    """Return the installed version, or ``0.0.0+unknown`` for a source checkout."""
    try:
        return version(DISTRIBUTION_NAME)
    except PackageNotFoundError:
        logger.debug("Package metadata not found, version unknown")
        return "0.0.0+unknown"
