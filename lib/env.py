# =============================================================================
# lib/env.py - Environment Loader
# =============================================================================
# Loads the project's .env file into the process environment and exposes a
# string lookup for individual keys.
#
# Usage:
#   from lib import env
#   env.load()
#   host = env.get("APP_HTTP_HOST")
# =============================================================================

import logging
import os
from pathlib import Path

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

DEFAULT_ENV_FILE = ".env"


def load(path: str | Path = DEFAULT_ENV_FILE) -> bool:
    """
    Load variables from a dotenv file into os.environ.

    Variables already present in the process environment win over the file,
    so deployment platforms can override anything the file declares.

    Args:
        path: Location of the dotenv file

    Returns:
        bool: True if the file existed and at least one variable was read
    """
    env_path = Path(path)
    if not env_path.is_file():
        logger.debug(f"No env file at {env_path}, using process environment only")
        return False

    loaded = load_dotenv(env_path, override=False)
    logger.debug(f"Loaded environment from {env_path}")
    return loaded


def get(key: str) -> str:
    """Return the value of ``key``, or an empty string when it is unset."""
    return os.environ.get(key, "")
