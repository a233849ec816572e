# =============================================================================
# app/logs.py - Logging Setup
# =============================================================================
# Sends every log record (application and uvicorn) to both the log file and
# stdout. Called once when the application starts serving.
# =============================================================================

import logging
import sys
from pathlib import Path

from app.config import RunMode
from app.exceptions import LogSetupError

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

LEVELS = {
    RunMode.DEBUG: logging.DEBUG,
    RunMode.TEST: logging.WARNING,
    RunMode.RELEASE: logging.INFO,
}

# uvicorn installs its own handlers unless told otherwise; route them to root
UVICORN_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")


def configure_logging(log_file: str | Path, mode: RunMode = RunMode.DEBUG) -> Path:
    """
    Tee all logging output to ``log_file`` and stdout.

    The file is truncated on every start. Its directory is created if needed.

    Args:
        log_file: Path of the log file
        mode: Run mode, selects the log level

    Returns:
        Path: The log file in use

    Raises:
        LogSetupError: If the file can't be created
    """
    path = Path(log_file)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(path, mode="w", encoding="utf-8")
    except OSError as e:
        raise LogSetupError(str(path), str(e)) from e

    logging.basicConfig(
        level=LEVELS[mode],
        format=LOG_FORMAT,
        handlers=[file_handler, logging.StreamHandler(sys.stdout)],
        force=True,
    )

    for name in UVICORN_LOGGERS:
        uv_logger = logging.getLogger(name)
        uv_logger.handlers.clear()
        uv_logger.propagate = True

    return path
