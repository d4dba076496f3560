# --------------------------------------------------------------
#  logging_config.py
# --------------------------------------------------------------
import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional, Union

from ecotree.config import Config

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging(
    level: Union[int, str, None] = None,
    log_file: Optional[Union[str, Path]] = None,
) -> logging.Logger:
    """Attach *console* and optional *file* handlers to the ``ecotree`` logger.

    *   **Console handler** - human-readable output on stderr.
    *   **File handler** - plaintext log (rotates at 1 MB, keeps 3 backups).

    Calling this again replaces the handlers installed by a previous call,
    so repeated CLI invocations in one process do not duplicate output.
    """
    if level is None:
        level = Config.LOG_LEVEL
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())

    package_logger = logging.getLogger("ecotree")
    # The file handler records everything; the console honours ``level``
    package_logger.setLevel(logging.DEBUG if log_file is not None else level)

    for handler in list(package_logger.handlers):
        if getattr(handler, "_ecotree_handler", False):
            package_logger.removeHandler(handler)
            handler.close()

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT, "%H:%M:%S"))
    console_handler._ecotree_handler = True  # type: ignore[attr-defined]
    package_logger.addHandler(console_handler)

    if log_file is not None:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_path,
            maxBytes=1_000_000,
            backupCount=3,
            encoding="utf-8",
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT, "%Y-%m-%d %H:%M:%S"))
        file_handler._ecotree_handler = True  # type: ignore[attr-defined]
        package_logger.addHandler(file_handler)

    # Avoid duplicate lines when the root logger is configured too
    package_logger.propagate = False
    return package_logger
