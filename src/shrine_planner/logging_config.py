"""Logging setup for command-line entry points.

The library only creates module loggers; scripts call setup_logging()
once at startup.
"""

import logging
import logging.handlers
from pathlib import Path


def setup_logging(log_level: str = "WARNING", log_file: Path | None = None) -> None:
    """Configure the root logger with a console handler and optional log file."""
    root_logger = logging.getLogger()
    if root_logger.handlers:
        return  # Already configured

    level = getattr(logging, log_level.upper(), logging.WARNING)
    root_logger.setLevel(logging.DEBUG if log_file is not None else level)

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        # 5MB max, keep 3 backups
        file_handler = logging.handlers.RotatingFileHandler(
            log_file, maxBytes=5 * 1024 * 1024, backupCount=3
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    logging.getLogger(__name__).debug("Logging initialized (level=%s)", log_level)
