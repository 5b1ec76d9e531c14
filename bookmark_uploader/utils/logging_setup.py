"""
Logging configuration for the Bookmark Uploader.

This module sets up logging based on configuration settings.
"""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(config=None, verbose: bool = False) -> Optional[Path]:
    """
    Set up logging configuration.

    Args:
        config: LoggingConfig section (defaults apply when None)
        verbose: Force DEBUG level

    Returns:
        Path of the log file, if one was configured
    """
    log_level = "INFO"
    console_output = True
    log_file = None

    if config is not None:
        log_level = config.level
        console_output = config.console_output
        log_file = config.log_file

    if verbose:
        log_level = "DEBUG"

    handlers = []
    log_path = None

    # File handler with a timestamped name next to the configured one
    if log_file is not None:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_path = log_file.with_name(f"{log_file.stem}_{timestamp}{log_file.suffix or '.log'}")

        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
        handlers.append(file_handler)

    # Console handler on stderr; stdout may carry the payload
    if console_output:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
        handlers.append(console_handler)

    if not handlers:
        handlers.append(logging.NullHandler())

    logging.basicConfig(
        level=getattr(logging, log_level.upper()), handlers=handlers, force=True
    )

    logger = logging.getLogger(__name__)
    if log_path is not None:
        logger.info(f"Bookmark Uploader starting - Log file: {log_path}")
    logger.debug(f"Log level: {log_level}")

    # Reduce noise from the markup libraries
    logging.getLogger("bs4").setLevel(logging.WARNING)

    return log_path
