"""
Logging configuration for the Bookmark Importer.

Library modules only create loggers; handlers are installed here, by the CLI.
"""

import logging
import sys
from pathlib import Path
from typing import Optional, Union

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(
    log_level: str = "INFO", log_file: Optional[Union[str, Path]] = None
) -> None:
    """
    Set up logging configuration.

    Args:
        log_level: Name of the root log level
        log_file: Optional log file path; console only when omitted
    """
    handlers = []

    # Console output goes to stderr so JSON results on stdout stay clean
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
    handlers.append(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
        handlers.append(file_handler)

    logging.basicConfig(
        level=getattr(logging, log_level.upper(), logging.INFO),
        handlers=handlers,
        force=True,
    )

    logger = logging.getLogger(__name__)
    logger.debug(f"Log level: {log_level}")
    if log_file:
        logger.info(f"Bookmark Importer logging to {log_file}")

    # Reduce noise from parsing libraries
    logging.getLogger("chardet").setLevel(logging.WARNING)
    logging.getLogger("bs4").setLevel(logging.WARNING)
