#!/usr/bin/env python3
"""Logging utilities for mapoffset.

Library modules only call ``logging.getLogger(__name__)``; the command-line
entry point calls :func:`setup_logging` once to attach handlers.
"""

import logging
import os
import sys
from typing import Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(log_level: int = logging.INFO,
                  log_file: Optional[str] = None) -> None:
    """Configure the root logger with a console and an optional file handler.

    Args:
        log_level: The logging level (default: logging.INFO)
        log_file: Optional path to a log file. If None, logs to console only.

    """
    formatter = logging.Formatter(LOG_FORMAT)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    # Replace handlers from a previous call
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)

        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    root_logger.debug("Logging initialized")
