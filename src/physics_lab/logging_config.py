# MIT License (see LICENSE)
"""
Logging configuration for the physics_lab package.

Library modules only create ``logging.getLogger(__name__)`` loggers; an
application or example script calls ``setup_logging`` once to see output.
"""
from __future__ import annotations
import logging
import sys
from typing import Optional


def setup_logging(level: int | str = logging.INFO, log_file: Optional[str] = None) -> None:
    """
    Configure the logger for the 'physics_lab' namespace.

    Args:
        level: Logging level (e.g. logging.DEBUG or "DEBUG").
        log_file: Optional path to also write the log to a file.
    """
    logger = logging.getLogger("physics_lab")
    logger.setLevel(level)

    # Repeated calls must not duplicate output
    if logger.hasHandlers():
        logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.info("Logging initialized.")
