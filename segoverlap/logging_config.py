# -*- coding: utf-8 -*-
"""Sets up the package logger for segoverlap.

Library modules only create their own ``logging.getLogger(__name__)`` loggers; nothing is
printed unless an application calls setup_logging (or configures logging itself).
"""

import logging
import sys


def setup_logging(level=logging.INFO, log_file=None):
    """Configure the logger for the 'segoverlap' namespace.

    Parameters:
    -----------
    level : int
        Logging level (e.g. logging.DEBUG, logging.INFO)
    log_file : str, optional
        Path to additionally write the log to

    Returns:
    --------
    logger : logging.Logger
        The configured package logger
    """
    logger = logging.getLogger("segoverlap")
    logger.setLevel(level)

    # Avoid duplicate handlers when called again
    if logger.hasHandlers():
        logger.handlers.clear()

    formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s", datefmt="%H:%M:%S")

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="w", encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.info("Logging initialized.")
    return logger
