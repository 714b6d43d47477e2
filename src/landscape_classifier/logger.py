"""
Logging setup shared by every module of the package.

Usage:
    from landscape_classifier.logger import get_logger
    log = get_logger("io_utils")
"""

import logging
import os
from pathlib import Path

from landscape_classifier.cste import GeneralPath

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

LEVEL_ENV = "LANDSCAPE_CLASSIFIER_LOG_LEVEL"
FILE_ENV = "LANDSCAPE_CLASSIFIER_LOG_FILE"


def get_logger(name: str) -> logging.Logger:
    """
    Return a configured logger for the given module name.

    ! Handlers are attached only once per logger, so repeated imports
    ! do not duplicate log lines

    Args:
        name: Short module name, prefixed with the package name

    Returns:
        Logger writing to stderr, and to .logs/<name>.log when
        LANDSCAPE_CLASSIFIER_LOG_FILE=1
    """
    logger = logging.getLogger(f"landscape_classifier.{name}")
    if logger.handlers:
        return logger

    level_name = os.environ.get(LEVEL_ENV, "INFO").upper()
    logger.setLevel(getattr(logging, level_name, logging.INFO))

    formatter = logging.Formatter(LOG_FORMAT)

    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(formatter)
    logger.addHandler(stream_handler)

    if os.environ.get(FILE_ENV) == "1":
        log_dir = Path(GeneralPath.LOG_PATH)
        log_dir.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_dir / f"{name}.log", encoding="utf-8")
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger
