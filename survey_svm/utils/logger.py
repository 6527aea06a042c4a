"""Logging configuration for the survey analysis."""

import logging
import sys

PACKAGE_LOGGER = "survey_svm"


def get_logger(name: str, level: int = logging.INFO) -> logging.Logger:
    """Create a configured logger instance."""
    logger = logging.getLogger(name)
    if not logger.handlers:
        logger.setLevel(level)
        handler = logging.StreamHandler(sys.stdout)
        handler.setLevel(logging.DEBUG)
        fmt = logging.Formatter(
            "[%(asctime)s] %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
        handler.setFormatter(fmt)
        logger.addHandler(handler)
        logger.propagate = False
    return logger


def set_level(level: int) -> None:
    """Set the level on every logger created under the package namespace."""
    for name, logger in logging.Logger.manager.loggerDict.items():
        if name == PACKAGE_LOGGER or name.startswith(PACKAGE_LOGGER + "."):
            if isinstance(logger, logging.Logger):
                logger.setLevel(level)
