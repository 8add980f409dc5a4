"""Logging setup for the ``gamehub`` logger hierarchy."""
import logging
import os
from typing import Optional


def setup_logging(level: str = 'INFO', log_file: Optional[str] = None) -> logging.Logger:
    """Configure the root GameHub logger.

    Args:
        level:    Log level string (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_file: Optional path of an additional timestamped log file; its
                  directory is created when missing.

    Returns:
        Configured logger instance.
    """
    numeric = getattr(logging, str(level).upper(), logging.INFO)
    logger = logging.getLogger('gamehub')
    if not any(type(h) is logging.StreamHandler for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter('[%(levelname)s] %(name)s: %(message)s'))
        logger.addHandler(handler)
    if log_file and not any(isinstance(h, logging.FileHandler) for h in logger.handlers):
        try:
            log_dir = os.path.dirname(os.path.abspath(log_file))
            os.makedirs(log_dir, exist_ok=True)
            fh = logging.FileHandler(log_file)
            fh.setFormatter(logging.Formatter('[%(asctime)s] %(levelname)s %(name)s: %(message)s'))
            logger.addHandler(fh)
        except OSError:
            logger.warning('Could not create log file handler for %s', log_file)
    logger.setLevel(numeric)
    return logger
