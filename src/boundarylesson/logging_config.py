"""
Logging Configuration
Sets up the 'boundarylesson' logger for the lesson window and the CLI.

The console shows the requested level. A log file, when given, always
records DEBUG so stage transitions and dataset swaps can be traced after a
session without rerunning it in debug mode.
"""
import logging
import sys
from typing import Optional

PACKAGE_LOGGER = "boundarylesson"
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%H:%M:%S'

# Third-party loggers that are chatty at DEBUG
NOISY_LOGGERS = ("pyqtgraph",)


def setup_logging(level: int = logging.INFO, log_file: Optional[str] = None) -> logging.Logger:
    """
    Configures the package logger.

    Args:
        level: Console level (e.g. logging.DEBUG, logging.INFO).
        log_file: Optional path; the file receives every DEBUG record.

    Returns:
        The configured package logger.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(logging.DEBUG if log_file else level)

    # Calling this twice must not duplicate output
    if logger.hasHandlers():
        for handler in list(logger.handlers):
            handler.close()
        logger.handlers.clear()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logger.debug(f"Logging initialized (console={logging.getLevelName(level)}, file={log_file}).")
    return logger
