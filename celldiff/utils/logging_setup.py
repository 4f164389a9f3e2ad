"""
Shared logging setup for Excel Cell Differ.

Provides coloured console logging and optional detailed file logging.
"""
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional, Union


class ColourFormatter(logging.Formatter):
    """
    Custom formatter with colour support for console output.
    """

    # ANSI colour codes
    COLOURS = {
        'DEBUG': '\033[36m',    # Cyan
        'INFO': '\033[32m',     # Green
        'WARNING': '\033[33m',  # Yellow
        'ERROR': '\033[31m',    # Red
        'CRITICAL': '\033[35m', # Magenta
        'RESET': '\033[0m',     # Reset
    }

    def format(self, record):
        """Format log record with colour for console."""
        # Colour a copy so file handlers sharing the record see the plain name
        record = logging.makeLogRecord(record.__dict__)
        levelname = record.levelname
        if levelname in self.COLOURS:
            record.levelname = f"{self.COLOURS[levelname]}{levelname:<8}{self.COLOURS['RESET']}"

        return super().format(record)


def setup_logging(
    log_level: str = 'INFO',
    log_dir: Optional[Union[str, Path]] = None,
    component: str = 'celldiff'
) -> logging.Logger:
    """
    Set up logging for the application.

    Configures:
    - Console: coloured output on stderr at the given level (stdout carries reports)
    - File: detailed DEBUG output, only when log_dir is given

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        log_dir: Directory for log files (None = console only)
        component: Component name for log filename

    Returns:
        Root logger
    """
    level = getattr(logging, log_level.upper())

    logger = logging.getLogger()
    logger.setLevel(logging.DEBUG if log_dir else level)

    # Remove existing handlers
    logger.handlers = []

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(ColourFormatter(
        '[%(asctime)s] %(levelname)s | %(name)-12s | %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    ))
    logger.addHandler(console_handler)

    if log_dir is not None:
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)

        timestamp = datetime.now().strftime('%Y%m%d_%H%M%S')
        log_file = log_path / f'{component}_{timestamp}.log'

        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setLevel(logging.DEBUG)  # Always DEBUG in file
        file_handler.setFormatter(logging.Formatter(
            '[%(asctime)s] %(levelname)-8s | %(name)-12s | %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        ))
        logger.addHandler(file_handler)

        logger.debug(f"Logging initialised (level: {log_level}, file: {log_file})")
    else:
        logger.debug(f"Logging initialised (level: {log_level})")

    return logger
