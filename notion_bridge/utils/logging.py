"""Logging setup with verbosity levels and file logging."""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Iterable, Optional

# Third-party loggers that are too chatty below WARNING at low verbosity
NOISY_LOGGERS = ("httpx", "httpcore", "notion_client", "uvicorn.access")

VERBOSITY_FLAGS = {"-v": 1, "-vv": 2, "-vvv": 3}


def setup_logging(
    verbosity: int = 0,
    log_file: Optional[str] = None,
    log_dir: str = "logs",
) -> logging.Logger:
    """
    Set up console and file logging.

    Args:
        verbosity: 0=WARNING, 1=INFO, 2 and above=DEBUG on the console;
            at 3 the third-party loggers are let through as well
        log_file: Log file path; defaults to a timestamped file in log_dir
        log_dir: Directory for the default log file

    Returns:
        Logger for this module
    """
    if verbosity <= 0:
        log_level = logging.WARNING
    elif verbosity == 1:
        log_level = logging.INFO
    else:
        log_level = logging.DEBUG

    if log_file is None:
        logs_dir = Path(log_dir)
        logs_dir.mkdir(parents=True, exist_ok=True)
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_path = logs_dir / f"notion_bridge_{timestamp}.log"
    else:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(
        logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    root_logger.addHandler(console_handler)

    # File handler always captures DEBUG
    file_handler = logging.FileHandler(log_path, encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(
        logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    root_logger.addHandler(file_handler)

    if verbosity < 3:
        for name in NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)

    logger = logging.getLogger(__name__)
    logger.info(f"Logging initialized. Verbosity: {verbosity}, Log file: {log_path}")
    return logger


def parse_verbosity(args: Iterable[str]) -> int:
    """
    Parse verbosity level from command line arguments.

    Args:
        args: Command line arguments

    Returns:
        Verbosity level (0-3); the last flag given wins
    """
    verbosity = 0
    for arg in args:
        if arg in VERBOSITY_FLAGS:
            verbosity = VERBOSITY_FLAGS[arg]
    return verbosity


def strip_verbosity(args: Iterable[str]) -> list:
    """Return the arguments without verbosity flags."""
    return [arg for arg in args if arg not in VERBOSITY_FLAGS]
