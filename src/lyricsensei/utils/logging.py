"""Logging configuration for LyricSensei."""

import logging
import sys
from pathlib import Path
from typing import Optional

# HTTP client and SDK loggers are chatty at INFO (one line per request)
NOISY_LOGGERS = ("httpx", "httpcore", "openai")

VERBOSE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
PLAIN_FORMAT = "%(levelname)s: %(message)s"


def setup_logging(
    level: str = "INFO", log_file: Optional[Path] = None, verbose: bool = False
) -> logging.Logger:
    """Configure the package logger and return it."""
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logger = logging.getLogger("lyricsensei")
    logger.setLevel(getattr(logging, level.upper()))
    logger.handlers.clear()

    formatter = logging.Formatter(VERBOSE_FORMAT if verbose else PLAIN_FORMAT)

    # stderr, so translated output on stdout stays pipeable
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def get_logger(name: str = "lyricsensei") -> logging.Logger:
    """Get logger instance."""
    return logging.getLogger(name)


def preview(text: Optional[str], limit: int = 30) -> str:
    """Shorten a lyric line for log messages."""
    if not text:
        return ""
    return text if len(text) <= limit else text[:limit] + "..."
