"""Centralized logging configuration and utilities."""

import logging
from pathlib import Path
from typing import Optional

from rich.logging import RichHandler

from .console import console

CONFIG = 21
SUCCESS = 25

logging.addLevelName(CONFIG, "CONFIG")
logging.addLevelName(SUCCESS, "SUCCESS")

_TAGS = {
    logging.WARNING: "WARN",
    logging.CRITICAL: "FATAL",
}

CONSOLE_FORMAT = "[%(tag)s] %(message)s"
FILE_FORMAT = "%(asctime)s - %(name)s - [%(tag)s] %(message)s"


class TagFilter(logging.Filter):
    """Attach the short line tag (INFO, WARN, FATAL...) to every record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.tag = _TAGS.get(record.levelno, record.levelname)
        return True


class ConsoleLineHandler(logging.Handler):
    """Write each formatted record as a single unwrapped line on the shared console."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            console.print_line(self.format(record))
        except Exception:
            self.handleError(record)


def setup_logging(
        level: int = logging.INFO,
        log_file: Optional[str] = None,
        log_dir: str = "logs",
        console_output: bool = True
) -> logging.Logger:
    """
    Set up centralized logging configuration.

    Args:
        level: Logging level
        log_file: Optional log file name, created under log_dir
        log_dir: Directory for the log file
        console_output: Whether to output to console

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger("socks_keeper")
    logger.setLevel(level)

    logger.handlers.clear()

    if log_file:
        path = Path(log_dir)
        path.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(path / log_file)
        file_handler.setLevel(level)
        file_handler.addFilter(TagFilter())
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt='%m/%d/%y %H:%M:%S'))
        logger.addHandler(file_handler)

    if console_output:
        if console.console.is_terminal:
            console_handler = RichHandler(
                console=console.console,
                rich_tracebacks=True,
                show_time=False,
                show_level=False,
                show_path=False,
                markup=False
            )
        else:
            # Piped output keeps one record per line instead of wrapping at 80 columns
            console_handler = ConsoleLineHandler()

        console_handler.setLevel(level)
        console_handler.addFilter(TagFilter())
        console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))

        logger.addHandler(console_handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance for a specific module."""
    return logging.getLogger(f"socks_keeper.{name}")
