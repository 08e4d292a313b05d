"""Logging utilities for VersionMatrix."""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional
from rich.console import Console
from rich.logging import RichHandler
from rich.theme import Theme

# Marks the log line that carries a fatal error, for callers scraping the log
ERROR_MSG_FLAG = "ERROR_MSG_FLAG"

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class MatrixLogger:
    """Named logger with rich console output."""

    def __init__(self, name: str, level: int = logging.INFO) -> None:
        self.logger = logging.getLogger(name)
        self.logger.setLevel(level)
        self._setup_handlers()

    def _setup_handlers(self) -> None:
        """Attach a rich stderr handler, replacing any previous one."""
        console = Console(stderr=True, theme=Theme({
            "info": "cyan",
            "warning": "yellow",
            "error": "red",
            "debug": "dim",
        }))

        handler = RichHandler(
            console=console,
            show_time=True,
            show_path=False,
            markup=False,
        )
        handler.setFormatter(logging.Formatter(fmt="%(name)s: %(message)s", datefmt="[%X]"))

        for existing in [h for h in self.logger.handlers if isinstance(h, RichHandler)]:
            self.logger.removeHandler(existing)
        self.logger.addHandler(handler)
        self.logger.propagate = False

    def set_level(self, level: int) -> None:
        self.logger.setLevel(level)

    def add_file_handler(self, log_file: Path) -> None:
        """Also write this logger's records to ``log_file``."""
        for existing in self.logger.handlers:
            if isinstance(existing, logging.FileHandler) and existing.baseFilename == os.path.abspath(log_file):
                return
        handler = logging.FileHandler(log_file, encoding="utf-8")
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        self.logger.addHandler(handler)

    def info(self, msg: str, **kwargs: Any) -> None:
        self.logger.info(msg, extra=kwargs)

    def warning(self, msg: str, **kwargs: Any) -> None:
        self.logger.warning(msg, extra=kwargs)

    def error(self, msg: str, **kwargs: Any) -> None:
        self.logger.error(msg, extra=kwargs)

    def fatal(self, msg: str, **kwargs: Any) -> None:
        """Log a run-terminating error behind the ``ERROR_MSG_FLAG`` marker."""
        self.logger.error(f"{ERROR_MSG_FLAG} {msg}", extra=kwargs)

    def debug(self, msg: str, **kwargs: Any) -> None:
        self.logger.debug(msg, extra=kwargs)


_loggers: Dict[str, MatrixLogger] = {}
_level: int = logging.INFO
_log_file: Optional[Path] = None


def setup_logging(
    level: int = logging.INFO,
    log_file: Optional[Path] = None,
    verbose: bool = False
) -> None:
    """Setup logging configuration for VersionMatrix.

    Applies to loggers already handed out and to those created later.

    Args:
        level: Logging level
        log_file: Optional log file path
        verbose: Enable debug logging
    """
    global _level, _log_file

    if verbose:
        level = logging.DEBUG

    _level = level
    _log_file = log_file

    for matrix_logger in _loggers.values():
        _configure(matrix_logger)


def _configure(matrix_logger: MatrixLogger) -> None:
    matrix_logger.set_level(_level)
    if _log_file:
        matrix_logger.add_file_handler(_log_file)


def get_logger(name: str) -> MatrixLogger:
    """Get a VersionMatrix logger instance.

    Args:
        name: Logger name

    Returns:
        Configured logger instance
    """
    if name not in _loggers:
        matrix_logger = MatrixLogger(name, _level)
        _configure(matrix_logger)
        _loggers[name] = matrix_logger
    return _loggers[name]
