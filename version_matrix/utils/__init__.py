"""Utility functions and helpers for VersionMatrix."""

from .logging import ERROR_MSG_FLAG, setup_logging, get_logger
from .performance import PerformanceMonitor, benchmark
from .path_utils import ensure_parent_dir, validate_input_file

__all__ = [
    "ERROR_MSG_FLAG",
    "setup_logging",
    "get_logger",
    "PerformanceMonitor",
    "benchmark",
    "ensure_parent_dir",
    "validate_input_file",
]
