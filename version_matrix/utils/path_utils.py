"""Path utilities for input validation and output preparation."""

import os
from pathlib import Path

from ..core.exceptions import InputError, MatrixWriteError


def validate_input_file(file_path: Path) -> None:
    """Validate that an input file exists and is readable.

    Args:
        file_path: Path to validate

    Raises:
        InputError: If the path is missing, not a regular file or not readable
    """
    if not file_path.exists() or not file_path.is_file():
        raise InputError(f"File not exists or isn't a file: {file_path.absolute()}")

    if not os.access(file_path, os.R_OK):
        raise InputError(f"File is not readable: {file_path.absolute()}")


def ensure_parent_dir(file_path: Path) -> Path:
    """Create the parent directories of an output file.

    Args:
        file_path: Output file path

    Returns:
        The parent directory

    Raises:
        MatrixWriteError: If the directory cannot be created
    """
    parent = file_path.absolute().parent
    try:
        parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise MatrixWriteError(f"Create output directory failed: {parent}: {e}") from e
    return parent
