"""Base parser class for VersionMatrix inputs."""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

from ..exceptions import InputError
from ...utils.path_utils import validate_input_file


class BaseParser(ABC):
    """Abstract base class for text input parsers."""

    def __init__(self) -> None:
        """Initialize the parser."""
        self.input_type: str = ""

    @abstractmethod
    def parse_text(self, text: str) -> Any:
        """Parse input text.

        Args:
            text: Raw input text

        Returns:
            Parsed representation of the input
        """
        pass

    def parse(self, file_path: Path) -> Any:
        """Read and parse an input file.

        Args:
            file_path: Path to the file to parse

        Returns:
            Parsed representation of the file

        Raises:
            InputError: If the file is missing or unreadable
        """
        return self.parse_text(self.read(file_path))

    def read(self, file_path: Path) -> str:
        """Read an input file after validating it.

        Raises:
            InputError: If the file is missing or unreadable
        """
        validate_input_file(file_path)
        try:
            return file_path.read_text(encoding='utf-8')
        except (OSError, UnicodeDecodeError) as e:
            raise InputError(f"Cannot read {self.input_type} file {file_path}: {e}") from e
