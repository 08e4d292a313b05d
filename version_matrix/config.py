"""Run configuration for VersionMatrix."""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .core.exceptions import InputError
from .utils.path_utils import validate_input_file

# Environment variables read by the CLI options
CANDIDATE_VERSIONS_ENV = "CANDIDATE_VERSIONS"
CASE_VERSIONS_FILE_ENV = "CASE_VERSIONS_FILE"
OUTPUT_FILE_ENV = "OUTPUT_FILE"
INCLUDE_CASE_SPECIFIC_VERSION_ENV = "INCLUDE_CASE_SPECIFIC_VERSION"


@dataclass
class MatrixConfig:
    """Inputs of one version matrix run."""

    candidate_versions: Optional[str]
    case_versions_file: Optional[Path]
    output_file: Optional[Path]
    include_case_specific_version: bool = True

    def validate(self) -> None:
        """Validate configuration before any processing starts.

        Raises:
            InputError: For the first missing or invalid setting
        """
        if not self.candidate_versions or not self.candidate_versions.strip():
            raise InputError(f"Missing candidate versions: '{CANDIDATE_VERSIONS_ENV}'")
        if self.case_versions_file is None or not str(self.case_versions_file).strip():
            raise InputError(f"Missing case versions file: '{CASE_VERSIONS_FILE_ENV}'")
        validate_input_file(self.case_versions_file)
        if self.output_file is None or not str(self.output_file).strip():
            raise InputError(f"Missing output file: '{OUTPUT_FILE_ENV}'")
