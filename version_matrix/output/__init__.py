"""Output formatters for VersionMatrix."""

from .formatters import ConsoleFormatter, MatrixFormatter, render, render_profile

__all__ = [
    "ConsoleFormatter",
    "MatrixFormatter",
    "render",
    "render_profile",
]
