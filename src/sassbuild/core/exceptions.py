"""
Custom exceptions for sassbuild.
"""

from pathlib import Path
from typing import Sequence


class SassBuildError(Exception):
    """Base exception for sassbuild errors."""


class FilesystemAccessError(SassBuildError):
    """A path could not be statted or listed (permissions, I/O failure, vanished mid-scan)."""

    def __init__(self, message: str, path: Path | None = None):
        super().__init__(message)
        self.path = path


class MissingRootError(SassBuildError):
    """The root of a tree does not exist at all."""

    def __init__(self, path: Path):
        super().__init__(f"Directory not found: {path}")
        self.path = path


class ConfigError(SassBuildError):
    """Invalid or missing configuration."""
    pass


class CompilationError(SassBuildError):
    """The external Sass compiler failed."""

    def __init__(self, message: str, returncode: int | None = None, stderr: str = "",
                 command: Sequence[str] | None = None):
        super().__init__(message)
        self.returncode = returncode
        self.stderr = stderr
        self.command = list(command or [])


class CompilerNotFoundError(CompilationError):
    """The Sass executable could not be found."""
    pass
