from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class FileBundlerError(Exception):
    """Base exception for errors in the file_bundler module."""


@dataclass(frozen=True)
class BundleValidationError(FileBundlerError):
    """Raised when a bundle option is missing or invalid, before any I/O happens."""

    field: str
    message: str

    def __str__(self) -> str:
        return f"{self.field}: {self.message}" if self.field else self.message


@dataclass(frozen=True)
class OutputPathError(FileBundlerError):
    """Raised when the directory of the output file does not exist."""

    path: Path
    message: str = "File path is invalid"

    def __str__(self) -> str:
        return f"{self.message}: {self.path}"


@dataclass(frozen=True)
class SourceFileError(FileBundlerError):
    """Raised when a source file cannot be read or the bundle cannot be written."""

    path: Path
    reason: str

    def __str__(self) -> str:
        return f"{self.path}: {self.reason}"


@dataclass(frozen=True)
class ResponseFileError(FileBundlerError):
    """Raised when the response file cannot be written."""

    path: Path
    reason: str

    def __str__(self) -> str:
        return f"Cannot write response file {self.path}: {self.reason}"
