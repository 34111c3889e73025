"""Exception hierarchy for cyclo."""

from .analysis import (
    AnalysisError,
    EmptyInputError,
    FileReadError,
    FileTooLargeError,
    MalformedPathError,
)
from .base import CycloError
from .config import (
    ConfigurationError,
    InvalidConfigError,
    InvalidPathError,
)

__all__ = [
    "CycloError",
    "AnalysisError",
    "FileReadError",
    "FileTooLargeError",
    "EmptyInputError",
    "MalformedPathError",
    "ConfigurationError",
    "InvalidPathError",
    "InvalidConfigError",
]
