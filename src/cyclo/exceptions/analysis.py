"""Analysis-related exceptions: unreadable files, empty input, stray paths."""

from pathlib import Path
from typing import Union

from .base import CycloError

PathLike = Union[str, Path]


class AnalysisError(CycloError):
    """Base class for analysis-related errors."""

    kind = "analysis"


class FileReadError(AnalysisError):
    """Raised when a source file cannot be read or is not valid text.

    Recoverable: the file is skipped and the scan continues.
    """

    kind = "unreadable"

    def __init__(self, filepath: PathLike, reason: str):
        super().__init__(
            f"Cannot read file: {filepath}",
            details={"filepath": str(filepath), "reason": reason},
        )
        self.filepath = filepath
        self.reason = reason


class FileTooLargeError(FileReadError):
    """Raised when a source file exceeds the configured size limit."""

    kind = "too_large"

    def __init__(self, filepath: PathLike, size: int, limit_mb: float):
        super().__init__(filepath, f"larger than the {limit_mb:g} MB limit ({size} bytes)")
        self.size = size
        self.limit_mb = limit_mb


class EmptyInputError(AnalysisError):
    """Raised when there is nothing to analyze under the scan root."""

    kind = "empty_input"

    def __init__(self, root: PathLike, reason: str = "no eligible C/C++ source files"):
        super().__init__(
            f"Nothing to analyze in {root}",
            details={"root": str(root), "reason": reason},
        )
        self.root = root
        self.reason = reason


class MalformedPathError(AnalysisError):
    """Raised when a file path cannot be placed under the scan root."""

    kind = "malformed_path"

    def __init__(self, filepath: PathLike, root: PathLike, reason: str):
        super().__init__(
            f"Cannot place {filepath} under {root}",
            details={"filepath": str(filepath), "root": str(root), "reason": reason},
        )
        self.filepath = filepath
        self.root = root
        self.reason = reason
