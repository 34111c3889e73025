"""Source enumeration: find C/C++ files under a root and read them."""

from __future__ import annotations

import fnmatch
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional

from ..config import CycloConfig
from ..exceptions import FileReadError, FileTooLargeError, InvalidPathError
from ..logging_config import get_logger

logger = get_logger(__name__)

_BOM = "\ufeff"


@dataclass(frozen=True)
class SourceFile:
    """A file's path and its decoded text, read once."""

    path: Path
    text: str


def is_file_extension_valid(name: str, extensions: Iterable[str]) -> bool:
    """True if *name* ends with one of *extensions*."""
    return any(name.endswith(ext) for ext in extensions)


def is_hidden(path: Path) -> bool:
    """True if any component of *path* starts with a dot."""
    return any(part.startswith(".") and part not in (".", "..") for part in path.parts)


def _matches_any(rel_posix: str, patterns: Iterable[str]) -> bool:
    return any(fnmatch.fnmatch(rel_posix, pat) for pat in patterns)


def iter_source_files(
    root: Path,
    config: Optional[CycloConfig] = None,
    skipped: Optional[list[FileReadError]] = None,
) -> list[Path]:
    """Enumerate eligible source files under *root*.

    Hidden directories are pruned (unless allowed), exclude patterns are
    matched against root-relative posix paths, and files over the size
    limit are skipped.

    Args:
        root: Directory to walk
        config: File selection settings
        skipped: If given, eligible files that were left out because they
            couldn't be stat'ed or exceed the size limit are appended here
            as FileReadError

    Returns:
        Sorted list of absolute file paths

    Raises:
        InvalidPathError: If *root* does not exist or is not a directory
    """
    config = config or CycloConfig()
    root = Path(root)
    if not root.exists():
        raise InvalidPathError(root, "does not exist")
    if not root.is_dir():
        raise InvalidPathError(root, "not a directory")
    root = root.resolve()

    found: list[Path] = []
    dropped = 0

    def _drop(error: FileReadError) -> None:
        nonlocal dropped
        dropped += 1
        logger.warning(f"Skipping {error.filepath}: {error.reason}")
        if skipped is not None:
            skipped.append(error)

    for dirpath, dirnames, filenames in os.walk(root, followlinks=config.follow_symlinks):
        dir_rel = Path(dirpath).relative_to(root)

        kept = []
        for d in sorted(dirnames):
            d_rel = (dir_rel / d).as_posix()
            if not config.allow_hidden_files and is_hidden(Path(d)):
                continue
            if _matches_any(d_rel + "/", config.exclude_patterns) or _matches_any(
                d_rel, config.exclude_patterns
            ):
                logger.debug(f"Skipped directory (pattern): {d_rel}")
                continue
            kept.append(d)
        dirnames[:] = kept

        for fname in sorted(filenames):
            if not is_file_extension_valid(fname, config.extensions):
                continue
            if not config.allow_hidden_files and is_hidden(Path(fname)):
                continue

            fpath = Path(dirpath) / fname
            rel = (dir_rel / fname).as_posix()
            if _matches_any(rel, config.exclude_patterns):
                logger.debug(f"Skipped (pattern): {rel}")
                continue

            try:
                size = fpath.stat().st_size
            except OSError as e:
                _drop(FileReadError(fpath, f"cannot stat file: {e.strerror or e}"))
                continue
            if size > config.max_file_size_bytes:
                _drop(FileTooLargeError(fpath, size, config.max_file_size_mb))
                continue

            if len(found) >= config.max_files:
                logger.warning(f"Reached max files limit ({config.max_files})")
                return sorted(found)

            found.append(fpath)

    logger.info(f"Enumerated {len(found)} source files under {root} ({dropped} skipped)")
    return sorted(found)


def read_source(path: Path, encoding: str = "utf-8") -> SourceFile:
    """Read and decode one source file.

    Raises:
        FileReadError: If the file can't be read, looks binary, or can't
            be decoded with *encoding*
    """
    try:
        raw = Path(path).read_bytes()
    except OSError as e:
        raise FileReadError(path, f"cannot read file: {e.strerror or e}")

    if b"\x00" in raw:
        raise FileReadError(path, "binary content (NUL byte)")

    try:
        text = raw.decode(encoding)
    except UnicodeDecodeError as e:
        raise FileReadError(path, f"not valid {encoding} text at byte {e.start}")

    if text.startswith(_BOM):
        text = text[1:]
    return SourceFile(path=Path(path), text=text)
