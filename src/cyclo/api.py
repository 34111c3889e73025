"""Public API for cyclo.

Example:
    >>> from cyclo import analyze
    >>>
    >>> result = analyze("/path/to/code")
    >>> result.tree.root.value        # total NLOC
    >>> result.tree.root.color        # size-weighted mean complexity
    >>>
    >>> # With customization
    >>> result = analyze("/path/to/code", workers=4, extensions=(".c", ".h"))
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional, Union

from .config import CycloConfig, load_config
from .exceptions import EmptyInputError, FileReadError, MalformedPathError
from .hierarchy import MetricsTree, build_tree
from .logging_config import get_logger
from .scanning.extractor import MetricExtractor
from .scanning.metrics import FileMetrics
from .scanning.walker import iter_source_files

logger = get_logger(__name__)


@dataclass
class AnalysisResult:
    """Everything one scan produced.

    ``tree`` is complete and internally consistent even when files were
    skipped; ``read_errors`` and ``anomalies`` say what was left out.
    """

    root: Path
    tree: MetricsTree
    metrics: dict[str, FileMetrics]
    read_errors: list[FileReadError] = field(default_factory=list)
    anomalies: list[MalformedPathError] = field(default_factory=list)

    @property
    def skipped(self) -> int:
        return len(self.read_errors) + len(self.anomalies)

    def summary(self) -> dict[str, Any]:
        root = self.tree.root
        return {
            "root": str(self.root),
            "file_count": len(self.tree.files()),
            "directory_count": len(self.tree.directories()),
            "total_nloc": root.value,
            "mean_complexity": round(root.color, 4),
            "skipped": self.skipped,
        }

    def top_files(self, n: int = 15) -> list[FileMetrics]:
        """Files placed in the tree, most complex first."""
        placed = [self.metrics[k] for k in self.metrics if k in self.tree]
        return sorted(placed, key=lambda m: (-m.mean_complexity, -m.nloc, m.path))[:n]


def analyze(
    path: Union[str, Path] = ".",
    config: Optional[CycloConfig] = None,
    config_file: Optional[Path] = None,
    **overrides,
) -> AnalysisResult:
    """Scan a C/C++ source tree and aggregate its complexity.

    Pipeline:
    1. Load configuration (unless *config* is given)
    2. Enumerate eligible source files under *path*
    3. Scan each file in parallel into FileMetrics
    4. Fold the metrics into a directory tree

    Args:
        path: Root directory to scan
        config: Ready-made configuration; skips discovery when given
        config_file: Optional explicit config file path
        **overrides: Configuration overrides (e.g., workers=4)

    Returns:
        AnalysisResult with the tree and what was skipped

    Raises:
        InvalidPathError: If *path* is missing or not a directory
        EmptyInputError: If there are no eligible files, or none could be read
        ConfigurationError: If configuration is invalid
    """
    if config is None:
        config = load_config(config_file=config_file, **overrides)

    oversized: list[FileReadError] = []
    files = iter_source_files(Path(path), config, skipped=oversized)
    root = Path(path).resolve()
    if not files:
        if oversized:
            raise EmptyInputError(root, f"all {len(oversized)} eligible files were skipped")
        raise EmptyInputError(root)

    extractor = MetricExtractor(config)
    extraction = extractor.extract_all(files, root)
    if not extraction.metrics:
        raise EmptyInputError(root, f"all {len(files)} files were unreadable")

    tree = build_tree(extraction.metrics, root_label=root.name or str(root))

    result = AnalysisResult(
        root=root,
        tree=tree,
        metrics=extraction.metrics,
        read_errors=sorted(oversized + extraction.errors, key=lambda e: str(e.filepath)),
        anomalies=tree.anomalies,
    )
    logger.info(
        f"Analyzed {root}: {tree.root.value} NLOC, mean complexity {tree.root.color:.2f}, "
        f"{result.skipped} skipped"
    )
    return result
