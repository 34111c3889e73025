"""MetricExtractor: produces FileMetrics for every enumerated file.

Each file is read and scanned independently, so the work is a plain
parallel map. Results are collected into a dict keyed by root-relative
posix path; insertion order does not matter to the aggregator.

Usage:
    extractor = MetricExtractor(config)
    result = extractor.extract_all(file_paths, root_dir)
    result.metrics   # dict[path, FileMetrics]
    result.errors    # files that were skipped
"""

from __future__ import annotations

import os
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from pathlib import Path
from threading import Lock
from typing import Optional

from ..config import CycloConfig
from ..exceptions import FileReadError
from ..logging_config import get_logger
from .metrics import FileMetrics, compute_file_metrics
from .walker import read_source

logger = get_logger(__name__)

# Default worker count: use CPU count, capped at 8 to avoid overwhelming I/O
_DEFAULT_WORKERS = min(os.cpu_count() or 4, 8)


@dataclass
class ExtractionResult:
    """Metrics for the files that could be read, plus the ones that could not."""

    metrics: dict[str, FileMetrics] = field(default_factory=dict)
    errors: list[FileReadError] = field(default_factory=list)


def relative_key(path: Path, root: Path) -> str:
    """Root-relative posix key for *path*, or its posix form if it isn't under *root*.

    Paths that can't be placed under the root are passed through so the
    aggregator can report them as malformed.
    """
    try:
        return Path(path).relative_to(root).as_posix()
    except ValueError:
        return Path(path).as_posix()


class MetricExtractor:
    """Extracts FileMetrics from source files.

    Attributes:
        scanned: Number of files successfully scanned
        failed: Number of files skipped because they couldn't be read
    """

    def __init__(self, config: Optional[CycloConfig] = None) -> None:
        self.config = config or CycloConfig()
        self._max_workers = self.config.workers or _DEFAULT_WORKERS
        self._lock = Lock()
        self.scanned = 0
        self.failed = 0

    def extract(self, file_path: Path, root_dir: Path) -> FileMetrics:
        """Read and scan a single file.

        Raises:
            FileReadError: If the file can't be read as text
        """
        source = read_source(file_path, self.config.encoding)
        metrics = compute_file_metrics(relative_key(file_path, root_dir), source.text)
        with self._lock:
            self.scanned += 1
        logger.debug(
            f"Scanned {metrics.path}: nloc={metrics.nloc} decisions={metrics.decisions} "
            f"returns={metrics.returns}"
        )
        return metrics

    def extract_all(
        self,
        file_paths: list[Path],
        root_dir: Path,
        parallel: bool = True,
    ) -> ExtractionResult:
        """Scan all files, skipping (and recording) any that can't be read.

        Args:
            file_paths: Files to scan
            root_dir: Root directory for relative path keys
            parallel: Use the thread pool for batches at or above the
                configured parallel threshold
        """
        result = ExtractionResult()

        def _record_failure(error: FileReadError) -> None:
            with self._lock:
                self.failed += 1
            result.errors.append(error)
            logger.warning(f"Skipping {error.filepath}: {error.reason}")

        if not parallel or len(file_paths) < self.config.parallel_threshold:
            for fp in file_paths:
                try:
                    metrics = self.extract(fp, root_dir)
                except FileReadError as e:
                    _record_failure(e)
                    continue
                result.metrics[metrics.path] = metrics
        else:
            with ThreadPoolExecutor(max_workers=self._max_workers) as executor:
                futures = {executor.submit(self.extract, fp, root_dir): fp for fp in file_paths}
                for future in as_completed(futures):
                    try:
                        metrics = future.result()
                    except FileReadError as e:
                        _record_failure(e)
                        continue
                    result.metrics[metrics.path] = metrics

        result.errors.sort(key=lambda e: str(e.filepath))
        logger.info(f"Extraction complete: {self.scanned} scanned, {self.failed} skipped")
        return result

    def reset_stats(self) -> None:
        """Reset extraction counters."""
        self.scanned = 0
        self.failed = 0
