"""
cyclo - heuristic cyclomatic complexity for C/C++ source trees

Scans C/C++ files without a compiler front end, estimates per-file mean
cyclomatic complexity and lines of code, and folds them into a directory
tree ready for a treemap (box size = NLOC, box color = mean complexity).
"""

__version__ = "0.2.0"

from .api import AnalysisResult, analyze
from .hierarchy import MetricsTree, TreeNode, build_tree
from .scanning.metrics import FileMetrics, compute_file_metrics

__all__ = [
    "analyze",  # Main entry point
    "AnalysisResult",
    "build_tree",
    "MetricsTree",
    "TreeNode",
    "FileMetrics",
    "compute_file_metrics",
]
