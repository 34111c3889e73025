"""Scanning layer: classify source text, count tokens, compute per-file metrics."""

from .extractor import ExtractionResult, MetricExtractor
from .lexer import ClassifiedSpan, SpanKind, classify, code_view
from .metrics import FileMetrics, compute_file_metrics, count_nloc
from .tokens import TokenCounts, count_tokens
from .walker import SourceFile, is_file_extension_valid, is_hidden, iter_source_files, read_source

__all__ = [
    "ClassifiedSpan",
    "SpanKind",
    "classify",
    "code_view",
    "TokenCounts",
    "count_tokens",
    "FileMetrics",
    "compute_file_metrics",
    "count_nloc",
    "SourceFile",
    "read_source",
    "iter_source_files",
    "is_file_extension_valid",
    "is_hidden",
    "MetricExtractor",
    "ExtractionResult",
]
