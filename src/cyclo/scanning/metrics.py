"""Per-file metric computation.

Combines the lexical classifier (for NLOC) with the token scanner (for
decisions and the ``return`` function proxy) into one immutable record.
Anything that wants a more accurate parser later only has to produce a
:class:`FileMetrics`; the hierarchy aggregator never looks further in.
"""

from __future__ import annotations

from dataclasses import dataclass

from .lexer import classify, code_view
from .tokens import count_tokens


@dataclass(frozen=True)
class FileMetrics:
    """Complexity estimate for one source file.

    Attributes:
        path: Root-relative posix path
        nloc: Lines with at least one non-whitespace code character
        decisions: Decision keywords plus ``&&``/``||`` in code
        returns: ``return`` keywords in code
        function_estimate: ``max(returns, 1)``
        mean_complexity: ``decisions / function_estimate + 1``
    """

    path: str
    nloc: int
    decisions: int
    returns: int
    function_estimate: int
    mean_complexity: float

    @classmethod
    def from_counts(cls, path: str, nloc: int, decisions: int, returns: int) -> "FileMetrics":
        if nloc < 0 or decisions < 0 or returns < 0:
            raise ValueError("counts must be non-negative")
        function_estimate = max(returns, 1)
        return cls(
            path=path,
            nloc=nloc,
            decisions=decisions,
            returns=returns,
            function_estimate=function_estimate,
            mean_complexity=decisions / function_estimate + 1.0,
        )


def count_nloc(code: str) -> int:
    """Count lines of *code* (already stripped of comments/literals) that aren't blank.

    Lines are ``\\n``-delimited, matching :func:`code_view`; form feeds and
    other separators inside a line don't start a new one.
    """
    return sum(1 for line in code.split("\n") if line.rstrip("\r").strip())


def compute_file_metrics(path: str, text: str) -> FileMetrics:
    """Scan *text* once and build its :class:`FileMetrics`."""
    code = code_view(text, classify(text))
    counts = count_tokens(code)
    return FileMetrics.from_counts(
        path=path,
        nloc=count_nloc(code),
        decisions=counts.decisions,
        returns=counts.returns,
    )
