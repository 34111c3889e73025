"""Debug export: plain-text per-file report.

One line per file placed in the tree::

    file: "src/net/socket.c", nloc: 212, cc: 3.40

followed by any files that were skipped and why. The visualization never
reads this; it is for checking the numbers by eye.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .api import AnalysisResult


def format_debug_report(result: AnalysisResult) -> str:
    """Render the debug report as text."""
    lines = []
    for node in result.tree.files():
        fm = result.metrics.get(node.id)
        decisions = f", decisions: {fm.decisions}, functions: {fm.function_estimate}" if fm else ""
        lines.append(f'file: "{node.id}", nloc: {node.value}, cc: {node.color:.2f}{decisions}')

    if result.read_errors or result.anomalies:
        lines.append("")
        lines.append("skipped:")
        for err in list(result.read_errors) + list(result.anomalies):
            lines.append(f'  "{err.filepath}" ({err.kind}): {err.reason}')

    return "\n".join(lines) + "\n"


def write_debug_report(result: AnalysisResult, output_path: str = "debug.txt") -> str:
    """Write :func:`format_debug_report` to *output_path*. Returns the absolute path."""
    out = Path(output_path).resolve()
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(format_debug_report(result), encoding="utf-8")
    return str(out)
