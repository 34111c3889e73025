"""Shared CLI helpers."""

from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from ..api import AnalysisResult
from ..config import CycloConfig, load_config

console = Console()


def resolve_config(
    config: Optional[Path] = None,
    workers: Optional[int] = None,
    debug: Optional[bool] = None,
    colorscale: Optional[str] = None,
) -> CycloConfig:
    """Build configuration from CLI options."""
    overrides = {}
    if workers is not None:
        overrides["workers"] = workers
    if debug:
        overrides["debug"] = True
    if colorscale is not None:
        overrides["colorscheme"] = colorscale
    return load_config(config_file=config, **overrides)


def _complexity_style(cc: float) -> str:
    if cc >= 10.0:
        return "red bold"
    elif cc >= 5.0:
        return "yellow"
    return "green"


def print_summary(result: AnalysisResult, top: int = 15) -> None:
    """Summary panel plus the most complex files."""
    s = result.summary()
    console.print(
        Panel(
            f"[bold]{s['file_count']}[/bold] files in [bold]{s['directory_count']}[/bold] directories\n"
            f"[bold]{s['total_nloc']}[/bold] lines of code\n"
            f"mean complexity [{_complexity_style(s['mean_complexity'])}]"
            f"{s['mean_complexity']:.2f}[/]"
            + (f"\n[yellow]{s['skipped']} file(s) skipped[/yellow]" if s["skipped"] else ""),
            title=f"[bold cyan]cyclo[/bold cyan] {s['root']}",
            expand=False,
        )
    )

    files = result.top_files(top)
    if not files:
        return
    table = Table(title=f"Top {len(files)} files by mean complexity")
    table.add_column("File", style="cyan", overflow="fold")
    table.add_column("NLOC", justify="right")
    table.add_column("Decisions", justify="right")
    table.add_column("Functions", justify="right")
    table.add_column("Mean CC", justify="right")
    for fm in files:
        table.add_row(
            fm.path,
            str(fm.nloc),
            str(fm.decisions),
            str(fm.function_estimate),
            f"[{_complexity_style(fm.mean_complexity)}]{fm.mean_complexity:.2f}[/]",
        )
    console.print(table)


def print_skipped(result: AnalysisResult) -> None:
    for err in list(result.read_errors) + list(result.anomalies):
        console.print(f"[yellow]{err.kind}[/yellow] {err.filepath}: {err.reason}")
