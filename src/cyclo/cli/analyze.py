"""``cyclo analyze``: scan a tree and write treemap artifacts."""

from pathlib import Path
from typing import Optional

import typer

from ..api import analyze as run_analysis
from ..debug_export import write_debug_report
from ..exceptions import ConfigurationError, CycloError, EmptyInputError
from ..logging_config import setup_logging
from ..visualization import generate_report, write_tree_json, write_treemap_script
from . import app
from ._common import console, print_skipped, print_summary, resolve_config


@app.command()
def analyze(
    path: Path = typer.Argument(
        ...,
        help="Directory to analyze",
        file_okay=False,
        dir_okay=True,
    ),
    debug: bool = typer.Option(False, "--debug", "-d", help="Write the per-file debug report"),
    debug_file: Path = typer.Option(
        Path("debug.txt"), "--debug-file", help="Where --debug writes its report", dir_okay=False
    ),
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Write tree nodes as JSON", dir_okay=False
    ),
    script: Optional[Path] = typer.Option(
        None, "--script", help="Write the plotly treemap script (var jsondata = ...)", dir_okay=False
    ),
    report: Optional[Path] = typer.Option(
        None, "--report", help="Write a standalone HTML treemap", dir_okay=False
    ),
    colorscale: Optional[str] = typer.Option(
        None, "--colorscale", help="Plotly colorscale name (default: Greens)"
    ),
    top: int = typer.Option(15, "--top", "-t", help="Number of files to list", min=0, max=1000),
    workers: Optional[int] = typer.Option(None, "--workers", "-w", help="Parallel workers", min=1),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="Config file (TOML)"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only print errors"),
    log_file: Optional[Path] = typer.Option(
        None, "--log-file", help="Append a DEBUG-level log to this file", dir_okay=False
    ),
) -> None:
    """
    Estimate cyclomatic complexity for every C/C++ file under PATH.

    [bold cyan]Examples:[/bold cyan]

      cyclo analyze src

      cyclo analyze src --report treemap.html

      cyclo analyze src -d -o tree.json
    """
    logger = setup_logging(verbose=verbose, quiet=quiet, log_file=log_file)

    try:
        settings = resolve_config(
            config=config, workers=workers, debug=debug, colorscale=colorscale
        )
        result = run_analysis(path, config=settings)
    except EmptyInputError as e:
        console.print(f"[yellow]Nothing to analyze:[/yellow] {e.reason} in {e.root}")
        raise typer.Exit(1)
    except ConfigurationError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    except CycloError as e:
        logger.error(f"{e.__class__.__name__}: {e}")
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    except KeyboardInterrupt:
        console.print("\n[yellow]Analysis interrupted[/yellow]")
        raise typer.Exit(130)

    if not quiet:
        print_summary(result, top=top)
        if verbose:
            print_skipped(result)

    scheme = settings.colorscheme
    written = []
    if output is not None:
        written.append(write_tree_json(result.tree, str(output)))
    if script is not None:
        written.append(write_treemap_script(result.tree, str(script), scheme))
    if report is not None:
        written.append(generate_report(result, str(report), scheme))
    if settings.debug:
        written.append(write_debug_report(result, str(debug_file)))

    if not quiet:
        for p in written:
            console.print(f"[green]wrote[/green] {p}")
