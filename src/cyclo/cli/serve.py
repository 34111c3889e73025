"""``cyclo serve``: analyze once and serve the treemap over HTTP."""

from pathlib import Path
from typing import Optional

import typer
from rich.markup import escape

from ..api import analyze as run_analysis
from ..exceptions import CycloError, EmptyInputError
from ..logging_config import get_logger, setup_logging
from . import app
from ._common import console, resolve_config

logger = get_logger(__name__)


@app.command()
def serve(
    path: Path = typer.Argument(..., help="Directory to analyze", file_okay=False, dir_okay=True),
    port: int = typer.Option(8000, "--port", "-p", help="Port to listen on"),
    host: str = typer.Option("127.0.0.1", help="Host to bind to"),
    colorscale: Optional[str] = typer.Option(None, "--colorscale", help="Plotly colorscale name"),
    config: Optional[Path] = typer.Option(None, "-c", "--config", help="Config file"),
    workers: Optional[int] = typer.Option(None, "-w", "--workers", help="Parallel workers", min=1),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Verbose logging"),
    log_file: Optional[Path] = typer.Option(
        None, "--log-file", help="Append a DEBUG-level log to this file", dir_okay=False
    ),
) -> None:
    """Analyze PATH, then serve the treemap at http://HOST:PORT."""
    try:
        from ..server import check_serve_deps

        check_serve_deps()
    except ImportError as exc:
        console.print(f"[red]{escape(str(exc))}[/red]")
        raise typer.Exit(1)

    import uvicorn

    from ..server.app import create_app

    setup_logging(verbose=verbose, log_file=log_file)

    try:
        settings = resolve_config(config=config, workers=workers, colorscale=colorscale)
        console.print(f"[bold]Analyzing[/bold] {path}")
        with console.status("[cyan]Scanning sources..."):
            result = run_analysis(path, config=settings)
    except EmptyInputError as e:
        console.print(f"[yellow]Nothing to analyze:[/yellow] {e.reason} in {e.root}")
        raise typer.Exit(1)
    except CycloError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    summary = result.summary()
    console.print(
        f"[green]Ready[/green]: {summary['file_count']} files, "
        f"mean complexity {summary['mean_complexity']:.2f}"
    )

    url = f"http://{host}:{port}"
    console.print(f"[bold]Treemap[/bold] at [link={url}]{url}[/link]")
    console.print("[dim]Press Ctrl+C to stop[/dim]")

    asgi_app = create_app(result, settings.colorscheme)
    logger.info(f"Serving {summary['root']} on {url}")
    try:
        uvicorn.run(
            asgi_app,
            host=host,
            port=port,
            log_level="warning" if not verbose else "info",
        )
    except KeyboardInterrupt:
        pass
    finally:
        console.print("\n[dim]Stopped.[/dim]")
