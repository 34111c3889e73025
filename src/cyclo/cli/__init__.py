"""CLI entry point: registers all subcommands."""

import typer

from .. import __version__
from ._common import console

app = typer.Typer(
    name="cyclo",
    help="cyclo - C/C++ cyclomatic complexity treemaps",
    add_completion=False,
    rich_markup_mode="rich",
    no_args_is_help=True,
)


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"[bold cyan]cyclo[/bold cyan] version [green]{__version__}[/green]")
        raise typer.Exit(0)


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        help="Show version and exit",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """Estimate C/C++ complexity and lay it out as a treemap."""


# Import subcommands to register them
from .analyze import analyze as _analyze  # noqa: F401, E402
from .serve import serve as _serve  # noqa: F401, E402
