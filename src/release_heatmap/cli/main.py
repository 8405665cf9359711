"""Top-level callback -- global options shared by every subcommand."""

from pathlib import Path
from typing import Optional

import typer

from ..config import load_config
from ..exceptions import ReleaseHeatmapError
from ..logging_config import setup_logging
from . import app
from ._common import console


@app.callback(invoke_without_command=True, no_args_is_help=True)
def main(
    ctx: typer.Context,
    data: Optional[Path] = typer.Option(
        None,
        "--data",
        "-d",
        help="Release spreadsheet (.xlsx) or CSV export (default: sample data)",
        dir_okay=False,
    ),
    seed: Optional[int] = typer.Option(
        None,
        "--seed",
        help="Seed for sample data and fabricated metadata",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose logging",
    ),
    log_file: Optional[Path] = typer.Option(
        None,
        "--log-file",
        help="Also append log messages to this file",
        dir_okay=False,
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Configuration file (TOML)",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
    version: bool = typer.Option(
        False,
        "--version",
        help="Show version and exit",
    ),
):
    """
    Visualise feature releases as a quarterly calendar heatmap.

    Each day is coloured by its release count and subdivided into a
    squarified treemap of release categories.

    [bold cyan]Examples:[/bold cyan]

      release-heatmap report --data data/releases.xlsx

      release-heatmap quarter --year 2023 --quarter 2

      release-heatmap day 2022-03-14
    """
    if version:
        from .. import __version__

        console.print(
            f"[bold cyan]Release Heatmap[/bold cyan] version [green]{__version__}[/green]"
        )
        raise typer.Exit(0)

    try:
        settings = load_config(
            config_file=config,
            data_file=str(data) if data else None,
            sample_seed=seed,
            verbose=verbose,
            log_file=str(log_file) if log_file else None,
        )
    except ReleaseHeatmapError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    setup_logging(settings.verbosity, log_file=settings.log_file)

    ctx.ensure_object(dict)
    ctx.obj["config"] = settings
