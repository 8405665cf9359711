"""Report CLI command -- generate the interactive HTML calendar."""

from pathlib import Path
from typing import Optional

import click
import typer

from ..exceptions import ReleaseHeatmapError
from ..logging_config import get_logger
from ..visualization import generate_report
from . import app
from ._common import build_store, console, get_config, resolve_period, treemap_bounds

logger = get_logger(__name__)


@app.command()
def report(
    ctx: typer.Context,
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Output HTML file path",
    ),
    year: Optional[int] = typer.Option(
        None,
        "--year",
        "-y",
        help="Year shown first (default: first year in the data)",
    ),
    quarter: Optional[int] = typer.Option(
        None,
        "--quarter",
        "-q",
        help="Quarter shown first (1-4)",
        min=1,
        max=4,
    ),
    scheme: Optional[str] = typer.Option(
        None,
        "--scheme",
        "-s",
        help="Heatmap colour scheme",
        click_type=click.Choice(["blue", "green", "purple", "rainbow"], case_sensitive=False),
    ),
    hue: Optional[int] = typer.Option(
        None,
        "--hue",
        help="Shade days on this hue (0-359) and add a hue slider to the page",
        min=0,
        max=359,
    ),
):
    """
    Generate a self-contained HTML calendar heatmap.

    Every quarter in the data's year range is embedded; the page steps
    between quarters and lists a day's releases when it is clicked.

    [bold cyan]Examples:[/bold cyan]

      release-heatmap report

      release-heatmap --data releases.xlsx report -o q3.html --year 2023 --quarter 3

      release-heatmap report --hue 280
    """
    config = get_config(ctx)

    try:
        store = build_store(config)
        y, q = resolve_period(config, store, year, quarter)
        report_path = generate_report(
            store,
            year=y,
            quarter=q,
            output_path=str(output or config.output_path),
            scheme=(scheme or config.heatmap_scheme).lower(),
            bounds=treemap_bounds(config),
            min_extent=config.min_extent,
            hue=hue if hue is not None else config.hue,
        )
        console.print(f"\nReport saved to: [bold green]{report_path}[/bold green]")

    except ReleaseHeatmapError as e:
        logger.debug("Report generation failed", exc_info=True)
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
