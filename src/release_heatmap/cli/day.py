"""Day CLI command -- releases, gap and treemap for one calendar day."""

from typing import Optional

import typer
from rich.table import Table

from ..exceptions import ReleaseHeatmapError
from ..ingest import parse_release_date
from ..temporal import TemporalIndex
from ..visualization import layout
from . import app
from ._common import build_store, console, get_config, treemap_bounds


@app.command()
def day(
    ctx: typer.Context,
    when: str = typer.Argument(..., metavar="DATE", help="Calendar day, e.g. 2022-03-14"),
    show_layout: bool = typer.Option(
        True,
        "--layout/--no-layout",
        help="Show the category treemap rectangles",
    ),
):
    """
    Show the releases of one day.

    Includes the days elapsed since the previous release and the
    rectangles of the day's category treemap.
    """
    config = get_config(ctx)

    try:
        target = parse_release_date(when)
        store = build_store(config)
        index = TemporalIndex(store)
        d, m, y = target.day, target.month - 1, target.year
        features = index.features_on_day(d, m, y)
        gap = index.days_since_previous_release(d, m, y)
        nodes = (
            layout(index.category_weights(features), treemap_bounds(config), config.min_extent)
            if features
            else []
        )
    except ReleaseHeatmapError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    console.print(f"\n[bold cyan]{target:%B} {target.day}, {target.year}[/bold cyan]")
    console.print(_gap_text(gap))

    if not features:
        console.print("[yellow]No releases on this day.[/yellow]")
        return

    table = Table(title=f"Features ({len(features)})", show_header=True, header_style="bold")
    table.add_column("Category")
    table.add_column("Description")
    table.add_column("Impact")
    for record in features:
        table.add_row(record.category, record.description, str(record.fields.get("impact", "")))
    console.print(table)

    if show_layout:
        rects = Table(title="Treemap", show_header=True, header_style="bold")
        for col in ("Category", "Count", "x0", "y0", "x1", "y1"):
            rects.add_column(col, justify="left" if col == "Category" else "right")
        for node in nodes:
            r = node.rect
            rects.add_row(
                f"[{node.weight.color}]■[/] {node.category}",
                f"{node.value:g}",
                *(f"{v:.2f}" for v in (r.x0, r.y0, r.x1, r.y1)),
            )
        console.print(rects)


def _gap_text(gap: Optional[int]) -> str:
    if not gap:
        return "[dim]No earlier release[/dim]"
    return f"{gap} day{'s' if gap != 1 else ''} since previous release"
