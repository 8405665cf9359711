"""Quarter CLI command -- release totals per category for one quarter."""

import json
from typing import Optional

import typer
from rich.table import Table

from ..exceptions import ReleaseHeatmapError
from ..temporal import TemporalIndex, months_in_quarter
from ..visualization.calendar import MONTH_NAMES
from . import app
from ._common import build_store, console, get_config, resolve_period


@app.command()
def quarter(
    ctx: typer.Context,
    year: Optional[int] = typer.Option(None, "--year", "-y", help="Year (default: first year in the data)"),
    quarter_number: Optional[int] = typer.Option(
        None, "--quarter", "-q", help="Quarter (1-4)", min=1, max=4
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Output in machine-readable JSON format",
    ),
):
    """
    Show quarterly release statistics.

    Lists every category in the dataset with its release count in the
    quarter, plus per-month totals and the busiest day's count.
    """
    config = get_config(ctx)

    try:
        store = build_store(config)
        y, q = resolve_period(config, store, year, quarter_number)
        index = TemporalIndex(store)
        summary = index.quarter_summary(y, q)
        months = [(MONTH_NAMES[m], len(index.features_in_month(my, m))) for m, my in months_in_quarter(y, q)]
        busiest = index.max_daily_count_in_quarter(y, q)
    except ReleaseHeatmapError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    if json_output:
        print(
            json.dumps(
                {
                    "year": y,
                    "quarter": q + 1,
                    "total": summary.total,
                    "max_daily_count": busiest,
                    "months": dict(months),
                    "categories": {t.category: t.count for t in summary.category_totals},
                },
                indent=2,
            )
        )
        return

    console.print(
        f"\n[bold cyan]{summary.label}[/bold cyan]  "
        f"[bold]{summary.total}[/bold] features, busiest day {busiest}"
    )
    console.print("  " + "   ".join(f"{name}: {count}" for name, count in months))

    table = Table(show_header=True, header_style="bold")
    table.add_column("Category")
    table.add_column("Releases", justify="right")
    for total in summary.category_totals:
        table.add_row(f"[{total.color}]●[/] {total.category}", str(total.count))
    if not summary.category_totals:
        table.add_row("[dim]No data available[/dim]", "")
    console.print(table)
