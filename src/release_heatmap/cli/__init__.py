"""CLI entry point -- registers all subcommands."""

import typer

app = typer.Typer(
    name="release-heatmap",
    help="Release Heatmap - calendar heatmap of feature releases with category treemaps",
    add_completion=False,
    rich_markup_mode="rich",
)


# Import subcommands to register them
from .main import main as _main_callback  # noqa: F401, E402
from .report import report as _report  # noqa: F401, E402
from .quarter import quarter as _quarter  # noqa: F401, E402
from .day import day as _day  # noqa: F401, E402
