"""CLI entry point — registers the report subcommands."""

import typer

app = typer.Typer(
    name="northwind-reports",
    help="Northwind Reporting - product reports from the Northwind OData service",
    add_completion=False,
    rich_markup_mode="rich",
    no_args_is_help=True,
    # Report names are matched case-insensitively
    context_settings={"token_normalize_func": str.lower},
)


# Import subcommands to register them
from .root import main_callback as _main_callback  # noqa: F401, E402
from . import reports as _reports  # noqa: F401, E402


def main() -> None:
    """Console script entry point."""
    app()
