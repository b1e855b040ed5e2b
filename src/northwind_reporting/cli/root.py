"""Global options shared by every report command."""

from pathlib import Path
from typing import Optional

import typer

from . import app
from ._common import OutputFormat, console


def _version_callback(value: bool) -> None:
    if value:
        from .. import __version__

        console.print(f"[bold cyan]Northwind Reporting[/bold cyan] version [green]{__version__}[/green]")
        raise typer.Exit(0)


@app.callback()
def main_callback(
    ctx: typer.Context,
    service_url: Optional[str] = typer.Option(
        None,
        "--service-url",
        "-u",
        help="Root URI of the Northwind OData service",
    ),
    timeout: Optional[float] = typer.Option(
        None,
        "--timeout",
        help="Per-request timeout in seconds",
        min=0.1,
    ),
    output_format: Optional[OutputFormat] = typer.Option(
        None,
        "--format",
        "-f",
        help="Output format: text (default), table, json, csv",
        case_sensitive=False,
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Configuration file (TOML)",
        exists=True,
        file_okay=True,
        dir_okay=False,
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose logging",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Only log errors",
    ),
    log_file: Optional[str] = typer.Option(
        None,
        "--log-file",
        help="Append log records to this file",
        hidden=True,
    ),
    version: bool = typer.Option(
        False,
        "--version",
        help="Show version and exit",
        callback=_version_callback,
        is_eager=True,
    ),
):
    """
    Print product reports built from the Northwind OData service.

    Every run fetches the complete product catalogue (following the
    service's paging links) and prints one line per product.

    [bold cyan]Examples:[/bold cyan]

      northwind-reports current-products

      northwind-reports most-expensive-products 10

      northwind-reports --format table price-between-products 10 20.5
    """
    # Configuration is resolved lazily so that --help never touches config files
    ctx.ensure_object(dict)
    ctx.obj["options"] = {
        "service_url": service_url,
        "timeout": timeout,
        "output_format": output_format,
        "config": config,
        "verbose": verbose,
        "quiet": quiet,
        "log_file": log_file,
    }
