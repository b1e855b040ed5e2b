"""Shared CLI helpers."""

import logging
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional

import typer
from rich.console import Console
from rich.markup import escape

from ..config import ReportingConfig, load_config
from ..exceptions import InvalidArgumentError, NorthwindReportingError
from ..formatters import get_formatter
from ..logging_config import setup_logging
from ..reports import ProductReportService, get_view, parse_arguments

console = Console()
err_console = Console(stderr=True)

logger = logging.getLogger(__name__)


class OutputFormat(str, Enum):
    text = "text"
    table = "table"
    json = "json"
    csv = "csv"


def resolve_config(options: Dict[str, Any]) -> ReportingConfig:
    """Build configuration from the global CLI options."""
    config_file: Optional[Path] = options.get("config")
    output_format = options.get("output_format")
    return load_config(
        config_file=config_file,
        service_url=options.get("service_url"),
        timeout_seconds=options.get("timeout"),
        output_format=output_format.value if output_format is not None else None,
        verbose=options.get("verbose", False),
        quiet=options.get("quiet", False),
    )


def run_report(ctx: typer.Context, report_name: str, args: list) -> None:
    """Parse arguments, fetch products, apply the view and print the report.

    Bad arguments raise ``typer.BadParameter`` (usage on stderr, exit 2);
    fetch and computation errors print a message and exit 1.
    """
    obj = ctx.ensure_object(dict)
    spec = get_view(report_name)

    try:
        params = parse_arguments(spec, args)
    except InvalidArgumentError as e:
        raise typer.BadParameter(e.reason, ctx=ctx, param_hint=e.argument)

    try:
        config = resolve_config(obj.get("options", {}))
        setup_logging(
            verbose=config.verbosity == "verbose",
            quiet=config.verbosity == "quiet",
            log_file=obj.get("options", {}).get("log_file"),
        )

        service = ProductReportService.from_config(config, http_client=obj.get("http_client"))
        logger.info(f"Running {spec.name} against {config.service_url}")
        report = service.run(spec.name, **params)
        get_formatter(config.output_format).render(report)

    except NorthwindReportingError as e:
        logger.debug(f"{e.__class__.__name__}: {e}", exc_info=True)
        err_console.print(f"[red]Error:[/red] {escape(str(e))}", highlight=False, soft_wrap=True)
        raise typer.Exit(1)

    except KeyboardInterrupt:
        err_console.print("\n[yellow]Interrupted[/yellow]")
        raise typer.Exit(130)

    except Exception as e:
        logger.exception("Unexpected error while producing the report")
        err_console.print(f"[red]Unexpected error:[/red] {escape(str(e))}", highlight=False, soft_wrap=True)
        raise typer.Exit(1)
