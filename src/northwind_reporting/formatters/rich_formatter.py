"""Rich terminal formatter: the report as a titled table."""

import io

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..models import Report
from .base import BaseFormatter


class RichFormatter(BaseFormatter):
    """Rich table on stdout."""

    def __init__(self, console: Console = None):
        self.console = console or Console()

    def render(self, report: Report) -> None:
        self.console.print(self._table(report))

    def format(self, report: Report) -> str:
        buffer = io.StringIO()
        Console(file=buffer, width=self.console.width).print(self._table(report))
        return buffer.getvalue()

    def _table(self, report: Report) -> Table:
        table = Table(title=f"Report - {report.title}", show_lines=False)
        table.add_column("#", justify="right", style="dim")
        table.add_column("Product", style="cyan")
        table.add_column("Price", justify="right", style="green")

        for i, line in enumerate(report, start=1):
            table.add_row(str(i), escape(line.name), str(line.price))

        if not len(report):
            table.caption = "[dim]No products match this report.[/dim]"
        return table
