"""Plain text formatter: a header line, then one ``name, price`` line per product."""

from .base import BaseFormatter
from ..models import Report


class TextFormatter(BaseFormatter):
    """Render reports as plain lines."""

    def render(self, report: Report) -> None:
        print(self.format(report), end="")

    def format(self, report: Report) -> str:
        lines = [f"Report - {report.title}:"]
        lines.extend(f"{line.name}, {line.price}" for line in report)
        return "\n".join(lines) + "\n"
