"""CSV formatter for product reports."""

import csv
import io

from .base import BaseFormatter
from ..models import Report


class CsvFormatter(BaseFormatter):
    """Render reports as CSV."""

    def render(self, report: Report) -> None:
        print(self.format(report), end="")

    def format(self, report: Report) -> str:
        output = io.StringIO()
        writer = csv.writer(output, lineterminator="\n")
        writer.writerow(["name", "price"])
        for line in report:
            writer.writerow([line.name, str(line.price)])
        return output.getvalue()
