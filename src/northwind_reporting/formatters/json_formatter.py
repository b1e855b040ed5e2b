"""JSON formatter for product reports."""

import json

from .base import BaseFormatter
from ..models import Report


class JsonFormatter(BaseFormatter):
    """Render reports as JSON."""

    def render(self, report: Report) -> None:
        print(self.format(report))

    def format(self, report: Report) -> str:
        return json.dumps(report.to_dict(), indent=2)
