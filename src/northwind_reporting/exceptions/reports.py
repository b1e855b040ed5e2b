"""Report computation and argument exceptions."""

from typing import Any, Iterable

from .base import NorthwindReportingError


class InvalidArgumentError(NorthwindReportingError):
    """Raised when a report argument is missing or cannot be parsed."""

    def __init__(self, argument: str, value: Any, reason: str):
        super().__init__(
            f"Invalid value for {argument}: {value!r}",
            details={"argument": argument, "reason": reason},
        )
        self.argument = argument
        self.value = value
        self.reason = reason


class UnknownReportError(InvalidArgumentError):
    """Raised when a report name is not registered."""

    def __init__(self, name: str, known: Iterable[str]):
        known = sorted(known)
        super().__init__("report", name, f"choose from: {', '.join(known)}")
        self.name = name
        self.known = known


class ReportError(NorthwindReportingError):
    """Base class for errors raised while computing a report."""

    pass


class DivisionByZeroError(ReportError, ZeroDivisionError):
    """Raised when an average is requested over an empty product collection."""

    def __init__(self, operation: str):
        super().__init__(
            f"Cannot compute {operation} of an empty product collection",
            details={"operation": operation},
        )
        self.operation = operation
