"""Exception hierarchy for Northwind Reporting."""

from .base import NorthwindReportingError
from .config import (
    ConfigurationError,
    InvalidConfigError,
    InvalidConfigurationError,
)
from .remote import MalformedResponseError, RemoteFetchError
from .reports import (
    DivisionByZeroError,
    InvalidArgumentError,
    ReportError,
    UnknownReportError,
)

__all__ = [
    "NorthwindReportingError",
    "RemoteFetchError",
    "MalformedResponseError",
    "InvalidArgumentError",
    "UnknownReportError",
    "ReportError",
    "DivisionByZeroError",
    "ConfigurationError",
    "InvalidConfigError",
    "InvalidConfigurationError",
]
