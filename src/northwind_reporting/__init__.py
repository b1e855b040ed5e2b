"""
Northwind Reporting - product reports over a paged OData service.

Fetches the complete Northwind product catalogue by following the service's
continuation links, then derives price and stock reports from it in memory.
"""

__version__ = "0.1.0"

from .models import Product, Report, ReportLine
from .odata import fetch_all_products
from .reports import ProductReportService

__all__ = [
    "ProductReportService",
    "fetch_all_products",
    "Product",
    "Report",
    "ReportLine",
]
