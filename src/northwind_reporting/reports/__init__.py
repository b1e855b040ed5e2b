"""Product reports: view definitions and the service that runs them."""

from .service import ProductReportService
from .views import (
    VIEWS,
    ReportView,
    ViewSpec,
    above_average,
    apply_view,
    average_price,
    current_products,
    get_view,
    most_expensive,
    parse_arguments,
    price_between,
    price_less_than,
    run_view,
    stock_deficit,
)

__all__ = [
    "ProductReportService",
    "ReportView",
    "ViewSpec",
    "VIEWS",
    "apply_view",
    "average_price",
    "get_view",
    "parse_arguments",
    "run_view",
    "current_products",
    "most_expensive",
    "price_less_than",
    "price_between",
    "above_average",
    "stock_deficit",
]
