"""Client for paged OData entity feeds."""

from .client import ODataClient, Page, fetch_all_products

__all__ = ["ODataClient", "Page", "fetch_all_products"]
