"""Product report service: fetch the catalogue, then apply a view."""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any, Callable, Optional, Sequence

import httpx

from ..config import DEFAULT_SERVICE_URL, ReportingConfig
from ..exceptions import InvalidConfigError
from ..models import Product, Report
from ..odata import fetch_all_products
from .views import check_params, get_view, run_view

logger = logging.getLogger(__name__)

Fetcher = Callable[[], Sequence[Product]]


class ProductReportService:
    """Produces product reports from a Northwind OData service.

    Every report call fetches the full product collection again; nothing is
    cached between calls.

    Args:
        service_url: Root URI of the OData service.
        entity_set: Entity set holding the products.
        timeout: Per-request timeout in seconds.
        max_pages: Upper bound on pages in one fetch.
        http_client: Optional ``httpx.Client`` to send requests with.
        fetcher: Optional callable returning products, replacing the
            remote fetch entirely.
    """

    def __init__(
        self,
        service_url: str = DEFAULT_SERVICE_URL,
        entity_set: str = "Products",
        timeout: float = 30.0,
        max_pages: int = 1000,
        http_client: Optional[httpx.Client] = None,
        fetcher: Optional[Fetcher] = None,
    ):
        if not service_url or not service_url.strip():
            raise InvalidConfigError("service_url", service_url, "must not be empty")
        self.service_url = service_url
        self.entity_set = entity_set
        self.timeout = timeout
        self.max_pages = max_pages
        self._http_client = http_client
        self._fetcher = fetcher

    @classmethod
    def from_config(
        cls, config: ReportingConfig, http_client: Optional[httpx.Client] = None
    ) -> "ProductReportService":
        return cls(
            service_url=config.service_url,
            entity_set=config.entity_set,
            timeout=config.timeout_seconds,
            max_pages=config.max_pages,
            http_client=http_client,
        )

    def fetch_products(self) -> list[Product]:
        """Fetch the complete product collection."""
        if self._fetcher is not None:
            return list(self._fetcher())
        return fetch_all_products(
            self.service_url,
            entity_set=self.entity_set,
            timeout=self.timeout,
            max_pages=self.max_pages,
            http_client=self._http_client,
        )

    def run(self, view_name: str, **params: Any) -> Report:
        """Fetch products and apply the named view.

        The view name and parameters are validated before any request goes out.
        """
        spec = get_view(view_name)
        check_params(spec, params)
        products = self.fetch_products()
        logger.debug(f"Applying {spec.name} to {len(products)} products")
        return run_view(spec.name, products, **params)

    def get_current_products(self) -> Report:
        return self.run("current-products")

    def get_most_expensive_products(self, count: int) -> Report:
        return self.run("most-expensive-products", count=count)

    def get_price_less_than_products(self, price: Decimal) -> Report:
        return self.run("price-less-then-products", price=price)

    def get_price_between_products(self, more_than: Decimal, less_than: Decimal) -> Report:
        return self.run("price-between-products", more_than=more_than, less_than=less_than)

    def get_above_average_products(self) -> Report:
        return self.run("price-above-average-products")

    def get_units_in_stock_deficit_products(self) -> Report:
        return self.run("units-in-stock-deficit")
