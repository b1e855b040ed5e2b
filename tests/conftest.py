"""Shared test fixtures for Northwind Reporting tests."""

from decimal import Decimal

import httpx
import pytest

from northwind_reporting.models import Product

SERVICE_URL = "https://example.test/V3/Northwind/Northwind.svc"


def pytest_addoption(parser):
    """Add --run-live option for tests against the public Northwind service."""
    parser.addoption(
        "--run-live",
        action="store_true",
        default=False,
        help="run tests that call the public Northwind OData service",
    )


def pytest_configure(config):
    """Configure live marker."""
    config.addinivalue_line("markers", "live: test needs network access to services.odata.org")


def pytest_collection_modifyitems(config, items):
    """Skip live tests unless --run-live is given."""
    if config.getoption("--run-live"):
        return
    skip_live = pytest.mark.skip(reason="need --run-live option to run")
    for item in items:
        if "live" in item.keywords:
            item.add_marker(skip_live)


def make_product(name, price=None, in_stock=0, on_order=0, discontinued=False):
    return Product(
        name=name,
        unit_price=Decimal(str(price)) if price is not None else None,
        units_in_stock=in_stock,
        units_on_order=on_order,
        discontinued=discontinued,
    )


def entity(name, price=None, in_stock=0, on_order=0, discontinued=False):
    """An OData V3 product entity as the service serializes it."""
    return {
        "ProductID": abs(hash(name)) % 1000,
        "ProductName": name,
        "UnitPrice": f"{Decimal(str(price)):.4f}" if price is not None else None,
        "UnitsInStock": in_stock,
        "UnitsOnOrder": on_order,
        "Discontinued": discontinued,
    }


class FeedServer:
    """Serves a list of pages as a paged OData V3 feed through httpx.MockTransport."""

    def __init__(self, pages, base_url=SERVICE_URL, entity_set="Products"):
        self.pages = pages
        self.base_url = base_url
        self.entity_set = entity_set
        self.requests = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        token = request.url.params.get("$skiptoken")
        index = int(token) if token is not None else 0
        if index >= len(self.pages):
            return httpx.Response(404, json={"odata.error": {"message": {"value": "no page"}}})

        body = {"odata.metadata": f"{self.base_url}/$metadata#{self.entity_set}", "value": self.pages[index]}
        if index + 1 < len(self.pages):
            body["odata.nextLink"] = f"{self.entity_set}?$skiptoken={index + 1}"
        return httpx.Response(200, json=body)

    def client(self) -> httpx.Client:
        return httpx.Client(transport=httpx.MockTransport(self.handler))


@pytest.fixture
def sample_products():
    """The three product sample: A priced, B unpriced and discontinued, C priced."""
    return [
        make_product("A", 10),
        make_product("B", None, discontinued=True),
        make_product("C", 30),
    ]


@pytest.fixture
def catalogue():
    """A small catalogue covering stock, price and discontinued combinations."""
    return [
        make_product("Chai", 18, in_stock=39, on_order=0),
        make_product("Chang", 19, in_stock=17, on_order=40),
        make_product("Aniseed Syrup", 10, in_stock=13, on_order=70),
        make_product("Chef Anton's Gumbo Mix", "21.35", in_stock=0, on_order=0, discontinued=True),
        make_product("Mishi Kobe Niku", 97, in_stock=29, on_order=0, discontinued=True),
        make_product("Ikura", 31, in_stock=31, on_order=0),
        make_product("Queso Cabrales", 21, in_stock=22, on_order=30),
        make_product("Unpriced Sample", None, in_stock=0, on_order=5),
    ]


@pytest.fixture
def feed_server():
    """Factory for FeedServer instances."""
    return FeedServer
