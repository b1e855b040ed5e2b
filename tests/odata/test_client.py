"""Tests for the paged OData client."""

import httpx
import pytest

from northwind_reporting.exceptions import InvalidConfigError, MalformedResponseError, RemoteFetchError
from northwind_reporting.odata import ODataClient, fetch_all_products

from conftest import SERVICE_URL, entity


def _client_for(handler) -> httpx.Client:
    return httpx.Client(transport=httpx.MockTransport(handler))


class TestPagination:
    def test_three_pages_of_two_two_one(self, feed_server):
        server = feed_server(
            [
                [entity("p1", 1), entity("p2", 2)],
                [entity("p3", 3), entity("p4", 4)],
                [entity("p5", 5)],
            ]
        )
        products = fetch_all_products(SERVICE_URL, http_client=server.client())
        assert [p.name for p in products] == ["p1", "p2", "p3", "p4", "p5"]
        assert len(server.requests) == 3

    def test_follows_continuation_links_in_order(self, feed_server):
        server = feed_server([[entity("a")], [entity("b")], [entity("c")]])
        fetch_all_products(SERVICE_URL, http_client=server.client())
        tokens = [r.url.params.get("$skiptoken") for r in server.requests]
        assert tokens == [None, "1", "2"]

    def test_requests_json_format(self, feed_server):
        server = feed_server([[entity("a")], [entity("b")]])
        fetch_all_products(SERVICE_URL, http_client=server.client())
        assert all(r.url.params.get("$format") == "json" for r in server.requests)
        assert server.requests[0].url.path == "/V3/Northwind/Northwind.svc/Products"

    def test_continuation_keeps_its_own_query_options(self):
        def handler(request):
            requests.append(request)
            if request.url.params.get("$skiptoken") == "20":
                return httpx.Response(200, json={"value": [entity("b")]})
            return httpx.Response(
                200, json={"value": [entity("a")], "odata.nextLink": "Products?$skiptoken=20"}
            )

        requests = []
        products = fetch_all_products(SERVICE_URL, http_client=_client_for(handler))
        assert [p.name for p in products] == ["a", "b"]
        assert len(requests) == 2
        assert dict(requests[1].url.params) == {"$skiptoken": "20", "$format": "json"}

    def test_format_already_in_link_is_not_repeated(self):
        def handler(request):
            requests.append(request)
            if request.url.params.get("page") == "2":
                return httpx.Response(200, json={"value": [entity("b")]})
            return httpx.Response(
                200,
                json={"value": [entity("a")], "odata.nextLink": "Products?page=2&$format=json"},
            )

        requests = []
        fetch_all_products(SERVICE_URL, http_client=_client_for(handler))
        assert requests[1].url.params.get_list("$format") == ["json"]
        assert requests[1].url.params.get("page") == "2"

    def test_single_page_without_token(self, feed_server):
        server = feed_server([[entity("only", 3)]])
        products = fetch_all_products(SERVICE_URL, http_client=server.client())
        assert len(products) == 1
        assert len(server.requests) == 1

    def test_empty_collection(self, feed_server):
        server = feed_server([[]])
        assert fetch_all_products(SERVICE_URL, http_client=server.client()) == []

    def test_iter_pages_is_lazy(self, feed_server):
        server = feed_server([[entity("a")], [entity("b")]])
        client = ODataClient(SERVICE_URL, http_client=server.client())
        pages = client.iter_pages("Products")
        assert server.requests == []
        first = next(pages)
        assert first.number == 1
        assert first.next_link == "Products?$skiptoken=1"
        assert len(server.requests) == 1
        rest = list(pages)
        assert [p.number for p in rest] == [2]
        assert rest[0].next_link is None

    def test_absolute_v4_next_link(self):
        def handler(request):
            if request.url.params.get("page") == "2":
                return httpx.Response(200, json={"value": [entity("b")]})
            return httpx.Response(
                200,
                json={"value": [entity("a")], "@odata.nextLink": "https://other.test/svc/Products?page=2"},
            )

        products = fetch_all_products(SERVICE_URL, http_client=_client_for(handler))
        assert [p.name for p in products] == ["a", "b"]

    def test_v2_verbose_feed(self):
        def handler(request):
            if "$skiptoken" in request.url.params:
                return httpx.Response(200, json={"d": {"results": [entity("b")]}})
            return httpx.Response(
                200,
                json={"d": {"results": [entity("a")], "__next": f"{SERVICE_URL}/Products?$skiptoken=1"}},
            )

        products = fetch_all_products(SERVICE_URL, http_client=_client_for(handler))
        assert [p.name for p in products] == ["a", "b"]

    def test_repeated_link_is_an_error(self):
        def handler(request):
            return httpx.Response(200, json={"value": [entity("a")], "odata.nextLink": "Products?$skiptoken=1"})

        with pytest.raises(RemoteFetchError, match="repeats"):
            fetch_all_products(SERVICE_URL, http_client=_client_for(handler))

    def test_page_limit(self, feed_server):
        server = feed_server([[entity(str(i))] for i in range(5)])
        with pytest.raises(RemoteFetchError, match="more than 3 pages"):
            fetch_all_products(SERVICE_URL, max_pages=3, http_client=server.client())
        assert len(server.requests) == 3


class TestFailures:
    def test_initial_request_status_error(self):
        client = _client_for(lambda request: httpx.Response(500))
        with pytest.raises(RemoteFetchError) as exc_info:
            fetch_all_products(SERVICE_URL, http_client=client)
        assert exc_info.value.page == 1
        assert exc_info.value.reason == "HTTP 500"

    def test_continuation_request_failure(self, feed_server):
        server = feed_server([[entity("a")], [entity("b")]])

        def handler(request):
            if "$skiptoken" in request.url.params:
                raise httpx.ConnectError("connection refused", request=request)
            return server.handler(request)

        with pytest.raises(RemoteFetchError) as exc_info:
            fetch_all_products(SERVICE_URL, http_client=_client_for(handler))
        assert exc_info.value.page == 2
        assert "ConnectError" in exc_info.value.reason

    def test_non_json_body(self):
        client = _client_for(lambda request: httpx.Response(200, text="<feed/>"))
        with pytest.raises(MalformedResponseError, match="not JSON"):
            fetch_all_products(SERVICE_URL, http_client=client)

    @pytest.mark.parametrize(
        "body",
        [
            [],
            {"odata.metadata": "x"},
            {"value": "nope"},
            {"value": [1, 2]},
            {"value": [], "odata.nextLink": 42},
        ],
    )
    def test_unrecognized_feed(self, body):
        client = _client_for(lambda request: httpx.Response(200, json=body))
        with pytest.raises(MalformedResponseError):
            fetch_all_products(SERVICE_URL, http_client=client)

    def test_malformed_entity(self):
        client = _client_for(lambda request: httpx.Response(200, json={"value": [{"UnitPrice": "1"}]}))
        with pytest.raises(MalformedResponseError, match="ProductName"):
            fetch_all_products(SERVICE_URL, http_client=client)

    def test_failure_is_not_retried(self):
        calls = []

        def handler(request):
            calls.append(request)
            return httpx.Response(502)

        with pytest.raises(RemoteFetchError):
            fetch_all_products(SERVICE_URL, http_client=_client_for(handler))
        assert len(calls) == 1


class TestClientLifecycle:
    def test_injected_client_is_not_closed(self, feed_server):
        server = feed_server([[entity("a")]])
        http = server.client()
        fetch_all_products(SERVICE_URL, http_client=http)
        assert not http.is_closed

    def test_owned_client_closed_on_exit(self):
        with ODataClient(SERVICE_URL) as client:
            http = client._http
        assert http.is_closed

    def test_empty_service_url(self):
        with pytest.raises(InvalidConfigError, match="service_url"):
            ODataClient("")


@pytest.mark.live
def test_public_northwind_service():
    products = fetch_all_products("https://services.odata.org/V3/Northwind/Northwind.svc")
    assert len(products) == 77
    assert any(p.name == "Chai" for p in products)
