"""Paged OData reads over HTTP.

The service returns at most one page of entities per response. A page that
is not the last one carries a continuation link (``odata.nextLink`` in V3
JSON light, ``@odata.nextLink`` in V4, ``d.__next`` in V2 verbose JSON).
Continuation links are only valid against the server-side cursor of the
previous response, so pages are requested strictly one after another.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterator, Optional
from urllib.parse import urljoin

import httpx

from ..exceptions import InvalidConfigError, MalformedResponseError, RemoteFetchError
from ..models import Product

logger = logging.getLogger(__name__)

NEXT_LINK_KEYS = ("odata.nextLink", "@odata.nextLink")
DEFAULT_TIMEOUT = 30.0
DEFAULT_MAX_PAGES = 1000


@dataclass(frozen=True)
class Page:
    """One response of a paged query."""

    number: int
    url: str
    entities: list[dict[str, Any]]
    next_link: Optional[str] = None


class ODataClient:
    """Read-only client for an OData service root.

    Usage:
        with ODataClient("https://services.odata.org/V3/Northwind/Northwind.svc") as client:
            rows = client.fetch_all("Products")
    """

    def __init__(
        self,
        service_url: str,
        timeout: float = DEFAULT_TIMEOUT,
        max_pages: int = DEFAULT_MAX_PAGES,
        http_client: Optional[httpx.Client] = None,
    ):
        if not service_url or not service_url.strip():
            raise InvalidConfigError("service_url", service_url, "must not be empty")
        # A trailing slash makes relative continuation links resolve under the root
        self.service_url = service_url.rstrip("/") + "/"
        self.max_pages = max_pages
        self._owns_client = http_client is None
        self._http = http_client or httpx.Client(
            timeout=timeout,
            headers={"Accept": "application/json"},
            follow_redirects=True,
        )

    def __enter__(self) -> "ODataClient":
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_client:
            self._http.close()

    def entity_set_url(self, entity_set: str) -> str:
        return urljoin(self.service_url, entity_set.lstrip("/"))

    def iter_pages(self, entity_set: str) -> Iterator[Page]:
        """Yield the pages of ``entity_set`` in server order.

        The generator is lazy and can only be walked once. It stops exactly
        when a response carries no continuation link.

        Raises:
            RemoteFetchError: On transport failure, error status, a repeated
                continuation link or more than ``max_pages`` pages.
            MalformedResponseError: If a body is not an OData entity feed.
        """
        url = _with_json_format(self.entity_set_url(entity_set))
        seen = {url}
        number = 1

        while True:
            page = self._get_page(url, number)
            yield page

            if page.next_link is None:
                return

            next_url = _with_json_format(urljoin(self.service_url, page.next_link))
            if next_url in seen:
                raise RemoteFetchError(next_url, "continuation link repeats a visited page", number)
            if number >= self.max_pages:
                raise RemoteFetchError(next_url, f"more than {self.max_pages} pages", number)

            seen.add(next_url)
            url = next_url
            number += 1

    def fetch_all(self, entity_set: str) -> list[dict[str, Any]]:
        """Fetch every entity of ``entity_set``, concatenated in page order."""
        entities: list[dict[str, Any]] = []
        pages = 0
        for page in self.iter_pages(entity_set):
            entities.extend(page.entities)
            pages += 1
        logger.info(f"Fetched {len(entities)} {entity_set} entities in {pages} page(s)")
        return entities

    def _get_page(self, url: str, number: int) -> Page:
        try:
            response = self._http.get(url)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise RemoteFetchError(url, f"HTTP {e.response.status_code}", number) from e
        except httpx.HTTPError as e:
            raise RemoteFetchError(url, f"{type(e).__name__}: {e}", number) from e

        try:
            body = response.json()
        except ValueError as e:
            raise MalformedResponseError(url, f"response is not JSON: {e}", number) from e

        entities, next_link = _parse_feed(body, url, number)
        logger.debug(
            f"Page {number}: {len(entities)} entities from {response.url}"
            + (" (more pages)" if next_link else "")
        )
        return Page(number=number, url=str(response.url), entities=entities, next_link=next_link)


def _with_json_format(url: str) -> str:
    """Add ``$format=json`` to ``url``, keeping every query option it already has."""
    return str(httpx.URL(url).copy_merge_params({"$format": "json"}))


def _parse_feed(body: Any, url: str, number: int) -> tuple[list[dict[str, Any]], Optional[str]]:
    """Split a JSON feed into its entity list and continuation link."""
    if not isinstance(body, dict):
        raise MalformedResponseError(url, "expected a JSON object", number)

    if "value" in body:
        entities = body["value"]
        next_link = next((body[k] for k in NEXT_LINK_KEYS if body.get(k)), None)
    elif isinstance(body.get("d"), dict) and "results" in body["d"]:
        entities = body["d"]["results"]
        next_link = body["d"].get("__next")
    elif isinstance(body.get("d"), list):
        entities = body["d"]
        next_link = None
    else:
        raise MalformedResponseError(url, "no entity array in response", number)

    if not isinstance(entities, list) or not all(isinstance(e, dict) for e in entities):
        raise MalformedResponseError(url, "entity array holds non-object items", number)
    if next_link is not None and not isinstance(next_link, str):
        raise MalformedResponseError(url, "continuation link is not a string", number)

    return entities, next_link


def fetch_all_products(
    endpoint: str,
    entity_set: str = "Products",
    timeout: float = DEFAULT_TIMEOUT,
    max_pages: int = DEFAULT_MAX_PAGES,
    http_client: Optional[httpx.Client] = None,
) -> list[Product]:
    """Fetch the complete product collection from the service at ``endpoint``.

    Raises:
        RemoteFetchError: If the initial or any continuation request fails.
    """
    with ODataClient(endpoint, timeout=timeout, max_pages=max_pages, http_client=http_client) as client:
        entities = client.fetch_all(entity_set)

    products = []
    for entity in entities:
        try:
            products.append(Product.from_entity(entity))
        except MalformedResponseError as e:
            raise MalformedResponseError(client.entity_set_url(entity_set), e.reason) from e
    return products
