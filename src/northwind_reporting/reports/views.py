"""Report views over an in-memory product collection.

Each view is a filter predicate, an optional sort key and an optional limit.
Views never mutate their input and keep no state between calls.

Missing prices become zero only in the projected ``ReportLine``. Predicates
see the raw optional price, so an unpriced product never passes a price
comparison.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Callable, Optional, Sequence

from ..exceptions import DivisionByZeroError, InvalidArgumentError, UnknownReportError
from ..models import Product, Report, ReportLine

Predicate = Callable[[Product], bool]
SortKey = Callable[[Product], Any]

# Plain ASCII digits only: no digit-group underscores, exponents or NaN/Infinity
INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")
DECIMAL_PATTERN = re.compile(r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)")


@dataclass(frozen=True)
class ReportView:
    """A named filter + sort + limit rule."""

    name: str
    title: str
    predicate: Predicate
    sort_key: Optional[SortKey] = None
    descending: bool = False
    limit: Optional[int] = None


@dataclass(frozen=True)
class ViewSpec:
    """Registry entry: how to build a view from its parameters."""

    name: str
    description: str
    params: tuple[str, ...]
    build: Callable[..., ReportView]
    param_types: dict[str, type] = field(default_factory=dict)


def apply_view(view: ReportView, products: Sequence[Product]) -> Report:
    """Filter, order and cut ``products`` according to ``view``.

    The sort is stable, so ties keep their source order.
    """
    if view.limit is not None and view.limit <= 0:
        return Report(title=view.title)

    selected = [p for p in products if view.predicate(p)]
    if view.sort_key is not None:
        selected.sort(key=view.sort_key, reverse=view.descending)
    if view.limit is not None:
        selected = selected[: view.limit]

    return Report.from_lines(view.title, (ReportLine.from_product(p) for p in selected))


def average_price(products: Sequence[Product]) -> Decimal:
    """Sum of the defined prices divided by the number of all products.

    Unpriced products add nothing to the sum but still count in the divisor.

    Raises:
        DivisionByZeroError: If ``products`` is empty.
    """
    if not products:
        raise DivisionByZeroError("average price")
    total = sum((p.unit_price for p in products if p.unit_price is not None), Decimal(0))
    return total / len(products)


# -- view builders --------------------------------------------------------


def _has_price_below(limit: Decimal) -> Predicate:
    return lambda p: p.unit_price is not None and p.unit_price < limit


def current_products_view(products: Sequence[Product]) -> ReportView:
    return ReportView(
        name="current-products",
        title="current products",
        predicate=lambda p: not p.discontinued,
        sort_key=lambda p: p.name,
    )


def most_expensive_view(products: Sequence[Product], count: int) -> ReportView:
    return ReportView(
        name="most-expensive-products",
        title=f"{count} most expensive products",
        predicate=lambda p: p.unit_price is not None,
        sort_key=lambda p: p.unit_price,
        descending=True,
        limit=max(count, 0),
    )


def price_less_than_view(products: Sequence[Product], price: Decimal) -> ReportView:
    return ReportView(
        name="price-less-then-products",
        title=f"products with price less than {price}",
        predicate=_has_price_below(price),
    )


def price_between_view(
    products: Sequence[Product], more_than: Decimal, less_than: Decimal
) -> ReportView:
    return ReportView(
        name="price-between-products",
        title=f"products with price between {more_than} and {less_than}",
        predicate=lambda p: p.unit_price is not None and more_than < p.unit_price < less_than,
    )


def above_average_view(products: Sequence[Product]) -> ReportView:
    # The threshold depends on the whole collection, so it is fixed here
    average = average_price(products)
    return ReportView(
        name="price-above-average-products",
        title="products with price above average",
        predicate=lambda p: p.unit_price is not None and p.unit_price > average,
    )


def stock_deficit_view(products: Sequence[Product]) -> ReportView:
    return ReportView(
        name="units-in-stock-deficit",
        title="products with units in stock deficit",
        predicate=lambda p: p.units_in_stock < p.units_on_order,
    )


VIEWS: dict[str, ViewSpec] = {
    spec.name: spec
    for spec in (
        ViewSpec(
            name="current-products",
            description="Shows current products.",
            params=(),
            build=current_products_view,
        ),
        ViewSpec(
            name="most-expensive-products",
            description="Shows specified number of the most expensive products.",
            params=("count",),
            build=most_expensive_view,
            param_types={"count": int},
        ),
        ViewSpec(
            name="price-less-then-products",
            description="Shows products with price less than the specified price.",
            params=("price",),
            build=price_less_than_view,
            param_types={"price": Decimal},
        ),
        ViewSpec(
            name="price-between-products",
            description="Shows products with price between two prices (exclusive).",
            params=("more_than", "less_than"),
            build=price_between_view,
            param_types={"more_than": Decimal, "less_than": Decimal},
        ),
        ViewSpec(
            name="price-above-average-products",
            description="Shows products with price above the average price.",
            params=(),
            build=above_average_view,
        ),
        ViewSpec(
            name="units-in-stock-deficit",
            description="Shows products with fewer units in stock than on order.",
            params=(),
            build=stock_deficit_view,
        ),
    )
}


def get_view(name: str) -> ViewSpec:
    """Look up a registered view by report name, ignoring case.

    Raises:
        UnknownReportError: If no view has that name.
    """
    spec = VIEWS.get(name.strip().lower())
    if spec is None:
        raise UnknownReportError(name, VIEWS)
    return spec


def parse_arguments(spec: ViewSpec, args: Sequence[str]) -> dict[str, Any]:
    """Convert positional command-line strings into typed view parameters.

    Raises:
        InvalidArgumentError: On wrong arity or an unparsable number.
    """
    if len(args) != len(spec.params):
        raise InvalidArgumentError(
            "arguments",
            list(args),
            f"{spec.name} takes {len(spec.params)} argument(s): {', '.join(spec.params) or 'none'}",
        )

    params: dict[str, Any] = {}
    for param, raw in zip(spec.params, args):
        kind = spec.param_types.get(param, str)
        params[param] = _convert(param, raw, kind)
    return params


def _convert(param: str, raw: str, kind: type) -> Any:
    text = raw.strip()
    if kind is int:
        if not INTEGER_PATTERN.fullmatch(text):
            raise InvalidArgumentError(param, raw, "expected an integer")
        return int(text)
    if kind is Decimal:
        if not DECIMAL_PATTERN.fullmatch(text):
            raise InvalidArgumentError(param, raw, "expected a decimal number")
        return Decimal(text)
    return raw


def check_params(spec: ViewSpec, params: dict[str, Any]) -> None:
    """Raise ``InvalidArgumentError`` unless ``params`` names exactly the view's parameters."""
    missing = [p for p in spec.params if p not in params]
    if missing:
        raise InvalidArgumentError(missing[0], None, f"required by {spec.name}")
    extra = sorted(set(params) - set(spec.params))
    if extra:
        raise InvalidArgumentError(extra[0], params[extra[0]], f"not accepted by {spec.name}")


def run_view(name: str, products: Sequence[Product], **params: Any) -> Report:
    """Build the named view with ``params`` and apply it to ``products``.

    Raises:
        UnknownReportError: If no view has that name.
        InvalidArgumentError: If parameters are missing or unexpected.
    """
    spec = get_view(name)
    check_params(spec, params)
    view = spec.build(products, **params)
    return apply_view(view, products)


# -- named operations -----------------------------------------------------


def current_products(products: Sequence[Product]) -> Report:
    """Products that are not discontinued, by name ascending."""
    return run_view("current-products", products)


def most_expensive(products: Sequence[Product], count: int) -> Report:
    """The ``count`` highest priced products, most expensive first.

    Unpriced products are skipped; ``count <= 0`` gives an empty report.
    """
    return run_view("most-expensive-products", products, count=count)


def price_less_than(products: Sequence[Product], price: Decimal) -> Report:
    return run_view("price-less-then-products", products, price=price)


def price_between(products: Sequence[Product], more_than: Decimal, less_than: Decimal) -> Report:
    """Products priced strictly between the two bounds, in source order."""
    return run_view("price-between-products", products, more_than=more_than, less_than=less_than)


def above_average(products: Sequence[Product]) -> Report:
    """Products priced above :func:`average_price`.

    Raises:
        DivisionByZeroError: If ``products`` is empty.
    """
    return run_view("price-above-average-products", products)


def stock_deficit(products: Sequence[Product]) -> Report:
    return run_view("units-in-stock-deficit", products)
