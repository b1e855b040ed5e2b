"""Data models for products and the reports derived from them."""

from dataclasses import asdict, dataclass
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Iterable, Iterator, Mapping, Optional, Tuple

from .exceptions import MalformedResponseError

ZERO = Decimal("0")


def _parse_price(raw: Any) -> Optional[Decimal]:
    """Read an OData ``Edm.Decimal``, serialized as a string or a JSON number."""
    if raw is None:
        return None
    if isinstance(raw, bool):
        raise ValueError(f"not a decimal: {raw!r}")
    try:
        # str() keeps the scale of floats like 18.0 and of strings like "18.0000"
        return Decimal(str(raw))
    except InvalidOperation:
        raise ValueError(f"not a decimal: {raw!r}")


def _parse_count(raw: Any) -> int:
    if raw is None:
        return 0
    if isinstance(raw, bool):
        raise ValueError(f"not an integer: {raw!r}")
    return int(raw)


@dataclass(frozen=True)
class Product:
    """A Northwind product as returned by the remote service.

    ``unit_price`` stays ``None`` when the service has no price; reports
    decide how to treat that.
    """

    name: str
    unit_price: Optional[Decimal]
    units_in_stock: int = 0
    units_on_order: int = 0
    discontinued: bool = False

    @classmethod
    def from_entity(cls, entity: Mapping[str, Any]) -> "Product":
        """Build a product from an OData entity dict.

        Raises:
            MalformedResponseError: If the entity has no name or a field has
                the wrong type.
        """
        name = entity.get("ProductName")
        if not isinstance(name, str):
            raise MalformedResponseError(
                "<entity>", f"ProductName missing or not a string in {dict(entity)!r}"
            )
        try:
            return cls(
                name=name,
                unit_price=_parse_price(entity.get("UnitPrice")),
                units_in_stock=_parse_count(entity.get("UnitsInStock")),
                units_on_order=_parse_count(entity.get("UnitsOnOrder")),
                discontinued=bool(entity.get("Discontinued", False)),
            )
        except (TypeError, ValueError) as e:
            raise MalformedResponseError("<entity>", f"product {name!r}: {e}")


@dataclass(frozen=True)
class ReportLine:
    """Display projection of a product: name and price (0 when unpriced)."""

    name: str
    price: Decimal

    @classmethod
    def from_product(cls, product: Product) -> "ReportLine":
        price = product.unit_price if product.unit_price is not None else ZERO
        return cls(name=product.name, price=price)


@dataclass(frozen=True)
class Report:
    """A titled, fully materialized sequence of report lines."""

    title: str
    lines: Tuple[ReportLine, ...] = ()

    @classmethod
    def from_lines(cls, title: str, lines: Iterable[ReportLine]) -> "Report":
        return cls(title=title, lines=tuple(lines))

    def __iter__(self) -> Iterator[ReportLine]:
        return iter(self.lines)

    def __len__(self) -> int:
        return len(self.lines)

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-friendly dict; prices are rendered as strings."""
        return {
            "title": self.title,
            "lines": [{**asdict(line), "price": str(line.price)} for line in self.lines],
        }
