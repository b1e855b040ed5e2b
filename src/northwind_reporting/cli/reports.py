"""Report subcommands, one per registered report view."""

import typer

from . import app
from ._common import run_report

# Negative numbers are report arguments, not options
_NUMERIC_ARGS = {"ignore_unknown_options": True}


@app.command("current-products")
def current_products(ctx: typer.Context):
    """Shows current products."""
    run_report(ctx, "current-products", [])


@app.command("most-expensive-products", context_settings=_NUMERIC_ARGS)
def most_expensive_products(
    ctx: typer.Context,
    count: str = typer.Argument(..., metavar="COUNT", help="Number of products to show"),
):
    """Shows specified number of the most expensive products."""
    run_report(ctx, "most-expensive-products", [count])


@app.command("price-less-then-products", context_settings=_NUMERIC_ARGS)
def price_less_then_products(
    ctx: typer.Context,
    price: str = typer.Argument(..., metavar="PRICE", help="Exclusive upper price bound"),
):
    """Shows products with price less than the specified price."""
    run_report(ctx, "price-less-then-products", [price])


@app.command("price-between-products", context_settings=_NUMERIC_ARGS)
def price_between_products(
    ctx: typer.Context,
    more_than: str = typer.Argument(..., metavar="MORE_THAN", help="Exclusive lower price bound"),
    less_than: str = typer.Argument(..., metavar="LESS_THAN", help="Exclusive upper price bound"),
):
    """Shows products with price between two prices (bounds excluded)."""
    run_report(ctx, "price-between-products", [more_than, less_than])


@app.command("price-above-average-products")
def price_above_average_products(ctx: typer.Context):
    """Shows products with price above the average price."""
    run_report(ctx, "price-above-average-products", [])


@app.command("units-in-stock-deficit")
def units_in_stock_deficit(ctx: typer.Context):
    """Shows products with fewer units in stock than on order."""
    run_report(ctx, "units-in-stock-deficit", [])
