"""CLI commands for the Product aggregate."""

from __future__ import annotations

import click

from orderdesk.application.add_product import AddProductHandler
from orderdesk.application.list_products import ListProductsHandler
from orderdesk.application.show_product import ShowProductHandler
from orderdesk.domain.exceptions import DomainException
from orderdesk.infrastructure.bootstrap import build_container, running
from orderdesk.infrastructure.cli.errors import to_click_error


@click.command("add")
@click.option("--name", required=True, help="Product name.")
@click.option("--description", required=True, help="Product description.")
@click.option("--price", required=True, help="Unit price (e.g. 15.00).")
@click.option("--stock", "stock_quantity", required=True, type=int, help="Units in stock.")
def product_add(name: str, description: str, price: str, stock_quantity: int) -> None:
    """Add a new product to the catalog."""
    payload = {
        "name": name,
        "description": description,
        "price": price,
        "stock_quantity": stock_quantity,
    }

    with running(build_container()) as container:
        try:
            product_id = AddProductHandler(uow_factory=container.unit_of_work).handle(payload)
        except DomainException as exc:
            raise to_click_error(exc)

    click.echo(f"Product {product_id} '{name}' added")


@click.command("list")
@click.option("--page", default=1, show_default=True, type=int)
@click.option("--limit", default=10, show_default=True, type=int)
@click.option("--search", default=None, help="Case-insensitive name/description filter.")
def product_list(page: int, limit: int, search: str | None) -> None:
    """List active products in the catalog."""
    params = {"page": page, "limit": limit}
    if search:
        params["search"] = search

    with running(build_container()) as container:
        try:
            result = ListProductsHandler(product_repo=container.products).handle(params)
        except DomainException as exc:
            raise to_click_error(exc)

    if not result.items:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<26} {'Name':<20} {'Price':>10} {'Stock':>7}")
    click.echo("-" * 66)
    for p in result.items:
        click.echo(f"{p.id:<26} {p.name:<20} {p.price:>10.2f} {p.stock_quantity:>7}")
    meta = result.pagination
    click.echo(f"Page {meta.current_page}/{meta.total_pages} ({meta.total_items} products)")


@click.command("show")
@click.option("--id", "product_id", required=True, help="Product ID.")
def product_show(product_id: str) -> None:
    """Show one product."""
    with running(build_container()) as container:
        try:
            p = ShowProductHandler(product_repo=container.products).handle(product_id)
        except DomainException as exc:
            raise to_click_error(exc)

    click.echo(f"Product {p.id}")
    click.echo(f"Name:        {p.name}")
    click.echo(f"Description: {p.description}")
    click.echo(f"Price:       {p.price:.2f}")
    click.echo(f"Stock:       {p.stock_quantity}")
