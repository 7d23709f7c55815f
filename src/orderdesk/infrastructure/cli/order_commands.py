"""CLI commands for the Order aggregate."""

from __future__ import annotations

import click

from orderdesk.application.dto import OrderDTO, OrderItemSpec
from orderdesk.application.place_order import PlaceOrderHandler
from orderdesk.application.show_order import ShowOrderHandler
from orderdesk.domain.exceptions import DomainException
from orderdesk.infrastructure.bootstrap import build_container, running
from orderdesk.infrastructure.cli.errors import to_click_error


def _parse_items(raw: str) -> list[OrderItemSpec]:
    """Parse '<id>:3,<id>:5' into OrderItemSpec list."""
    specs: list[OrderItemSpec] = []
    for pair in raw.split(","):
        pair = pair.strip()
        if ":" not in pair:
            raise click.BadParameter(
                f"Invalid item format '{pair}'. Expected 'ProductId:Quantity'."
            )
        product_id, qty_str = pair.rsplit(":", 1)
        try:
            qty = int(qty_str)
        except ValueError:
            raise click.BadParameter(
                f"Invalid quantity '{qty_str}' for product '{product_id}'."
            )
        specs.append(OrderItemSpec(product_id=product_id.strip(), quantity=qty))
    return specs


def _display_order(dto: OrderDTO) -> None:
    click.echo(f"Order {dto.id}  (status={dto.status})")
    click.echo(f"Customer: {dto.customer_name}")
    click.echo(f"Date:     {dto.order_date}")
    click.echo()
    click.echo(f"  {'Product':<26} {'Qty':>5} {'Price':>10} {'Subtotal':>10}")
    click.echo(f"  {'-'*54}")
    for item in dto.products:
        label = item.product.name if item.product else item.product_id
        click.echo(
            f"  {label:<26} {item.quantity:>5} {item.price:>10.2f} {item.subtotal:>10.2f}"
        )
    click.echo(f"  {'-'*54}")
    click.echo(f"  {'Order Total':<32} {dto.total_price:>21.2f}")


@click.command("place")
@click.option("--customer", required=True, help="Customer name.")
@click.option("--items", required=True, help="Items as 'ProductId:Qty,ProductId:Qty'.")
def order_place(customer: str, items: str) -> None:
    """Place an order, decrementing stock atomically."""
    specs = _parse_items(items)
    payload = {
        "customer_name": customer,
        "products": [{"product_id": s.product_id, "quantity": s.quantity} for s in specs],
    }

    with running(build_container()) as container:
        try:
            order_id = PlaceOrderHandler(uow_factory=container.unit_of_work).handle(payload)
            dto = ShowOrderHandler(container.orders, container.products).handle(order_id)
        except DomainException as exc:
            raise to_click_error(exc)

    click.echo(f"Order {order_id} placed")
    _display_order(dto)


@click.command("show")
@click.option("--id", "order_id", required=True, help="Order ID to display.")
def order_show(order_id: str) -> None:
    """Show details of an existing order."""
    with running(build_container()) as container:
        try:
            dto = ShowOrderHandler(container.orders, container.products).handle(order_id)
        except DomainException as exc:
            raise to_click_error(exc)

    _display_order(dto)
