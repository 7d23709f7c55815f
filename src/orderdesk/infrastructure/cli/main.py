import click
import uvicorn

from orderdesk.config import Settings
from orderdesk.infrastructure.api.app import create_app
from orderdesk.infrastructure.cli.order_commands import order_place, order_show
from orderdesk.infrastructure.cli.product_commands import (
    product_add,
    product_list,
    product_show,
)
from orderdesk.infrastructure.logging_setup import configure_logging


@click.group()
def cli() -> None:
    """orderdesk: product catalog and order placement"""
    configure_logging(Settings.from_env().log_level)


@cli.command()
@click.option("--host", default=None, help="Bind address (default: $HOST).")
@click.option("--port", default=None, type=int, help="Port (default: $PORT).")
def serve(host: str | None, port: int | None) -> None:
    """Run the HTTP API."""
    settings = Settings.from_env()
    app = create_app(settings=settings)
    uvicorn.run(app, host=host or settings.host, port=port or settings.port, log_config=None)


@cli.group()
def order() -> None:
    """Manage orders."""


@cli.group()
def product() -> None:
    """Manage products."""


# Register subcommands
order.add_command(order_place)
order.add_command(order_show)
product.add_command(product_add)
product.add_command(product_list)
product.add_command(product_show)
