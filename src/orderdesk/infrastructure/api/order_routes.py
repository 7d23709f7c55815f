"""HTTP routes for the Order aggregate."""

from __future__ import annotations

from dataclasses import asdict
from typing import Any

from fastapi import APIRouter, Body, Request
from fastapi.responses import JSONResponse

from orderdesk.application.list_orders import ListOrdersHandler
from orderdesk.application.place_order import PlaceOrderHandler
from orderdesk.application.show_order import ShowOrderHandler
from orderdesk.infrastructure.api.responses import pagination_body, success
from orderdesk.infrastructure.bootstrap import Container

router = APIRouter(prefix="/orders", tags=["orders"])


def _container(request: Request) -> Container:
    return request.app.state.container


@router.post("", status_code=201)
def create_order(request: Request, payload: Any = Body(None)) -> JSONResponse:
    handler = PlaceOrderHandler(uow_factory=_container(request).unit_of_work)
    order_id = handler.handle(payload)
    return success("Order created successfully", status_code=201, id=order_id)


@router.get("")
def list_orders(request: Request) -> JSONResponse:
    container = _container(request)
    handler = ListOrdersHandler(order_repo=container.orders, product_repo=container.products)
    page = handler.handle(dict(request.query_params))
    return success(
        "Orders retrieved successfully",
        {
            "orders": [asdict(o) for o in page.items],
            "pagination": pagination_body(page.pagination, "orders"),
        },
    )


@router.get("/{order_id}")
def get_order(request: Request, order_id: str) -> JSONResponse:
    container = _container(request)
    handler = ShowOrderHandler(order_repo=container.orders, product_repo=container.products)
    order = handler.handle(order_id)
    return success("Order retrieved successfully", {"order": asdict(order)})
