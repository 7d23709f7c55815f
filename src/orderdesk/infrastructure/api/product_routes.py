"""HTTP routes for the Product aggregate."""

from __future__ import annotations

from dataclasses import asdict
from typing import Any

from fastapi import APIRouter, Body, Request
from fastapi.responses import JSONResponse

from orderdesk.application.add_product import AddProductHandler
from orderdesk.application.list_products import ListProductsHandler
from orderdesk.application.show_product import ShowProductHandler
from orderdesk.infrastructure.api.responses import pagination_body, success
from orderdesk.infrastructure.bootstrap import Container

router = APIRouter(prefix="/products", tags=["products"])


def _container(request: Request) -> Container:
    return request.app.state.container


@router.post("", status_code=201)
def create_product(request: Request, payload: Any = Body(None)) -> JSONResponse:
    handler = AddProductHandler(uow_factory=_container(request).unit_of_work)
    product_id = handler.handle(payload)
    return success("Product created successfully", status_code=201, id=product_id)


@router.get("")
def list_products(request: Request) -> JSONResponse:
    handler = ListProductsHandler(product_repo=_container(request).products)
    page = handler.handle(dict(request.query_params))
    return success(
        "Products retrieved successfully",
        {
            "products": [asdict(p) for p in page.items],
            "pagination": pagination_body(page.pagination, "products"),
        },
    )


@router.get("/{product_id}")
def get_product(request: Request, product_id: str) -> JSONResponse:
    handler = ShowProductHandler(product_repo=_container(request).products)
    product = handler.handle(product_id)
    return success("Product retrieved successfully", {"product": asdict(product)})
