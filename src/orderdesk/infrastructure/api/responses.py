"""JSON response envelopes shared by every route."""

from __future__ import annotations

from dataclasses import asdict
from datetime import datetime, timezone
from typing import Any

from fastapi.responses import JSONResponse

from orderdesk.application.dto import PaginationDTO


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


def success(
    message: str,
    data: Any = None,
    status_code: int = 200,
    **extra: Any,
) -> JSONResponse:
    body: dict[str, Any] = {"status": "success", "message": message, **extra}
    if data is not None:
        body["data"] = data
    body["timestamp"] = _timestamp()
    return JSONResponse(status_code=status_code, content=body)


def error(
    message: str,
    status_code: int,
    errors: list[str] | None = None,
    code: str | None = None,
) -> JSONResponse:
    body: dict[str, Any] = {"status": "error", "message": message}
    if errors:
        body["errors"] = errors
    if code is not None:
        body["code"] = code
    body["timestamp"] = _timestamp()
    return JSONResponse(status_code=status_code, content=body)


def pagination_body(pagination: PaginationDTO, noun: str) -> dict[str, Any]:
    """Render page metadata, naming the total after the listed resource."""
    body = asdict(pagination)
    body[f"total_{noun}"] = body.pop("total_items")
    return body
