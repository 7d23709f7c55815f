"""Derived page metadata for listing use cases."""

from __future__ import annotations

import math

from orderdesk.application.dto import PaginationDTO


def build_pagination(page: int, limit: int, total: int) -> PaginationDTO:
    total_pages = math.ceil(total / limit)
    has_next = page < total_pages
    has_prev = page > 1
    return PaginationDTO(
        current_page=page,
        total_pages=total_pages,
        total_items=total,
        per_page=limit,
        has_next_page=has_next,
        has_prev_page=has_prev,
        next_page=page + 1 if has_next else None,
        prev_page=page - 1 if has_prev else None,
    )
