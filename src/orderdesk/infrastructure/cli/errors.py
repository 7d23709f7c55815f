from __future__ import annotations

import click

from orderdesk.domain.exceptions import DomainException


def to_click_error(exc: DomainException) -> click.ClickException:
    """Render a domain error, with any field errors, for the terminal."""
    details = "".join(f"\n  - {e}" for e in exc.errors)
    return click.ClickException(f"{exc.message}{details}")
