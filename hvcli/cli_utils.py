"""Common utility functions for all CLI commands."""

from typing import Any, Callable, Optional

import click

from .models import parse_uuid
from .output import OUTPUT_TYPES


def output_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Add the shared ``--output-type`` and ``--filename`` options to a command."""
    func = click.option(
        "--filename",
        "-f",
        type=click.Path(dir_okay=False),
        help="Output file (required for csv-file output)",
    )(func)
    func = click.option(
        "--output-type",
        "-o",
        type=click.Choice(OUTPUT_TYPES),
        default="record",
        show_default=True,
        help="Output format",
    )(func)
    return func


def validate_uuid(
    ctx: click.Context, param: click.Parameter, value: Optional[str]
) -> Optional[str]:
    """Click callback rejecting values that are not UUIDs."""
    if value is None:
        return None
    try:
        return parse_uuid(value, param.name or "id")
    except ValueError as exc:
        raise click.BadParameter(str(exc)) from exc
