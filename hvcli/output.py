"""Render lists of entities as record blocks, JSON, a CSV file or a table."""

import csv
import dataclasses
import json
import logging
import os
from typing import Any, Dict, List, Optional, Sequence

import click

from .table_utils import output_table
from .utils import NoOutputFilenameError, OutputFileExistsError

logger = logging.getLogger(__name__)

OUTPUT_TYPES = ["record", "json", "csv-file", "table"]


def _as_dict(item: Any) -> Dict[str, Any]:
    if dataclasses.is_dataclass(item):
        return dataclasses.asdict(item)
    return dict(item)


def _write_csv_file(items: Sequence[Any], filename: str) -> None:
    """Write items to a new CSV file whose header is the entity field names.

    Raises:
        OutputFileExistsError: If the file already exists
    """
    if os.path.exists(filename):
        raise OutputFileExistsError(filename)

    rows = [_as_dict(item) for item in items]
    fieldnames = list(rows[0].keys()) if rows else []
    with open(filename, "x", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=fieldnames)
        writer.writeheader()
        writer.writerows(rows)
    logger.info("Wrote %d rows to %s", len(rows), filename)


def _echo_records(items: Sequence[Any]) -> None:
    for index, item in enumerate(items, start=1):
        click.echo(f"---- [{index}] ----")
        for key, value in _as_dict(item).items():
            click.echo(f"{key}: {'' if value is None else value}")
        click.echo("")


def handle_output_choice(
    items: Sequence[Any],
    output_type: str,
    filename: Optional[str] = None,
    total_label: str = "item(s)",
) -> None:
    """Emit a list of entities in the chosen output type.

    Args:
        items: Dataclass entities to emit
        output_type: One of record, json, csv-file or table
        filename: Destination file for csv-file output
        total_label: Label for the table total line

    Raises:
        NoOutputFilenameError: If csv-file output is chosen without a filename
        OutputFileExistsError: If the destination file already exists
    """
    if output_type == "csv-file":
        if not filename:
            raise NoOutputFilenameError()
        _write_csv_file(items, filename)
        return

    if output_type == "json":
        click.echo(json.dumps([_as_dict(item) for item in items], indent=2, default=str))
        return

    if output_type == "table":
        columns: List = getattr(type(items[0]), "TABLE_COLUMNS", []) if items else []
        output_table(items, columns, total_label=total_label)
        return

    if not items:
        click.echo("No items found.")
        return
    _echo_records(items)
