"""Table formatting utilities for CLI commands."""

from typing import Any, List, Sequence, Tuple

import click


def output_table(
    items: Sequence[Any],
    columns: List[Tuple[str, str, int]],
    empty_message: str = "No items found.",
    total_label: str = "item(s)",
) -> None:
    """Draw entities as a table with box-drawing characters.

    Args:
        items: Entities to draw, one per row
        columns: (header, attribute, width) triples
        empty_message: Message to display when no items are found
        total_label: Label for total count (e.g., "asset(s)", "sensor(s)")
    """
    if not items:
        click.echo(empty_message)
        return

    headers = [header for header, _, _ in columns]
    column_widths = [width for _, _, width in columns]

    _draw_table_border(column_widths, "top")
    _draw_table_header(headers, column_widths)
    _draw_table_border(column_widths, "middle")
    _draw_table_rows(items, [attr for _, attr, _ in columns], column_widths)
    _draw_table_border(column_widths, "bottom")

    click.echo(f"\nTotal: {len(items)} {total_label}")


def _draw_table_border(column_widths: List[int], border_type: str) -> None:
    """Draw table borders with appropriate characters."""
    if border_type == "top":
        left, junction, right = "┌", "┬", "┐"
    elif border_type == "middle":
        left, junction, right = "├", "┼", "┤"
    elif border_type == "bottom":
        left, junction, right = "└", "┴", "┘"
    else:
        raise ValueError("Invalid border_type")

    segments = [("─" * (w + 2)) for w in column_widths]
    click.echo(left + junction.join(segments) + right)


def _draw_table_header(headers: List[str], column_widths: List[int]) -> None:
    header_parts = ["│"]
    for header, width in zip(headers, column_widths):
        header_parts.append(f" {header:<{width}} │")
    click.echo("".join(header_parts))


def _draw_table_rows(
    items: Sequence[Any], attributes: List[str], column_widths: List[int]
) -> None:
    for item in items:
        row_parts = ["│"]
        for attr, width in zip(attributes, column_widths):
            value = getattr(item, attr, None)
            # Truncate if necessary
            str_value = ("" if value is None else str(value))[:width]
            row_parts.append(f" {str_value:<{width}} │")
        click.echo("".join(row_parts))
