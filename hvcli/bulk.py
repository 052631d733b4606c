"""CSV-driven bulk operations.

Records are streamed from a header-row CSV file, handed one at a time to a
single-record handler, and per-record failures are logged without stopping
the run. Calls that take a list of ids are fed fixed-size batches.
"""

import csv
import logging
from typing import Any, Callable, Iterator, List, Sequence, Tuple, Type, TypeVar

import click

from .utils import RecordError

logger = logging.getLogger(__name__)

T = TypeVar("T")


def read_csv_records(filename: str, record_type: Type[T]) -> Iterator[T]:
    """Stream typed records from a CSV file.

    A row that does not parse into ``record_type`` is skipped with a warning
    naming its line number.

    Args:
        filename: Path to a CSV file whose header names the record fields
        record_type: Record class providing ``from_row``

    Yields:
        One record per valid row, in file order

    Raises:
        FileNotFoundError: If the file does not exist
    """
    with open(filename, newline="", encoding="utf-8-sig") as f:
        reader = csv.DictReader(f)
        for row in reader:
            try:
                record = record_type.from_row(row)
            except (KeyError, ValueError) as exc:
                logger.warning(
                    "Skipping line %d of %s: %s", reader.line_num, filename, exc
                )
                continue
            logger.debug("Read record: %s", record)
            yield record


def chunked(items: Sequence[T], size: int) -> Iterator[List[T]]:
    """Split items into consecutive batches of at most ``size`` elements.

    Concatenating the batches in order reproduces ``items`` exactly.
    """
    if size < 1:
        raise ValueError("Batch size must be at least 1")
    for start in range(0, len(items), size):
        yield list(items[start : start + size])


class BulkRunResult:
    """Tally of a bulk run, reported once every record has been handled."""

    def __init__(self, operation_name: str):
        """Initialize the tally.

        Args:
            operation_name: Past-tense description used in the report, e.g.
                "updated asset names for"
        """
        self.operation_name = operation_name
        self.successes: List[str] = []
        self.failures: List[Tuple[str, str]] = []

    def add_success(self, item_identifier: str) -> None:
        self.successes.append(item_identifier)

    def add_failure(self, item_identifier: str, error_message: str) -> None:
        self.failures.append((item_identifier, error_message))

    def report_results(self) -> None:
        """Print a one-line summary plus one line per failed record."""
        total = len(self.successes) + len(self.failures)

        click.echo(f"✓ Successfully {self.operation_name} {len(self.successes)}/{total} records")

        if self.failures:
            click.echo(f"✗ {len(self.failures)}/{total} records failed:", err=True)
            for item_id, error in self.failures:
                click.echo(f"  - {item_id}: {error}", err=True)


def process_records(
    records: Iterator[T],
    handler: Callable[[T], Any],
    operation_name: str = "processed",
    identify: Callable[[T], str] = str,
) -> BulkRunResult:
    """Apply ``handler`` to each record in order.

    A ``RecordError`` raised by the handler is logged and the run moves on to
    the next record. Any other exception ends the run.

    Args:
        records: Records to process
        handler: Single-record operation
        operation_name: Description used in the final report
        identify: Returns the identifier shown for a record in the report

    Returns:
        The run tally
    """
    result = BulkRunResult(operation_name)
    for record in records:
        item_id = identify(record)
        try:
            handler(record)
        except RecordError as exc:
            logger.error("%s: %s", item_id, exc)
            result.add_failure(item_id, str(exc))
            continue
        result.add_success(item_id)
    return result
