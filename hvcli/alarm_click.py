"""CLI commands for alarm events."""

from typing import Optional

import click

from .alarm_api import ALARM_FILTERS, MANAGE_ACTIONS, bulk_manage_alarm_events, list_alarm_events
from .auth import get_client
from .cli_utils import output_options
from .output import handle_output_choice
from .utils import format_success, handle_api_error


def register_alarm_commands(cli: click.Group) -> None:
    """Register the 'alarm' command group and its subcommands."""

    @cli.group()
    def alarm() -> None:
        """List, close and acknowledge alarm events."""

    @alarm.command(name="list")
    @click.option(
        "--filter",
        "alarm_filter",
        type=click.Choice(list(ALARM_FILTERS)),
        default="unacknowledged",
        show_default=True,
    )
    @click.option("--skip", "-k", type=click.IntRange(min=0), default=0, show_default=True)
    @click.option("--take", "-t", type=click.IntRange(min=1), default=100, show_default=True)
    @output_options
    def list_alarms(
        alarm_filter: str, skip: int, take: int, output_type: str, filename: Optional[str]
    ) -> None:
        """List alarm events across all assets."""
        try:
            config, session = get_client()
            events = list_alarm_events(config, session, skip, take, alarm_filter)
            handle_output_choice(events, output_type, filename, total_label="alarm event(s)")
        except Exception as exc:  # noqa: BLE001
            handle_api_error(exc)

    @alarm.command(name="manage")
    @click.argument("filename", type=click.Path(exists=True, dir_okay=False))
    @click.option("--action", "-a", type=click.Choice(MANAGE_ACTIONS), required=True)
    def manage(filename: str, action: str) -> None:
        """Close or acknowledge the alarm events listed in a CSV file.

        The file needs an id column; a csv-file export of 'alarm list' works.
        """
        try:
            config, session = get_client()
            batches = bulk_manage_alarm_events(config, session, filename, action)
            format_success(f"Alarm events {action}d", {"Batches": batches})
        except Exception as exc:  # noqa: BLE001
            handle_api_error(exc)
