"""Rich output helpers for the CLI.

Records and diagnostics are printed as `Text` so response bodies containing
square brackets are never taken for console markup.
"""

from __future__ import annotations

from rich.console import Console
from rich.table import Table
from rich.text import Text

from core.domain.outcome import DeliveryOutcome


def print_record(console: Console, record: str, *, failed: bool = False) -> None:
    """Print one webhook record (see `core.services.reporter.format_record`)."""

    style = "yellow" if failed else ""
    console.print(Text(record.rstrip("\n"), style=style), soft_wrap=True)


def print_error(console: Console, message: str) -> None:
    console.print(Text(message, style="bold red"), soft_wrap=True)


def print_warning(console: Console, message: str) -> None:
    console.print(Text(message, style="yellow"), soft_wrap=True)


def build_outcomes_table(outcomes: list[DeliveryOutcome]) -> Table:
    """Summary table used when the run continued past failures."""

    table = Table(title="Webhook deliveries")
    table.add_column("#", style="cyan", no_wrap=True)
    table.add_column("URL", style="magenta")
    table.add_column("Result", style="white")
    table.add_column("Detail", style="dim")
    for outcome in outcomes:
        if outcome.delivered:
            table.add_row(str(outcome.index), outcome.url, "sent", outcome.status_line or "")
        else:
            table.add_row(str(outcome.index), outcome.url, outcome.kind.value, outcome.error or "")
    return table
