"""
HealthTracker — CLI Commands
==============================

What:  Turns ApiClient results into terminal output.
How:   Each command takes an ApiClient and a text stream and returns the
       process exit code. An unreachable API is reported, not raised, and
       still exits 0.
"""

from typing import List, Optional, TextIO, Tuple

from healthtracker import __version__
from healthtracker.cli.api_client import ApiClient
from healthtracker.schemas.status import AboutInfo

UNREACHABLE_MESSAGE = (
    "Error: API is unreachable. Please ensure the API is running and try again."
)


def render_about(about: Optional[AboutInfo]) -> str:
    """
    Format AboutInfo as a two-column table, or the unreachable message.

    Example:
        Health Tracker CLI
        +------------------+------------+
        | Property         | Value      |
        +------------------+------------+
        | CLI Version      | 0.1.0      |
        | API Version      | 0.1.0      |
        | Weigh-ins logged | 12         |
        ...
    """
    if about is None:
        return UNREACHABLE_MESSAGE

    rows: List[Tuple[str, str]] = [
        ("CLI Version", __version__),
        ("API Version", about.api_version),
        ("Weigh-ins logged", str(about.weigh_ins_count)),
        ("Runs logged", str(about.runs_count)),
        ("Last weigh-in", _format_date(about.last_weigh_in_date)),
        ("Last run", _format_date(about.last_run_date)),
    ]
    return "Health Tracker CLI\n" + _table(("Property", "Value"), rows)


def about_command(client: ApiClient, out: TextIO) -> int:
    """`healthtracker about`"""
    out.write(render_about(client.get_about_info()) + "\n")
    return 0


def _format_date(value) -> str:
    return value.isoformat() if value else "None"


def _table(header: Tuple[str, str], rows: List[Tuple[str, str]]) -> str:
    widths = [
        max(len(row[i]) for row in [header, *rows])
        for i in range(len(header))
    ]
    border = "+" + "+".join("-" * (w + 2) for w in widths) + "+"

    def line(cells):
        return "|" + "|".join(f" {cell.ljust(w)} " for cell, w in zip(cells, widths)) + "|"

    return "\n".join([border, line(header), border, *(line(row) for row in rows), border])
