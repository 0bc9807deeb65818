"""
Output Formatting.

Renders API responses for the terminal. Each command picks one renderer
per invocation:

- TableRenderer: header lines plus an ASCII table (Rich), cron schedules
  described in plain English (cron-descriptor)
- JsonRenderer: canonical JSON, keys sorted, tab indented

Renderers return strings; commands write them to their output stream.
"""

import io
import json
from typing import Protocol

from cron_descriptor import ExpressionDescriptor, Options
from croniter import croniter
from rich import box
from rich.console import Console
from rich.table import Table
from rich.text import Text

from rpaasv2.client.types import Autoscale, ScheduledWindow
from rpaasv2.core.logging import get_logger

logger = get_logger(__name__)

# Wide enough that Rich never wraps or shrinks a column.
_RENDER_WIDTH = 4096


def _cron_options() -> Options:
    options = Options()
    options.throw_exception_on_parse_error = True
    options.use_24hour_time_format = False
    options.locale_code = "en_US"
    return options


def describe_cron(expression: str) -> str:
    """
    Describe a cron expression in plain English.

    "00 08 * * 1-5" -> "At 08:00 AM, Monday through Friday"

    Raises:
        ValueError: If the expression cannot be parsed
    """
    if not expression or not expression.strip():
        raise ValueError("empty cron expression")
    # cron-descriptor does not range-check fields ("99 99 * * *" describes fine).
    if len(expression.split()) != 5 or not croniter.is_valid(expression):
        raise ValueError(f"invalid cron expression {expression!r}")
    try:
        return ExpressionDescriptor(expression, _cron_options()).get_description()
    except Exception as e:
        raise ValueError(f"invalid cron expression {expression!r}: {e}") from e


def humanize_schedule(expression: str) -> str:
    """Plain-English description followed by the raw expression in parentheses."""
    try:
        description = describe_cron(expression)
    except ValueError as e:
        logger.debug("Could not describe cron expression", expression=expression, error=str(e))
        return expression
    return f"{description} ({expression})"


def format_window(index: int, window: ScheduledWindow) -> str:
    """Text block for one scheduled window (1-based ``index``)."""
    lines = [
        f"Window {index}:",
        f"  Min replicas: {window.min_replicas}",
        f"  Start: {humanize_schedule(window.start)}",
        f"  End: {humanize_schedule(window.end)}",
    ]
    if window.timezone:
        lines.append(f"  Timezone: {window.timezone}")
    return "\n".join(lines)


def trigger_rows(autoscale: Autoscale) -> list[tuple[str, str]]:
    """(name, details) rows for the active triggers and schedules."""
    rows: list[tuple[str, str]] = []
    if autoscale.cpu is not None:
        rows.append(("CPU", f"{autoscale.cpu}%"))
    if autoscale.memory is not None:
        rows.append(("Memory", f"{autoscale.memory}%"))
    if autoscale.rps is not None:
        rows.append(("RPS", f"{autoscale.rps} req/s"))
    if autoscale.schedules:
        windows = [format_window(i, w) for i, w in enumerate(autoscale.schedules, start=1)]
        rows.append(("Schedule(s)", "\n\n".join(windows)))
    return rows


def render_table(headers: list[str], rows: list[tuple[str, ...]]) -> str:
    """Render an ASCII table: centered headers, left-aligned cells."""
    table = Table(
        box=box.ASCII2,
        header_style=None,
        show_edge=True,
        pad_edge=True,
        expand=False,
    )
    for header in headers:
        table.add_column(Text(header, justify="center"), no_wrap=True)
    for row in rows:
        table.add_row(*(Text(cell) for cell in row))

    buffer = io.StringIO()
    console = Console(
        file=buffer,
        width=_RENDER_WIDTH,
        color_system=None,
        force_terminal=False,
        force_jupyter=False,
        legacy_windows=False,
        highlight=False,
        markup=False,
        emoji=False,
    )
    console.print(table)
    return buffer.getvalue()


class Renderer(Protocol):
    """Output strategy chosen once per invocation."""

    def render_autoscale(self, autoscale: Autoscale) -> str: ...


class TableRenderer:
    """Human-readable output."""

    def render_autoscale(self, autoscale: Autoscale) -> str:
        output = (
            f"min replicas: {autoscale.min_replicas}\n"
            f"max replicas: {autoscale.max_replicas}\n"
        )
        rows = trigger_rows(autoscale)
        if rows:
            output += render_table(["Triggers", "trigger details"], rows)
        return output


class JsonRenderer:
    """Raw JSON output."""

    def render_autoscale(self, autoscale: Autoscale) -> str:
        return json.dumps(autoscale.to_payload(), indent="\t", sort_keys=True) + "\n"


def get_renderer(as_json: bool) -> Renderer:
    """Select the output strategy for this invocation."""
    return JsonRenderer() if as_json else TableRenderer()
