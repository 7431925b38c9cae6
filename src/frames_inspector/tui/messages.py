"""
Message table display.
"""

from typing import Optional

from rich.table import Table
from rich.text import Text

from ..columns import COLUMNS_BY_ID, DEFAULT_COLUMNS, cell_value
from ..messages import Message
from .console import InspectorConsole, get_console


def render_message_table(
    messages: list[Message],
    columns: Optional[list[str]] = None,
) -> Table:
    """
    Build a Rich table of messages.

    Args:
        messages: Messages in display order
        columns: Column ids to show (defaults to the default-visible columns)

    Raises:
        KeyError: An unknown column id was requested
    """
    column_ids = columns or DEFAULT_COLUMNS

    table = Table(show_header=True, header_style="bold", box=None)
    for column_id in column_ids:
        column = COLUMNS_BY_ID[column_id]
        table.add_column(column.title, max_width=column.width, overflow="ellipsis", no_wrap=True)

    for message in messages:
        style = "muted" if message.is_registration_message else None
        table.add_row(*(Text(cell_value(message, column_id)) for column_id in column_ids), style=style)

    return table


def print_message_table(
    messages: list[Message],
    *,
    columns: Optional[list[str]] = None,
    title: Optional[str] = None,
    console: Optional[InspectorConsole] = None,
) -> None:
    """
    Print a MESSAGES block.

    Args:
        messages: Messages in display order
        columns: Column ids to show
        title: Custom title (overrides default "[MESSAGES]")
        console: Console to use (defaults to global console)
    """
    console = console or get_console()

    if not messages:
        console.print_block(Text("No messages", style="muted"), "message", title)
        return

    title = title or f"[MESSAGES] {len(messages)}"
    console.print_block(render_message_table(messages, columns), "message", title)
