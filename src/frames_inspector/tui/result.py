"""
Error and summary blocks.
"""

from typing import Any, Optional

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .console import InspectorConsole, get_console


def print_error(
    error_message: str,
    *,
    error_type: Optional[str] = None,
    suggestion: Optional[str] = None,
    console: Optional[InspectorConsole] = None,
) -> None:
    """
    Print an error block.

    Args:
        error_message: The error message
        error_type: Type/category of error
        suggestion: Suggestion for resolution
        console: Console to use (defaults to global console)
    """
    console = console or get_console()

    content = Text()
    content.append("Error", style="bold red")
    if error_type:
        content.append(f" ({error_type})", style="dim red")
    content.append("\n\n")
    content.append(error_message)

    if suggestion:
        content.append("\n\n")
        content.append(suggestion, style="italic")

    timestamp = console._get_timestamp()
    full_title = "[ERROR]"
    if timestamp:
        full_title = f"{timestamp} {full_title}"

    panel = Panel(
        content,
        title=full_title,
        title_align="left",
        border_style="red",
        padding=(0, 1),
    )
    console.console.print(panel)


def print_summary(
    data: dict[str, Any],
    *,
    title: Optional[str] = None,
    console: Optional[InspectorConsole] = None,
) -> None:
    """
    Print a key/value summary (e.g. replay statistics).

    Args:
        data: Dictionary of data to display
        title: Custom title
        console: Console to use (defaults to global console)
    """
    console = console or get_console()

    table = Table(show_header=False, box=None)
    table.add_column("Field", style="dim")
    table.add_column("Value")

    for key, value in data.items():
        str_value = str(value)
        if len(str_value) > 100:
            str_value = str_value[:97] + "..."
        table.add_row(key, str_value)

    console.print_block(table, "frame", title or "[SUMMARY]")
