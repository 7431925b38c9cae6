"""
Rich TUI Interface Module

Terminal output for the frames inspector, using the Rich library.

Components:
- InspectorConsole: Console wrapper with themed, titled blocks
- TUIConfig: Configuration for colors and display options
- Frame forest tree and message table rendering
- Error and summary blocks
"""

from frames_inspector.tui.console import (
    BlockType,
    InspectorConsole,
    TUIConfig,
    create_console,
    get_console,
)
from frames_inspector.tui.frames import (
    describe_frame,
    print_frame_tree,
    render_frame_tree,
)
from frames_inspector.tui.messages import (
    print_message_table,
    render_message_table,
)
from frames_inspector.tui.result import (
    print_error,
    print_summary,
)

__all__ = [
    # Console infrastructure
    "BlockType",
    "InspectorConsole",
    "TUIConfig",
    "create_console",
    "get_console",
    # Frame forest
    "describe_frame",
    "print_frame_tree",
    "render_frame_tree",
    # Messages
    "print_message_table",
    "render_message_table",
    # Results
    "print_error",
    "print_summary",
]
