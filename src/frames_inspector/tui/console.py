"""
Rich TUI Console Setup

Provides the core console infrastructure for the frames inspector.
Configured via environment variables for customizable appearance.
"""

import os
from dataclasses import dataclass
from datetime import datetime
from typing import Literal, Optional

from rich.console import Console
from rich.panel import Panel
from rich.style import Style
from rich.theme import Theme


# Block types for inspector output
BlockType = Literal["frame", "message", "warning"]


@dataclass
class TUIConfig:
    """
    TUI configuration loaded from environment variables.

    Attributes:
        color_frame: Color for frame tree output
        color_message: Color for message table output
        color_warning: Color for warnings and consistency problems
        show_timestamps: Whether to display timestamps on block titles
    """

    color_frame: str = "cyan"
    color_message: str = "green"
    color_warning: str = "yellow"
    show_timestamps: bool = True

    @classmethod
    def from_env(cls) -> "TUIConfig":
        """Load configuration from environment variables."""
        return cls(
            color_frame=os.getenv("COLOR_FRAME", "cyan"),
            color_message=os.getenv("COLOR_MESSAGE", "green"),
            color_warning=os.getenv("COLOR_WARNING", "yellow"),
            show_timestamps=os.getenv("SHOW_TIMESTAMPS", "true").lower() == "true",
        )


def create_theme(config: TUIConfig) -> Theme:
    """Create a Rich theme from TUI configuration."""
    return Theme(
        {
            "frame": Style(color=config.color_frame, bold=True),
            "frame.text": Style(color=config.color_frame),
            "message": Style(color=config.color_message, bold=True),
            "message.text": Style(color=config.color_message),
            "warning": Style(color=config.color_warning, bold=True),
            "timestamp": Style(dim=True),
            "label": Style(bold=True),
            "muted": Style(dim=True),
        }
    )


class InspectorConsole:
    """
    Rich console wrapper for frames inspector output.

    Provides titled blocks for frame trees, message tables and warnings
    with consistent styling and optional timestamps.
    """

    def __init__(self, config: Optional[TUIConfig] = None, console: Optional[Console] = None):
        """
        Initialize the inspector console.

        Args:
            config: TUI configuration. If None, loads from environment.
            console: Underlying Rich console (e.g. a recording console in tests)
        """
        self.config = config or TUIConfig.from_env()
        self._theme = create_theme(self.config)
        self.console = console or Console(theme=self._theme)
        if console is not None:
            self.console.push_theme(self._theme)

    def _get_timestamp(self) -> str:
        """Get formatted timestamp if enabled."""
        if self.config.show_timestamps:
            return datetime.now().strftime("%H:%M:%S")
        return ""

    def _get_block_style(self, block_type: BlockType) -> tuple[str, str]:
        """Get the style and label for a block type."""
        styles = {
            "frame": (self.config.color_frame, "FRAMES"),
            "message": (self.config.color_message, "MESSAGES"),
            "warning": (self.config.color_warning, "WARNING"),
        }
        return styles[block_type]

    def block_title(self, block_type: BlockType, title: Optional[str] = None) -> str:
        _, label = self._get_block_style(block_type)
        block_title = title or f"[{label}]"
        timestamp = self._get_timestamp()
        if timestamp:
            block_title = f"{timestamp} {block_title}"
        return block_title

    def print_block(
        self,
        content,
        block_type: BlockType,
        title: Optional[str] = None,
    ) -> None:
        """
        Print a styled block to the console.

        Args:
            content: Text or Rich renderable to display
            block_type: Type of block (frame, message, warning)
            title: Optional title to override default label
        """
        color, _ = self._get_block_style(block_type)
        panel = Panel(
            content,
            title=self.block_title(block_type, title),
            title_align="left",
            border_style=color,
            padding=(0, 1),
        )
        self.console.print(panel)

    def print_warning(self, content: str, title: Optional[str] = None) -> None:
        self.print_block(content, "warning", title)

    def print(self, *args, **kwargs) -> None:
        """Passthrough to underlying Rich console."""
        self.console.print(*args, **kwargs)


# Global console instance
_console: Optional[InspectorConsole] = None


def get_console() -> InspectorConsole:
    """Get or create the global console instance."""
    global _console
    if _console is None:
        _console = InspectorConsole()
    return _console


def create_console(
    config: Optional[TUIConfig] = None,
    console: Optional[Console] = None,
) -> InspectorConsole:
    """
    Create a new console instance with optional configuration.

    Args:
        config: TUI configuration. If None, loads from environment.
        console: Underlying Rich console to wrap
    """
    return InspectorConsole(config, console)
