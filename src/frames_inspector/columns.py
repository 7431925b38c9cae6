"""
Message Table Columns

Column definitions plus the display and sort value of each column for a
message.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Union

from .messages import Message
from .models import SourceType


@dataclass(frozen=True)
class ColumnDef:
    id: str
    title: str
    default_visible: bool
    width: int


ALL_COLUMNS: list[ColumnDef] = [
    ColumnDef("timestamp", "Time", True, 12),
    ColumnDef("direction", "Dir", True, 3),
    ColumnDef("target.document.url", "Target URL", False, 30),
    ColumnDef("target.document.origin", "Target", True, 24),
    ColumnDef("target.document.title", "Target Title", False, 20),
    ColumnDef("source.document.origin", "Source", True, 24),
    ColumnDef("sourceType", "Source Type", True, 8),
    ColumnDef("source.frameId", "Source Frame", False, 10),
    ColumnDef("source.ownerElement.src", "Owner src", False, 30),
    ColumnDef("source.ownerElement.id", "Owner id", False, 12),
    ColumnDef("source.ownerElement.domPath", "Owner Path", False, 30),
    ColumnDef("messageType", "Type", True, 16),
    ColumnDef("dataPreview", "Data", True, 40),
    ColumnDef("dataSize", "Size", False, 8),
]

COLUMNS_BY_ID: dict[str, ColumnDef] = {column.id: column for column in ALL_COLUMNS}

DEFAULT_COLUMNS: list[str] = [column.id for column in ALL_COLUMNS if column.default_visible]

DIRECTION_ICONS: dict[SourceType, str] = {
    SourceType.PARENT: "↘",
    SourceType.TOP: "↘",
    SourceType.CHILD: "↖",
    SourceType.SELF: "↻",
    SourceType.OPENER: "←",
}


def format_timestamp(timestamp_ms: float) -> str:
    """Format an epoch-milliseconds timestamp as local ``HH:MM:SS.mmm``."""
    moment = datetime.fromtimestamp(timestamp_ms / 1000)
    return moment.strftime("%H:%M:%S.") + f"{moment.microsecond // 1000:03d}"


def format_size(size_bytes: int) -> str:
    if size_bytes < 1024:
        return f"{size_bytes} B"
    return f"{size_bytes / 1024:.1f} KB"


def direction_icon(source_type: SourceType) -> str:
    return DIRECTION_ICONS.get(source_type, "?")


def cell_value(message: Message, column_id: str) -> str:
    """
    Display value of a column for a message.

    Values resolved through the frame store reflect the store's current
    state; unknown columns and unresolved values are empty strings.
    """
    if column_id == "timestamp":
        return format_timestamp(message.timestamp)
    if column_id == "direction":
        return direction_icon(message.source_type)
    if column_id.startswith("target.document."):
        document = message.target_document
        if document is None:
            return ""
        return getattr(document, column_id.rsplit(".", 1)[1], None) or ""
    if column_id == "source.document.origin":
        document = message.source_document
        return (document.origin if document else None) or ""
    if column_id == "sourceType":
        return message.source_type.value
    if column_id == "source.frameId":
        frame = message.source_frame
        return frame.label if frame else ""
    if column_id.startswith("source.ownerElement."):
        owner = message.source_owner_element
        if owner is None:
            return ""
        attribute = {"src": "src", "id": "id", "domPath": "dom_path"}.get(column_id.rsplit(".", 1)[1])
        return (getattr(owner, attribute) if attribute else None) or ""
    if column_id == "messageType":
        return message.message_type or ""
    if column_id == "dataPreview":
        return message.data_preview
    if column_id == "dataSize":
        return format_size(message.data_size)
    return ""


def sort_value(message: Message, column_id: str) -> Union[float, str]:
    """Sort key: numeric for time and size, case-folded text otherwise."""
    if column_id == "timestamp":
        return message.timestamp
    if column_id == "dataSize":
        return message.data_size
    return cell_value(message, column_id).lower()
