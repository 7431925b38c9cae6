"""
Inspector Session

Composes a frame store and the message log for one inspected tab, and
dispatches the panel connection protocol (message / frame-hierarchy / clear
envelopes) into them.

Usage:
    session = InspectorSession(tab_id=42)
    session.handle_port_message({"type": "message", "payload": {...}})
    for message in session.filtered_messages("sourcetype:child"):
        print(message.source_frame_id)
"""

import logging
from collections.abc import Iterable, Mapping
from typing import Any, Optional, Union

from pydantic import TypeAdapter

from .columns import COLUMNS_BY_ID, sort_value
from .config import InspectorConfig
from .filters import MessageFilter
from .messages import Message
from .models import (
    CapturedMessage,
    ClearEnvelope,
    Frame,
    FrameInfo,
    HierarchyEnvelope,
    MessageEnvelope,
    MessageResolution,
    PanelEnvelope,
    RegistrationEvent,
)
from .store import FrameStore

logger = logging.getLogger(__name__)

_ENVELOPE_ADAPTER: TypeAdapter[PanelEnvelope] = TypeAdapter(PanelEnvelope)


def parse_envelope(raw: Mapping[str, Any]) -> PanelEnvelope:
    """Validate a raw panel connection message (raises pydantic.ValidationError)."""
    return _ENVELOPE_ADAPTER.validate_python(raw)


class InspectorSession:
    """
    Message log and frame model for one inspected tab.

    Attributes:
        tab_id: Inspected tab
        store: Frame store owned by this session
        config: Session options
        messages: Recorded messages, oldest first
        frame_hierarchy: Last raw hierarchy snapshot (including the opener entry)
        roots: Root frames of the last hierarchy snapshot
        is_recording: Whether new messages are recorded
        preserve_log: Keep messages when the top frame navigates
    """

    def __init__(
        self,
        tab_id: int = 0,
        store: Optional[FrameStore] = None,
        config: Optional[InspectorConfig] = None,
    ):
        self.tab_id = tab_id
        self.store = store or FrameStore()
        self.config = config or InspectorConfig.from_env()
        self.messages: list[Message] = []
        self.frame_hierarchy: list[FrameInfo] = []
        self.roots: list[Frame] = []
        self.is_recording = True
        self.preserve_log = self.config.preserve_log

    @property
    def opener(self) -> Optional[FrameInfo]:
        """Opener pseudo-entry of the last hierarchy snapshot, if any."""
        for info in self.frame_hierarchy:
            if info.is_opener:
                return info
        return None

    def add_message(self, captured: Union[CapturedMessage, Mapping[str, Any]]) -> Optional[Message]:
        """
        Record a captured message and fold it into the frame store.

        Registration messages additionally bind the sender's window token to
        its document id and frame.

        Returns:
            The recorded message, or None while recording is paused
        """
        if not self.is_recording:
            return None

        if not isinstance(captured, CapturedMessage):
            captured = CapturedMessage.model_validate(captured)

        event = captured.to_message_event(self.tab_id)
        if event is None:
            logger.debug(f"Message {captured.id!r} has no target document, not resolving frames")
            resolution = MessageResolution()
        else:
            resolution = self.store.process_message(event)

        message = Message(captured, self.store, resolution)

        registration = message.registration_data
        if registration is not None and captured.source.window_id:
            self.store.process_registration(
                RegistrationEvent(
                    frame_id=registration.frame_id,
                    tab_id=registration.tab_id,
                    document_id=registration.document_id,
                    window_id=captured.source.window_id,
                    owner_dom_path=captured.source.iframe_dom_path,
                    owner_src=captured.source.iframe_src,
                    owner_id=captured.source.iframe_id,
                )
            )

        self.messages.append(message)
        self._enforce_message_cap()
        return message

    def _enforce_message_cap(self) -> None:
        limit = self.config.max_messages
        if limit and len(self.messages) > limit:
            dropped = len(self.messages) - limit
            del self.messages[:dropped]
            logger.debug(f"Dropped {dropped} oldest message(s), limit is {limit}")

    def set_frame_hierarchy(self, frames: Iterable[Union[FrameInfo, Mapping[str, Any]]]) -> list[Frame]:
        """
        Apply a hierarchy snapshot.

        The raw snapshot is kept for display; only real frames reach the
        frame store.

        Returns:
            Root frames of the snapshot
        """
        self.frame_hierarchy = [
            info if isinstance(info, FrameInfo) else FrameInfo.model_validate(info)
            for info in frames
        ]
        self.roots = self.store.process_hierarchy(
            self.tab_id,
            [info for info in self.frame_hierarchy if info.is_frame],
        )
        return self.roots

    def handle_port_message(self, envelope: Union[PanelEnvelope, Mapping[str, Any]]) -> None:
        """Dispatch one panel connection message."""
        if isinstance(envelope, Mapping):
            envelope = parse_envelope(envelope)

        if isinstance(envelope, MessageEnvelope):
            self.add_message(envelope.payload)
        elif isinstance(envelope, HierarchyEnvelope):
            self.set_frame_hierarchy(envelope.payload)
        elif isinstance(envelope, ClearEnvelope):
            if self.preserve_log:
                logger.debug("Top frame navigated, preserving message log")
            else:
                self.clear_messages()

    def clear_messages(self) -> None:
        self.messages = []

    def reset(self) -> None:
        """Forget messages, the hierarchy snapshot and every frame."""
        self.clear_messages()
        self.frame_hierarchy = []
        self.roots = []
        self.store.clear()

    def toggle_recording(self) -> bool:
        self.is_recording = not self.is_recording
        return self.is_recording

    def set_preserve_log(self, value: bool) -> None:
        self.preserve_log = value

    def filtered_messages(
        self,
        filter_text: str = "",
        sort_column: str = "timestamp",
        descending: bool = False,
    ) -> list[Message]:
        """
        Messages matching a filter query, sorted by a column.

        Registration messages are hidden unless enabled in the config.

        Args:
            filter_text: Filter query (see frames_inspector.filters)
            sort_column: Column id to sort by (unknown ids fall back to timestamp)
            descending: Reverse the sort order
        """
        message_filter = MessageFilter(filter_text, tab_id=self.tab_id)
        show_registration = self.config.show_registration_messages

        result = [
            message for message in self.messages
            if (show_registration or not message.is_registration_message)
            and message_filter.matches(message)
        ]

        if sort_column not in COLUMNS_BY_ID:
            sort_column = "timestamp"
        result.sort(key=lambda message: sort_value(message, sort_column), reverse=descending)
        return result
