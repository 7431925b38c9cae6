"""
Message Records

A Message keeps the captured payload plus the owner-element snapshots taken
when it was ingested. Its documents and frames are looked up in the frame
store on every access, so a registration that arrives later resolves the
source of messages already recorded.
"""

import logging
from dataclasses import dataclass
from typing import Any, Optional

from pydantic import ValidationError

from .models import (
    REGISTRATION_MESSAGE_TYPE,
    CapturedMessage,
    Frame,
    FrameDocument,
    MessageResolution,
    MessageSource,
    MessageTarget,
    OwnerElement,
    SourceType,
    WireModel,
)
from .store import FrameStore

logger = logging.getLogger(__name__)


class RegistrationPayload(WireModel):
    """Data carried by a frame registration postMessage."""

    frame_id: int
    tab_id: int
    document_id: str


@dataclass(frozen=True)
class RegistrationData:
    frame_id: int
    tab_id: int
    document_id: str


class Message:
    """
    One captured postMessage as displayed by the inspector.

    Attributes:
        captured: Raw payload from the routing layer
        target_owner_element: Target frame's owner element at ingestion time
        source_owner_element: Source owner element resolved at ingestion time
    """

    def __init__(
        self,
        captured: CapturedMessage,
        store: FrameStore,
        resolution: Optional[MessageResolution] = None,
    ):
        self.captured = captured
        self._store = store
        resolution = resolution or MessageResolution()
        self.target_owner_element: Optional[OwnerElement] = resolution.target_owner_element
        self.source_owner_element: Optional[OwnerElement] = resolution.source_owner_element

    def __repr__(self) -> str:
        return (
            f"Message(id={self.id!r}, source_type={self.source_type.value!r}, "
            f"message_type={self.message_type!r})"
        )

    # Captured fields

    @property
    def id(self) -> str:
        return self.captured.id

    @property
    def timestamp(self) -> float:
        return self.captured.timestamp

    @property
    def target(self) -> MessageTarget:
        return self.captured.target

    @property
    def source(self) -> MessageSource:
        return self.captured.source

    @property
    def source_type(self) -> SourceType:
        return self.captured.source.type

    @property
    def data(self) -> Any:
        return self.captured.data

    @property
    def data_preview(self) -> str:
        return self.captured.data_preview

    @property
    def data_size(self) -> int:
        return self.captured.data_size

    @property
    def message_type(self) -> Optional[str]:
        return self.captured.message_type

    # Registration

    @property
    def is_registration_message(self) -> bool:
        data = self.captured.data
        return isinstance(data, dict) and data.get("type") == REGISTRATION_MESSAGE_TYPE

    @property
    def registration_data(self) -> Optional[RegistrationData]:
        """Frame identity carried by a registration message, if well formed."""
        if not self.is_registration_message:
            return None
        try:
            payload = RegistrationPayload.model_validate(self.captured.data)
        except ValidationError as e:
            logger.debug(f"Ignoring malformed registration in message {self.id!r}: {e}")
            return None
        return RegistrationData(
            frame_id=payload.frame_id,
            tab_id=payload.tab_id,
            document_id=payload.document_id,
        )

    # Resolved through the frame store

    @property
    def target_document(self) -> Optional[FrameDocument]:
        return self._store.get_document_by_id(self.captured.target.document_id)

    @property
    def source_document(self) -> Optional[FrameDocument]:
        document = self._store.get_document_by_id(self.captured.source.document_id)
        if document is not None:
            return document
        return self._store.get_document_by_window_id(self.captured.source.window_id)

    @property
    def target_frame(self) -> Optional[Frame]:
        document = self.target_document
        return document.frame if document else None

    @property
    def source_frame(self) -> Optional[Frame]:
        document = self.source_document
        return document.frame if document else None

    @property
    def source_frame_id(self) -> Optional[int]:
        """Native frame id from the routing layer, else the resolved source frame's."""
        if self.captured.source.frame_id is not None:
            return self.captured.source.frame_id
        frame = self.source_frame
        return frame.frame_id if frame else None
