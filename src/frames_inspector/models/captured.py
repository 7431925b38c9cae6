"""
Captured message and frame snapshot records.

These mirror the payloads the routing layer sends over the panel connection:
a captured postMessage (already enriched with the receiving frame's id and
document id) and one entry of a tab's frame hierarchy snapshot.
"""

from typing import Annotated, Any, Literal, Optional, Union

from pydantic import Field, field_validator

from .events import MessageEvent, SourceType, WireModel

REGISTRATION_MESSAGE_TYPE = "__frames_inspector_register__"
OPENER_FRAME_ID = "opener"


class MessageTarget(WireModel):
    """The window that received the message."""

    url: str = ""
    origin: str = ""
    document_title: str = ""
    frame_id: Optional[int] = None
    document_id: Optional[str] = None
    frame_info_error: Optional[str] = None


class MessageSource(WireModel):
    """The window that sent the message, as seen by the receiver."""

    type: SourceType = SourceType.UNKNOWN
    origin: str = ""
    window_id: Optional[str] = None
    iframe_src: Optional[str] = None
    iframe_id: Optional[str] = None
    iframe_dom_path: Optional[str] = None
    frame_id: Optional[int] = None
    document_id: Optional[str] = None
    frame_info_error: Optional[str] = None

    @field_validator("type", mode="before")
    @classmethod
    def _coerce_type(cls, value: Any) -> Any:
        return SourceType.UNKNOWN if value is None else SourceType(value)


class CapturedMessage(WireModel):
    """One postMessage event as delivered to the inspector."""

    id: str
    timestamp: float
    target: MessageTarget
    source: MessageSource
    data: Any = None
    data_preview: str = ""
    data_size: int = Field(default=0, ge=0)
    message_type: Optional[str] = None
    buffered: Optional[bool] = None

    def to_message_event(self, tab_id: int) -> Optional[MessageEvent]:
        """Build the store's message event.

        Returns None when the routing layer could not attribute the message
        to a receiving document and frame.
        """
        if self.target.document_id is None or self.target.frame_id is None:
            return None
        return MessageEvent(
            tab_id=tab_id,
            target_document_id=self.target.document_id,
            target_frame_id=self.target.frame_id,
            target_url=self.target.url,
            target_origin=self.target.origin,
            target_title=self.target.document_title,
            source_window_id=self.source.window_id,
            source_document_id=self.source.document_id,
            source_origin=self.source.origin,
            source_type=self.source.type,
            source_iframe_dom_path=self.source.iframe_dom_path,
            source_iframe_src=self.source.iframe_src,
            source_iframe_id=self.source.iframe_id,
        )


class IframeInfo(WireModel):
    """An iframe element found in a frame's document."""

    src: str = ""
    id: str = ""
    dom_path: str = ""


class FrameInfo(WireModel):
    """One frame in a hierarchy snapshot.

    The frame id is numeric for real frames; the pseudo-entry describing the
    tab's opener window uses the string ``"opener"`` and sets is_opener.
    """

    frame_id: Union[int, str]
    document_id: Optional[str] = None
    url: str = ""
    parent_frame_id: int = -1
    title: str = ""
    origin: str = ""
    iframes: list[IframeInfo] = Field(default_factory=list)
    is_opener: bool = False

    @property
    def is_frame(self) -> bool:
        """Whether this entry describes a real frame of the tab."""
        return isinstance(self.frame_id, int) and not self.is_opener


class MessageEnvelope(WireModel):
    """A captured message forwarded to the inspector."""

    type: Literal["message"] = "message"
    payload: CapturedMessage


class HierarchyEnvelope(WireModel):
    """A full frame hierarchy snapshot for the inspected tab."""

    type: Literal["frame-hierarchy"] = "frame-hierarchy"
    payload: list[FrameInfo] = Field(default_factory=list)


class ClearEnvelope(WireModel):
    """The inspected tab's top frame navigated."""

    type: Literal["clear"] = "clear"


PanelEnvelope = Annotated[
    Union[MessageEnvelope, HierarchyEnvelope, ClearEnvelope],
    Field(discriminator="type"),
]
