"""
Frame Model

Entities reconciled by the frame store (Frame, FrameDocument, OwnerElement)
and the records exchanged with the routing layer.
"""

from .owner_element import OwnerElement
from .frame import Frame, FrameKey, TOP_LEVEL_PARENT_ID
from .frame_document import FrameDocument
from .events import (
    MessageEvent,
    MessageResolution,
    RegistrationEvent,
    SourceType,
    WireModel,
)
from .captured import (
    OPENER_FRAME_ID,
    REGISTRATION_MESSAGE_TYPE,
    CapturedMessage,
    ClearEnvelope,
    FrameInfo,
    HierarchyEnvelope,
    IframeInfo,
    MessageEnvelope,
    MessageSource,
    MessageTarget,
    PanelEnvelope,
)

__all__ = [
    # Entities
    "Frame",
    "FrameDocument",
    "FrameKey",
    "OwnerElement",
    "TOP_LEVEL_PARENT_ID",
    # Ingestion events
    "MessageEvent",
    "MessageResolution",
    "RegistrationEvent",
    "SourceType",
    "WireModel",
    # Panel connection records
    "CapturedMessage",
    "FrameInfo",
    "IframeInfo",
    "MessageSource",
    "MessageTarget",
    "OPENER_FRAME_ID",
    "REGISTRATION_MESSAGE_TYPE",
    # Panel connection envelopes
    "ClearEnvelope",
    "HierarchyEnvelope",
    "MessageEnvelope",
    "PanelEnvelope",
]
