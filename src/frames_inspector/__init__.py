"""
Frames Inspector

Reconciles cross-frame postMessage traffic into a model of frames, the
documents loaded in them and the iframe elements that own them.
"""

from frames_inspector.exceptions import InspectorError, TraceFormatError
from frames_inspector.hierarchy import build_frame_forest
from frames_inspector.messages import Message
from frames_inspector.session import InspectorSession
from frames_inspector.store import ChangeKind, FrameStore, StoreChange

__version__ = "0.1.0"

__all__ = [
    "ChangeKind",
    "FrameStore",
    "InspectorError",
    "InspectorSession",
    "Message",
    "StoreChange",
    "TraceFormatError",
    "build_frame_forest",
]
