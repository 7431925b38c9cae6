"""
FrameDocument - A specific document loaded in a frame.

Known by a persistent document id, an ephemeral window token, or both.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from .owner_element import OwnerElement

if TYPE_CHECKING:
    from .frame import Frame


@dataclass(eq=False)
class FrameDocument:
    """
    One loaded document instance.

    Attributes:
        document_id: Persistent document identifier (None until known)
        window_id: Most recent window token bound to this document
        url: Document URL
        origin: Document origin
        title: Document title
        frame: Frame currently displaying this document
        reported_owner_element: Owner element last reported for this document
            by a child message, kept until the document is linked to a frame
    """

    document_id: Optional[str] = None
    window_id: Optional[str] = None
    url: Optional[str] = None
    origin: Optional[str] = None
    title: Optional[str] = None
    frame: Optional["Frame"] = None
    reported_owner_element: Optional[OwnerElement] = None

    def __repr__(self) -> str:
        frame_key = self.frame.key if self.frame else None
        return (
            f"FrameDocument(document_id={self.document_id!r}, window_id={self.window_id!r}, "
            f"origin={self.origin!r}, frame={frame_key})"
        )
