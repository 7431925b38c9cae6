"""
Frame - Stable identity for a frame slot, keyed by (tab_id, frame_id).

A frame survives navigations: the document it displays changes, the slot
does not.
"""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional

from .owner_element import OwnerElement

if TYPE_CHECKING:
    from .frame_document import FrameDocument

TOP_LEVEL_PARENT_ID = -1

FrameKey = tuple[int, int]


@dataclass(eq=False)
class Frame:
    """
    A frame slot in one tab.

    Attributes:
        tab_id: Tab the frame belongs to
        frame_id: Browser frame number (0 is the top frame)
        parent_frame_id: Parent frame number, -1 for top-level frames
        current_document: Document currently displayed in this frame
        current_owner_element: Iframe tag embedding this frame, if known
        children: Child frames, rebuilt on each hierarchy snapshot
    """

    tab_id: int
    frame_id: int
    parent_frame_id: int = TOP_LEVEL_PARENT_ID
    current_document: Optional["FrameDocument"] = None
    current_owner_element: Optional[OwnerElement] = None
    children: list["Frame"] = field(default_factory=list)

    @staticmethod
    def make_key(tab_id: int, frame_id: int) -> FrameKey:
        return (tab_id, frame_id)

    @property
    def key(self) -> FrameKey:
        return Frame.make_key(self.tab_id, self.frame_id)

    @property
    def is_top_level(self) -> bool:
        return self.parent_frame_id == TOP_LEVEL_PARENT_ID

    @property
    def label(self) -> str:
        """Display label used by filters and tables, e.g. ``frame[2]``."""
        return f"frame[{self.frame_id}]"

    def __repr__(self) -> str:
        document_id = self.current_document.document_id if self.current_document else None
        return (
            f"Frame(tab_id={self.tab_id}, frame_id={self.frame_id}, "
            f"parent_frame_id={self.parent_frame_id}, document_id={document_id!r}, "
            f"children={[child.frame_id for child in self.children]})"
        )
