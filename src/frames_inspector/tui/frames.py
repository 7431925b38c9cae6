"""
Frame forest display.

Renders the frame hierarchy of a tab as a Rich tree: one node per frame with
its current document and owner element.
"""

from typing import Optional

from rich.text import Text
from rich.tree import Tree

from ..models import Frame, FrameInfo
from .console import InspectorConsole, get_console


def describe_frame(frame: Frame, iframe_count: Optional[int] = None) -> Text:
    """One-line label for a frame node."""
    text = Text()
    text.append(frame.label, style="label")

    document = frame.current_document
    if document is None:
        text.append("  (no document)", style="muted")
    else:
        if document.origin:
            text.append(f"  {document.origin}", style="frame.text")
        if document.title:
            text.append(f"  “{document.title}”")
        if document.url and document.url != document.origin:
            text.append(f"  {document.url}", style="muted")

    owner = frame.current_owner_element
    if owner is not None:
        text.append(f"  <iframe {owner}>", style="muted")

    if iframe_count:
        text.append(f"  [{iframe_count} iframe{'s' if iframe_count != 1 else ''}]", style="muted")

    return text


def render_frame_tree(
    roots: list[Frame],
    *,
    snapshot: Optional[list[FrameInfo]] = None,
    label: str = "Frames",
) -> Tree:
    """
    Build a Rich tree for a frame forest.

    Args:
        roots: Root frames from a hierarchy snapshot
        snapshot: Raw snapshot, used for iframe counts and the opener entry
        label: Tree root label

    Returns:
        Tree with one branch per root frame
    """
    iframe_counts: dict[int, int] = {}
    opener: Optional[FrameInfo] = None
    for info in snapshot or []:
        if info.is_frame:
            iframe_counts[info.frame_id] = len(info.iframes)
        elif info.is_opener:
            opener = info

    tree = Tree(Text(label, style="frame"))
    if opener is not None:
        tree.add(Text(f"opener  {opener.origin or '(unknown origin)'}", style="muted"))

    def add(branch: Tree, frame: Frame) -> None:
        node = branch.add(describe_frame(frame, iframe_counts.get(frame.frame_id)))
        for child in frame.children:
            add(node, child)

    for root in roots:
        add(tree, root)
    return tree


def print_frame_tree(
    roots: list[Frame],
    *,
    snapshot: Optional[list[FrameInfo]] = None,
    title: Optional[str] = None,
    console: Optional[InspectorConsole] = None,
) -> None:
    """
    Print a FRAMES block with the frame forest.

    Args:
        roots: Root frames from a hierarchy snapshot
        snapshot: Raw snapshot, used for iframe counts and the opener entry
        title: Custom title (overrides default "[FRAMES]")
        console: Console to use (defaults to global console)
    """
    console = console or get_console()

    if not roots:
        console.print_block(Text("No frame hierarchy received", style="muted"), "frame", title)
        return

    console.print_block(render_frame_tree(roots, snapshot=snapshot), "frame", title)
