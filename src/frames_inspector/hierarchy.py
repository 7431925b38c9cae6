"""
Frame Hierarchy Builder

Turns a flat list of one tab's frames into a rooted forest.
"""

import logging
from collections.abc import Iterable

from .models import Frame

logger = logging.getLogger(__name__)


def build_frame_forest(frames: Iterable[Frame]) -> list[Frame]:
    """
    Link frames to their parents and return the roots.

    Every frame's children list is replaced wholesale. A frame whose parent
    is not part of ``frames`` becomes a root, so the result can hold several
    roots (e.g. a window linked to the tab only through its opener). Frames
    whose parents form a cycle are not dropped: one member of each cycle is
    detached from its parent and becomes a root.

    Args:
        frames: Frames of a single tab, in snapshot order. Repeated frames
            are linked once, at their first position.

    Returns:
        Root frames in snapshot order
    """
    by_id: dict[int, Frame] = {}
    for frame in frames:
        by_id.setdefault(frame.frame_id, frame)

    for frame in by_id.values():
        frame.children = []

    roots: list[Frame] = []
    for frame in by_id.values():
        if frame.is_top_level:
            roots.append(frame)
            continue

        parent = by_id.get(frame.parent_frame_id)
        if parent is None or parent is frame:
            logger.debug(
                f"Frame {frame.frame_id} has no parent {frame.parent_frame_id} "
                f"in snapshot, treating as root"
            )
            roots.append(frame)
        else:
            parent.children.append(frame)

    reachable: set[int] = set()
    for root in roots:
        _mark_reachable(root, reachable)

    if len(reachable) < len(by_id):
        for frame in by_id.values():
            if frame.frame_id in reachable:
                continue
            # Walk up until a frame repeats; that frame sits on the cycle.
            seen: set[int] = set()
            member = frame
            while member.frame_id not in seen:
                seen.add(member.frame_id)
                member = by_id[member.parent_frame_id]
            logger.debug(
                f"Frame {member.frame_id} is part of a parent cycle, treating as root"
            )
            by_id[member.parent_frame_id].children.remove(member)
            roots.append(member)
            _mark_reachable(member, reachable)

        root_ids = {root.frame_id for root in roots}
        roots = [frame for frame in by_id.values() if frame.frame_id in root_ids]

    return roots


def _mark_reachable(root: Frame, reachable: set[int]) -> None:
    pending = [root]
    while pending:
        frame = pending.pop()
        reachable.add(frame.frame_id)
        pending.extend(frame.children)
