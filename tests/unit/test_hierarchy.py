"""
Unit tests for the frame forest builder.
"""

from frames_inspector.hierarchy import build_frame_forest
from frames_inspector.models import Frame


def frame(frame_id, parent_frame_id=-1):
    return Frame(tab_id=1, frame_id=frame_id, parent_frame_id=parent_frame_id)


class TestBuildFrameForest:
    """Test linking frames into a rooted forest."""

    def test_single_tree(self):
        top, a, b, c = frame(0), frame(1, 0), frame(2, 0), frame(3, 1)

        roots = build_frame_forest([top, a, b, c])

        assert roots == [top]
        assert top.children == [a, b]
        assert a.children == [c]
        assert b.children == []

    def test_children_follow_snapshot_order(self):
        top, late, early = frame(0), frame(9, 0), frame(2, 0)
        build_frame_forest([top, late, early])
        assert [child.frame_id for child in top.children] == [9, 2]

    def test_unresolved_parent_is_root(self):
        """Test [{1,-1},{2,99}] yields two roots."""
        one, two = frame(1), frame(2, 99)
        assert build_frame_forest([one, two]) == [one, two]

    def test_child_listed_before_parent(self):
        top, child = frame(0), frame(1, 0)
        roots = build_frame_forest([child, top])
        assert roots == [top]
        assert top.children == [child]

    def test_self_parent_is_root(self):
        loop = frame(4, 4)
        roots = build_frame_forest([loop])
        assert roots == [loop]
        assert loop.children == []

    def test_parent_cycle_becomes_root(self):
        """Test frames pointing at each other stay in the forest."""
        top, two, three = frame(0), frame(2, 3), frame(3, 2)
        roots = build_frame_forest([top, two, three])

        assert [root.frame_id for root in roots] == [0, 2]
        assert two.children == [three]
        assert three.children == []

    def test_frame_below_parent_cycle_kept(self):
        top, two, three, leaf = frame(0), frame(2, 3), frame(3, 2), frame(4, 3)
        roots = build_frame_forest([top, leaf, two, three])

        assert [root.frame_id for root in roots] == [0, 3]
        assert three.children == [leaf, two]
        assert two.children == []

    def test_stale_children_replaced(self):
        top, old = frame(0), frame(1, 0)
        top.children = [old]
        build_frame_forest([top])
        assert top.children == []

    def test_duplicate_frames_linked_once(self):
        top, child = frame(0), frame(1, 0)
        roots = build_frame_forest([top, child, child])
        assert roots == [top]
        assert top.children == [child]

    def test_empty_snapshot(self):
        assert build_frame_forest([]) == []
