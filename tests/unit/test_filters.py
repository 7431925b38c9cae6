"""
Unit tests for message filtering and column values.
"""

from datetime import datetime

import pytest

from frames_inspector.columns import (
    COLUMNS_BY_ID,
    DEFAULT_COLUMNS,
    cell_value,
    direction_icon,
    format_size,
    format_timestamp,
    sort_value,
)
from frames_inspector.filters import FilterTerm, MessageFilter, parse_filter, parse_frame_reference
from frames_inspector.messages import Message
from frames_inspector.models import CapturedMessage, OwnerElement, RegistrationEvent, SourceType
from frames_inspector.store import FrameStore

TAB_ID = 42


@pytest.fixture
def store():
    return FrameStore()


def make_message(store, **overrides) -> Message:
    """A child -> top message, resolved against ``store``."""
    raw = {
        "id": "m1",
        "timestamp": 1700000000123.0,
        "target": {
            "url": "https://parent.example.com/page",
            "origin": "https://parent.example.com",
            "documentTitle": "Parent",
            "frameId": 0,
            "documentId": "doc-A",
        },
        "source": {
            "type": "child",
            "origin": "https://child.example.com",
            "windowId": "win-B",
            "iframeSrc": "https://child.example.com/frame",
            "iframeId": "b",
            "iframeDomPath": "body > iframe",
        },
        "data": {"type": "ready"},
        "dataPreview": '{"type":"ready"}',
        "dataSize": 16,
        "messageType": "ready",
    }
    raw.update(overrides)
    captured = CapturedMessage.model_validate(raw)
    event = captured.to_message_event(TAB_ID)
    resolution = store.process_message(event) if event else None
    return Message(captured, store, resolution)


class TestParseFilter:
    """Test query parsing."""

    def test_terms_and_fields(self):
        terms = parse_filter("Type:Ready -source:evil hello")
        assert terms == [
            FilterTerm(value="ready", field="type"),
            FilterTerm(value="evil", field="source", negated=True),
            FilterTerm(value="hello"),
        ]

    def test_lone_dash_is_a_bare_term(self):
        assert parse_filter("-") == [FilterTerm(value="-")]

    def test_leading_colon_is_a_bare_term(self):
        assert parse_filter(":x") == [FilterTerm(value=":x")]

    def test_frame_references(self):
        assert parse_frame_reference("frame[3]") == (None, 3)
        assert parse_frame_reference("tab[7].frame[0]") == (7, 0)
        assert parse_frame_reference("frame3") is None


class TestMessageFilter:
    """Test matching messages against queries."""

    def test_empty_query_matches_everything(self, store):
        assert MessageFilter("").matches(make_message(store))

    @pytest.mark.parametrize(
        "query,expected",
        [
            ("type:ready", True),
            ("type:rea", False),
            ("target:parent.example", True),
            ("source:child.example", True),
            ("source:parent.example", False),
            ("sourcetype:child", True),
            ("sourcetype:parent", False),
            ("ready", True),
            ("absent", False),
            ("-type:ready", False),
            ("-absent", True),
            ("type:ready sourcetype:child", True),
            ("type:ready sourcetype:parent", False),
            ("color:red", False),
            ("-color:red", True),
        ],
    )
    def test_queries(self, store, query, expected):
        assert MessageFilter(query, tab_id=TAB_ID).matches(make_message(store)) is expected

    def test_frame_matches_target_frame(self, store):
        message = make_message(store)
        assert MessageFilter("frame:frame[0]", tab_id=TAB_ID).matches(message)
        assert MessageFilter(f"frame:tab[{TAB_ID}].frame[0]", tab_id=TAB_ID).matches(message)
        assert not MessageFilter("frame:tab[1].frame[0]", tab_id=TAB_ID).matches(message)
        assert not MessageFilter("frame:frame[3]", tab_id=TAB_ID).matches(message)

    def test_frame_matches_registered_source(self, store):
        message = make_message(store)
        assert not MessageFilter("frame:frame[3]", tab_id=TAB_ID).matches(message)

        store.process_registration(
            RegistrationEvent(frame_id=3, tab_id=TAB_ID, document_id="doc-B", window_id="win-B")
        )
        assert MessageFilter("frame:frame[3]", tab_id=TAB_ID).matches(message)

    def test_malformed_frame_reference_matches_nothing(self, store):
        assert not MessageFilter("frame:top", tab_id=TAB_ID).matches(make_message(store))


class TestColumnFormatting:
    """Test value formatting helpers."""

    def test_format_timestamp(self):
        expected = datetime.fromtimestamp(1700000000.123).strftime("%H:%M:%S") + ".123"
        assert format_timestamp(1700000000123.0) == expected

    @pytest.mark.parametrize(
        "size,expected",
        [(0, "0 B"), (1023, "1023 B"), (1024, "1.0 KB"), (1536, "1.5 KB")],
    )
    def test_format_size(self, size, expected):
        assert format_size(size) == expected

    @pytest.mark.parametrize(
        "source_type,icon",
        [
            (SourceType.PARENT, "↘"),
            (SourceType.TOP, "↘"),
            (SourceType.CHILD, "↖"),
            (SourceType.SELF, "↻"),
            (SourceType.OPENER, "←"),
            (SourceType.UNKNOWN, "?"),
        ],
    )
    def test_direction_icon(self, source_type, icon):
        assert direction_icon(source_type) == icon

    def test_default_columns(self):
        assert DEFAULT_COLUMNS == [
            "timestamp",
            "direction",
            "target.document.origin",
            "source.document.origin",
            "sourceType",
            "messageType",
            "dataPreview",
        ]
        assert all(column_id in COLUMNS_BY_ID for column_id in DEFAULT_COLUMNS)


class TestCellValues:
    """Test per-column display values."""

    def test_captured_and_resolved_values(self, store):
        message = make_message(store)

        assert cell_value(message, "direction") == "↖"
        assert cell_value(message, "target.document.url") == "https://parent.example.com/page"
        assert cell_value(message, "target.document.origin") == "https://parent.example.com"
        assert cell_value(message, "target.document.title") == "Parent"
        assert cell_value(message, "source.document.origin") == "https://child.example.com"
        assert cell_value(message, "sourceType") == "child"
        assert cell_value(message, "source.ownerElement.src") == "https://child.example.com/frame"
        assert cell_value(message, "source.ownerElement.id") == "b"
        assert cell_value(message, "source.ownerElement.domPath") == "body > iframe"
        assert cell_value(message, "messageType") == "ready"
        assert cell_value(message, "dataSize") == "16 B"
        assert cell_value(message, "nonexistent") == ""

    def test_source_frame_resolves_after_registration(self, store):
        message = make_message(store)
        assert cell_value(message, "source.frameId") == ""

        store.process_registration(
            RegistrationEvent(frame_id=3, tab_id=TAB_ID, document_id="doc-B", window_id="win-B")
        )
        assert cell_value(message, "source.frameId") == "frame[3]"

    def test_unresolved_values_are_empty(self, store):
        message = make_message(
            store,
            target={"origin": "https://x"},
            source={"type": "parent"},
            messageType=None,
        )
        assert message.source_owner_element is None
        assert cell_value(message, "target.document.origin") == ""
        assert cell_value(message, "source.document.origin") == ""
        assert cell_value(message, "source.ownerElement.src") == ""
        assert cell_value(message, "messageType") == ""

    def test_sort_values(self, store):
        message = make_message(store)
        assert sort_value(message, "timestamp") == 1700000000123.0
        assert sort_value(message, "dataSize") == 16
        assert sort_value(message, "target.document.title") == "parent"


class TestMessageOwnerSnapshots:
    """Test owner element snapshots are fixed at ingestion time."""

    def test_source_owner_snapshot(self, store):
        message = make_message(store)
        assert message.source_owner_element == OwnerElement(
            dom_path="body > iframe", src="https://child.example.com/frame", id="b"
        )
