"""
Unit tests for trace loading and replay.
"""

import io
import json

import pytest

from frames_inspector.config import InspectorConfig
from frames_inspector.exceptions import InspectorError, TraceFormatError
from frames_inspector.models import ClearEnvelope, HierarchyEnvelope, MessageEnvelope
from frames_inspector.session import InspectorSession
from frames_inspector.trace import iter_trace, load_trace, replay_trace

MESSAGE = {
    "type": "message",
    "payload": {
        "id": "m1",
        "timestamp": 1000.0,
        "target": {"origin": "https://a", "frameId": 0, "documentId": "doc-A"},
        "source": {"type": "child", "origin": "https://b", "windowId": "win-B"},
        "dataPreview": "{}",
    },
}
HIERARCHY = {
    "type": "frame-hierarchy",
    "payload": [
        {"frameId": 0, "documentId": "doc-A", "parentFrameId": -1, "origin": "https://a"},
        {"frameId": "opener", "isOpener": True, "origin": "https://opener"},
    ],
}
CLEAR = {"type": "clear"}


def as_lines(*envelopes):
    return [json.dumps(envelope) + "\n" for envelope in envelopes]


class TestIterTrace:
    """Test line parsing."""

    def test_parses_each_envelope_type(self):
        envelopes = list(iter_trace(as_lines(MESSAGE, HIERARCHY, CLEAR)))

        assert isinstance(envelopes[0], MessageEnvelope)
        assert envelopes[0].payload.source.window_id == "win-B"
        assert isinstance(envelopes[1], HierarchyEnvelope)
        assert envelopes[1].payload[1].is_opener
        assert isinstance(envelopes[2], ClearEnvelope)

    def test_blank_lines_skipped(self):
        lines = ["\n", "   \n"] + as_lines(CLEAR) + ["\n"]
        assert len(list(iter_trace(lines))) == 1

    def test_invalid_json_reports_line(self):
        lines = as_lines(CLEAR) + ["{not json\n"]
        with pytest.raises(TraceFormatError) as excinfo:
            list(iter_trace(lines))
        assert excinfo.value.line_number == 2
        assert str(excinfo.value).startswith("line 2: invalid JSON")

    def test_non_object_line(self):
        with pytest.raises(TraceFormatError, match="JSON object"):
            list(iter_trace(["[1, 2]\n"]))

    def test_unknown_envelope_type(self):
        with pytest.raises(TraceFormatError) as excinfo:
            list(iter_trace(as_lines({"type": "bogus"})))
        assert excinfo.value.line_number == 1
        assert "'bogus'" in str(excinfo.value)

    def test_invalid_payload(self):
        broken = {"type": "message", "payload": {"id": "m1"}}
        with pytest.raises(TraceFormatError):
            list(iter_trace(as_lines(broken)))

    def test_invalid_utf8_reports_line(self):
        lines = [b'{"type": "clear"}\n', b"\xff\xfe\n"]
        with pytest.raises(TraceFormatError) as excinfo:
            list(iter_trace(lines))
        assert excinfo.value.line_number == 2
        assert "invalid UTF-8" in str(excinfo.value)

    def test_trace_error_is_inspector_error(self):
        assert issubclass(TraceFormatError, InspectorError)


class TestLoadTrace:
    """Test reading from files and streams."""

    def test_load_from_path(self, tmp_path):
        path = tmp_path / "trace.jsonl"
        path.write_text("".join(as_lines(MESSAGE, CLEAR)), encoding="utf-8")

        assert len(load_trace(path)) == 2
        assert len(load_trace(str(path))) == 2

    def test_load_from_stream(self):
        stream = io.StringIO("".join(as_lines(HIERARCHY)))
        assert isinstance(load_trace(stream)[0], HierarchyEnvelope)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_trace(tmp_path / "missing.jsonl")

    def test_invalid_utf8_file(self, tmp_path):
        path = tmp_path / "binary.jsonl"
        path.write_bytes(b'{"type": "clear"}\n\xff\xfe\n')

        with pytest.raises(TraceFormatError) as excinfo:
            load_trace(path)
        assert excinfo.value.line_number == 2


class TestReplayTrace:
    """Test feeding envelopes into a session."""

    def test_replay_updates_session(self):
        session = InspectorSession(tab_id=7, config=InspectorConfig())
        count = replay_trace(session, iter_trace(as_lines(HIERARCHY, MESSAGE)))

        assert count == 2
        assert len(session.messages) == 1
        assert [frame.frame_id for frame in session.roots] == [0]
        assert session.opener.origin == "https://opener"
        assert session.store.get_document_by_window_id("win-B").origin == "https://b"

    def test_clear_envelope_clears_messages(self):
        session = InspectorSession(config=InspectorConfig())
        replay_trace(session, iter_trace(as_lines(MESSAGE, CLEAR)))
        assert session.messages == []

    def test_clear_envelope_respects_preserve_log(self):
        session = InspectorSession(config=InspectorConfig(preserve_log=True))
        replay_trace(session, iter_trace(as_lines(MESSAGE, CLEAR)))
        assert len(session.messages) == 1
