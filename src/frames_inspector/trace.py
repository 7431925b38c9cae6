"""
Trace Replay

A trace is a JSON Lines file of panel connection messages, one envelope per
line, in the order the panel received them:

    {"type": "message", "payload": {...captured message...}}
    {"type": "frame-hierarchy", "payload": [{...frame info...}, ...]}
    {"type": "clear"}

Blank lines are ignored.
"""

import json
import logging
from collections.abc import Iterable, Iterator
from pathlib import Path
from typing import TextIO, Union

from pydantic import ValidationError

from .exceptions import TraceFormatError
from .models import PanelEnvelope
from .session import InspectorSession, parse_envelope

logger = logging.getLogger(__name__)


def iter_trace(lines: Iterable[Union[str, bytes]]) -> Iterator[PanelEnvelope]:
    """
    Parse trace lines into validated envelopes.

    Lines may be text or raw UTF-8 bytes.

    Raises:
        TraceFormatError: A line is not UTF-8, not valid JSON or not a known envelope
    """
    for line_number, line in enumerate(lines, start=1):
        if isinstance(line, bytes):
            try:
                line = line.decode("utf-8")
            except UnicodeDecodeError as e:
                raise TraceFormatError(f"invalid UTF-8: {e.reason}", line_number) from e

        line = line.strip()
        if not line:
            continue

        try:
            raw = json.loads(line)
        except json.JSONDecodeError as e:
            raise TraceFormatError(f"invalid JSON: {e.msg}", line_number) from e

        if not isinstance(raw, dict):
            raise TraceFormatError("envelope must be a JSON object", line_number)

        try:
            yield parse_envelope(raw)
        except ValidationError as e:
            raise TraceFormatError(
                f"invalid {raw.get('type', 'untyped')!r} envelope: "
                f"{e.error_count()} validation error(s)",
                line_number,
            ) from e


def load_trace(source: Union[str, Path, TextIO]) -> list[PanelEnvelope]:
    """Read and validate a whole trace from a path or an open text stream."""
    if isinstance(source, (str, Path)):
        with open(source, "rb") as handle:
            return list(iter_trace(handle))

    try:
        return list(iter_trace(source))
    except UnicodeDecodeError as e:
        raise TraceFormatError(f"invalid UTF-8: {e.reason}") from e


def replay_trace(session: InspectorSession, envelopes: Iterable[PanelEnvelope]) -> int:
    """
    Feed envelopes into a session in order.

    Returns:
        Number of envelopes replayed
    """
    count = 0
    for envelope in envelopes:
        session.handle_port_message(envelope)
        count += 1
    logger.debug(f"Replayed {count} envelope(s) into tab {session.tab_id}")
    return count
