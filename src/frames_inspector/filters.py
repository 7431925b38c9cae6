"""
Message Filter

Parses the inspector's filter query and matches messages against it.

Query syntax (case-insensitive, terms separated by whitespace, all terms
must match):
- ``type:X``        message type equals X
- ``target:X``      target origin contains X
- ``sourcetype:X``  source type equals X (child, parent, ...)
- ``source:X``      source origin contains X
- ``frame:frame[N]`` or ``frame:tab[T].frame[N]``
                    source or target frame is N (tab defaults to the
                    inspected tab)
- ``-term``         negates a term
- anything else     substring of the data preview
"""

import re
from dataclasses import dataclass
from typing import Optional

from .messages import Message

_FULL_FRAME_RE = re.compile(r"^tab\[(\d+)\]\.frame\[(\d+)\]$")
_FRAME_ONLY_RE = re.compile(r"^frame\[(\d+)\]$")


@dataclass(frozen=True)
class FilterTerm:
    """One parsed query term."""

    value: str
    field: Optional[str] = None
    negated: bool = False


def parse_frame_reference(value: str) -> Optional[tuple[Optional[int], int]]:
    """
    Parse ``tab[T].frame[N]`` or ``frame[N]``.

    Returns:
        (tab_id or None, frame_id), or None if the value is not a frame reference
    """
    match = _FULL_FRAME_RE.match(value)
    if match:
        return int(match.group(1)), int(match.group(2))
    match = _FRAME_ONLY_RE.match(value)
    if match:
        return None, int(match.group(1))
    return None


def parse_filter(text: str) -> list[FilterTerm]:
    terms = []
    for raw in text.lower().split():
        negated = raw.startswith("-") and len(raw) > 1
        if negated:
            raw = raw[1:]
        colon = raw.find(":")
        if colon > 0:
            terms.append(FilterTerm(value=raw[colon + 1:], field=raw[:colon], negated=negated))
        else:
            terms.append(FilterTerm(value=raw, negated=negated))
    return terms


class MessageFilter:
    """
    Compiled filter query.

    Example:
        >>> message_filter = MessageFilter("sourcetype:child -type:ping", tab_id=42)
        >>> visible = [m for m in messages if message_filter.matches(m)]
    """

    def __init__(self, text: str = "", tab_id: int = 0):
        self.text = text
        self.tab_id = tab_id
        self.terms = parse_filter(text)

    def matches(self, message: Message) -> bool:
        return all(self._matches_term(message, term) != term.negated for term in self.terms)

    def _matches_term(self, message: Message, term: FilterTerm) -> bool:
        value = term.value

        if term.field is None:
            return value in message.data_preview.lower()
        if term.field == "type":
            return (message.message_type or "").lower() == value
        if term.field == "target":
            return value in message.target.origin.lower()
        if term.field == "sourcetype":
            return message.source_type.value == value
        if term.field == "source":
            return value in message.source.origin.lower()
        if term.field == "frame":
            return self._matches_frame(message, value)
        return False

    def _matches_frame(self, message: Message, value: str) -> bool:
        reference = parse_frame_reference(value)
        if reference is None:
            return False

        tab_id, frame_id = reference
        if tab_id is None:
            tab_id = self.tab_id

        source_frame = message.source_frame
        if source_frame is not None and source_frame.frame_id == frame_id and source_frame.tab_id == tab_id:
            return True

        return message.target.frame_id == frame_id and self.tab_id == tab_id
