"""
Ingestion event models for the frame store.

These are the three input shapes pushed into the reconciliation engine by the
routing layer, plus the resolution returned for each message. Field names are
snake_case; the camelCase names used on the wire are accepted as aliases.
"""

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel

from .owner_element import OwnerElement


class SourceType(str, Enum):
    """Relationship between the receiving window and the message source."""

    CHILD = "child"
    PARENT = "parent"
    TOP = "top"
    SELF = "self"
    OPENER = "opener"
    UNKNOWN = "unknown"

    @classmethod
    def _missing_(cls, value: object) -> "SourceType":
        return cls.UNKNOWN


class WireModel(BaseModel):
    """Base for records exchanged with the routing layer (camelCase on the wire)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class MessageEvent(WireModel):
    """Metadata for one intercepted cross-frame message.

    Only the target fields are always present; every source field may be
    missing and the store degrades to "unresolved" for each absent one.
    """

    tab_id: int
    target_document_id: str
    target_frame_id: int
    target_url: Optional[str] = None
    target_origin: Optional[str] = None
    target_title: Optional[str] = None
    source_window_id: Optional[str] = None
    source_document_id: Optional[str] = None
    source_origin: Optional[str] = None
    source_type: SourceType = SourceType.UNKNOWN
    source_iframe_dom_path: Optional[str] = None
    source_iframe_src: Optional[str] = None
    source_iframe_id: Optional[str] = None

    @field_validator("source_type", mode="before")
    @classmethod
    def _default_source_type(cls, value: Any) -> Any:
        return SourceType.UNKNOWN if value is None else SourceType(value)


class RegistrationEvent(WireModel):
    """Binds a window token to a persistent document id and frame slot."""

    frame_id: int
    tab_id: int
    document_id: str
    window_id: str
    owner_dom_path: Optional[str] = None
    owner_src: Optional[str] = None
    owner_id: Optional[str] = None


class MessageResolution(BaseModel):
    """Owner-element snapshots resolved for a message at ingestion time."""

    model_config = ConfigDict(frozen=True)

    target_owner_element: Optional[OwnerElement] = None
    source_owner_element: Optional[OwnerElement] = None
