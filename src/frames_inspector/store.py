"""
Frame Store

Reconciles three partially-identified event streams into one graph of
frames, documents and iframe owner elements:

- message events (target known by document id, source by window token
  and/or document id)
- registration events (bind a window token to a document id and frame slot)
- hierarchy snapshots (every frame of a tab with its parent)

A document can first be seen under either identifier. Once both are known,
both indices point at the same FrameDocument; the document-id record is the
canonical one when two records turn out to describe the same document.

Every ingestion call leaves the graph fully linked and then notifies
subscribers once.

Usage:
    store = FrameStore()
    unsubscribe = store.subscribe(lambda change: print(change.version))

    resolution = store.process_message(event)
    store.process_registration(registration)
    roots = store.process_hierarchy(tab_id, frames)
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from .hierarchy import build_frame_forest
from .models import (
    TOP_LEVEL_PARENT_ID,
    Frame,
    FrameDocument,
    FrameInfo,
    FrameKey,
    MessageEvent,
    MessageResolution,
    OwnerElement,
    RegistrationEvent,
    SourceType,
)

logger = logging.getLogger(__name__)


class ChangeKind(Enum):
    """Which operation produced a store change."""

    MESSAGE = "message"
    REGISTRATION = "registration"
    HIERARCHY = "hierarchy"
    CLEAR = "clear"


@dataclass(frozen=True)
class StoreChange:
    """Notification delivered to subscribers after an ingestion call."""

    kind: ChangeKind
    version: int


StoreListener = Callable[[StoreChange], None]


class FrameStore:
    """
    Owns the frame and document indices and the three ingestion operations.

    Indices:
        frames: (tab_id, frame_id) -> Frame
        documents_by_id: document_id -> FrameDocument
        documents_by_window_id: window_id -> FrameDocument

    Attributes:
        version: Incremented once per ingestion call and per clear()
    """

    def __init__(self):
        self.frames: dict[FrameKey, Frame] = {}
        self.documents_by_id: dict[str, FrameDocument] = {}
        self.documents_by_window_id: dict[str, FrameDocument] = {}
        self.version = 0
        self._listeners: list[StoreListener] = []

    # ------------------------------------------------------------------
    # Read accessors
    # ------------------------------------------------------------------

    def get_frame(self, tab_id: int, frame_id: int) -> Optional[Frame]:
        return self.frames.get(Frame.make_key(tab_id, frame_id))

    def get_document_by_id(self, document_id: Optional[str]) -> Optional[FrameDocument]:
        if not document_id:
            return None
        return self.documents_by_id.get(document_id)

    def get_document_by_window_id(self, window_id: Optional[str]) -> Optional[FrameDocument]:
        if not window_id:
            return None
        return self.documents_by_window_id.get(window_id)

    def frames_for_tab(self, tab_id: int) -> list[Frame]:
        """All known frames of a tab, ordered by frame id."""
        return sorted(
            (frame for frame in self.frames.values() if frame.tab_id == tab_id),
            key=lambda frame: frame.frame_id,
        )

    # ------------------------------------------------------------------
    # Index maintenance
    # ------------------------------------------------------------------

    def get_or_create_frame(
        self,
        tab_id: int,
        frame_id: int,
        parent_frame_id: int = TOP_LEVEL_PARENT_ID,
    ) -> Frame:
        key = Frame.make_key(tab_id, frame_id)
        frame = self.frames.get(key)
        if frame is None:
            frame = Frame(tab_id=tab_id, frame_id=frame_id, parent_frame_id=parent_frame_id)
            self.frames[key] = frame
            logger.debug(f"Created frame {key}")
        return frame

    def get_or_create_document_by_id(self, document_id: str) -> FrameDocument:
        document = self.documents_by_id.get(document_id)
        if document is None:
            document = FrameDocument(document_id=document_id)
            self.documents_by_id[document_id] = document
            logger.debug(f"Created document {document_id!r}")
        return document

    def get_or_create_document_by_window_id(self, window_id: str) -> FrameDocument:
        document = self.documents_by_window_id.get(window_id)
        if document is None:
            document = FrameDocument(window_id=window_id)
            self.documents_by_window_id[window_id] = document
            logger.debug(f"Created document for window {window_id!r}")
        return document

    def _link(self, frame: Frame, document: FrameDocument) -> None:
        """Make ``document`` the current document of ``frame``, both ways."""
        if document.frame is frame and frame.current_document is document:
            return

        previous_frame = document.frame
        if (
            previous_frame is not None
            and previous_frame is not frame
            and previous_frame.current_document is document
        ):
            logger.debug(
                f"Document {document.document_id!r} moved from frame "
                f"{previous_frame.key} to {frame.key}"
            )
            previous_frame.current_document = None

        document.frame = frame
        frame.current_document = document

    def _bind_window_id(self, document: FrameDocument, window_id: str) -> None:
        """Index ``document`` under ``window_id``.

        A window-only record already indexed under the token describes the
        same document and is folded into ``document``. A record that carries
        its own document id is an earlier document of the same window and
        stays reachable through documents_by_id.
        """
        existing = self.documents_by_window_id.get(window_id)
        if existing is not None and existing is not document:
            if existing.document_id is None:
                self._absorb(document, existing)
            else:
                logger.debug(
                    f"Window {window_id!r} moved from document "
                    f"{existing.document_id!r} to {document.document_id!r}"
                )

        document.window_id = window_id
        self.documents_by_window_id[window_id] = document

    def _absorb(self, survivor: FrameDocument, orphan: FrameDocument) -> None:
        """Fold a window-only record into its canonical document."""
        if survivor.origin is None:
            survivor.origin = orphan.origin
        if survivor.reported_owner_element is None:
            survivor.reported_owner_element = orphan.reported_owner_element

        for window_id, document in list(self.documents_by_window_id.items()):
            if document is orphan:
                self.documents_by_window_id[window_id] = survivor

        orphan_frame = orphan.frame
        if orphan_frame is not None:
            if orphan_frame.current_document is orphan:
                if survivor.frame is None:
                    self._link(orphan_frame, survivor)
                else:
                    orphan_frame.current_document = None
            orphan.frame = None

        logger.debug(
            f"Merged window document {orphan.window_id!r} into document "
            f"{survivor.document_id!r}"
        )

    def _set_owner_element(self, frame: Frame, owner_element: OwnerElement) -> None:
        # Equal values keep the existing instance
        if owner_element != frame.current_owner_element:
            logger.debug(f"Frame {frame.key} owner element -> {owner_element}")
            frame.current_owner_element = owner_element

    # ------------------------------------------------------------------
    # Ingestion
    # ------------------------------------------------------------------

    def process_message(self, event: MessageEvent) -> MessageResolution:
        """
        Fold one captured message into the graph.

        Args:
            event: Message metadata from the routing layer

        Returns:
            Owner-element snapshots for the message's target and source
        """
        # Target document: metadata is fresh on every message
        target_document = self.get_or_create_document_by_id(event.target_document_id)
        target_document.url = event.target_url
        target_document.origin = event.target_origin
        target_document.title = event.target_title

        # A document id never changes frame slot, so the first link stands
        target_frame = self.get_or_create_frame(event.tab_id, event.target_frame_id)
        if target_document.frame is None:
            self._link(target_frame, target_document)

        target_owner_element = target_frame.current_owner_element

        # Source document
        if event.source_document_id:
            source_document = self.get_or_create_document_by_id(event.source_document_id)
            if event.source_origin is not None:
                source_document.origin = event.source_origin
            if event.source_window_id:
                self._bind_window_id(source_document, event.source_window_id)
        elif event.source_window_id:
            source_document = self.get_or_create_document_by_window_id(event.source_window_id)
            if event.source_origin is not None:
                source_document.origin = event.source_origin

        source_owner_element: Optional[OwnerElement] = None
        if event.source_type == SourceType.CHILD:
            source_owner_element = OwnerElement.from_raw(
                event.source_iframe_dom_path,
                event.source_iframe_src,
                event.source_iframe_id,
            )
            if source_owner_element is not None and event.source_window_id:
                source_document = self.documents_by_window_id.get(event.source_window_id)
                if source_document is not None:
                    source_document.reported_owner_element = source_owner_element
                    if source_document.frame is not None:
                        self._set_owner_element(source_document.frame, source_owner_element)

        elif event.source_type == SourceType.PARENT and event.source_document_id:
            # The parent's identity as seen from a child is inherited from
            # the parent's own registration as somebody's child
            source_document = self.documents_by_id.get(event.source_document_id)
            if source_document is not None and source_document.frame is not None:
                source_owner_element = source_document.frame.current_owner_element

        self._notify(ChangeKind.MESSAGE)
        return MessageResolution(
            target_owner_element=target_owner_element,
            source_owner_element=source_owner_element,
        )

    def process_registration(self, event: RegistrationEvent) -> FrameDocument:
        """
        Bind a window token to a document id and frame slot.

        Merges the window-keyed and document-keyed records when both exist,
        then (re)links the document to its frame and updates the frame's
        owner element. Replaying the same registration is a no-op.

        Args:
            event: Registration data from the registering frame

        Returns:
            The canonical document for the registration
        """
        by_window = self.documents_by_window_id.get(event.window_id)
        by_id = self.documents_by_id.get(event.document_id)

        if by_id is not None:
            document = by_id
            self._bind_window_id(document, event.window_id)
        elif by_window is not None and by_window.document_id is None:
            document = by_window
            document.document_id = event.document_id
            self.documents_by_id[event.document_id] = document
            logger.debug(
                f"Promoted window document {event.window_id!r} to "
                f"document {event.document_id!r}"
            )
        else:
            document = self.get_or_create_document_by_id(event.document_id)
            self._bind_window_id(document, event.window_id)

        # Registration is authoritative for the frame <-> document binding
        frame = self.get_or_create_frame(event.tab_id, event.frame_id)
        self._link(frame, document)

        owner_element = OwnerElement.from_raw(
            event.owner_dom_path,
            event.owner_src,
            event.owner_id,
        ) or document.reported_owner_element
        if owner_element is not None:
            self._set_owner_element(frame, owner_element)

        self._notify(ChangeKind.REGISTRATION)
        return document

    def process_hierarchy(self, tab_id: int, frames: Iterable[FrameInfo]) -> list[Frame]:
        """
        Apply a full hierarchy snapshot for one tab.

        Args:
            tab_id: Tab the snapshot belongs to
            frames: Flat frame list; entries without a numeric frame id
                (the opener pseudo-entry) are skipped

        Returns:
            Root frames of the snapshot, in snapshot order
        """
        snapshot: list[Frame] = []
        for info in frames:
            if not info.is_frame:
                logger.debug(f"Skipping non-frame hierarchy entry {info.frame_id!r}")
                continue

            frame = self.get_or_create_frame(tab_id, info.frame_id, info.parent_frame_id)
            frame.parent_frame_id = info.parent_frame_id

            if info.document_id:
                document = self.get_or_create_document_by_id(info.document_id)
                document.url = info.url
                document.origin = info.origin
                document.title = info.title
                self._link(frame, document)

            snapshot.append(frame)

        roots = build_frame_forest(snapshot)
        self._notify(ChangeKind.HIERARCHY)
        return roots

    def clear(self) -> None:
        """Drop every frame and document (tab reload/reset)."""
        self.frames.clear()
        self.documents_by_id.clear()
        self.documents_by_window_id.clear()
        self._notify(ChangeKind.CLEAR)

    # ------------------------------------------------------------------
    # Observation
    # ------------------------------------------------------------------

    def subscribe(self, listener: StoreListener) -> Callable[[], None]:
        """
        Register a callback fired after every ingestion call and clear().

        Returns:
            Function that removes the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self, kind: ChangeKind) -> None:
        self.version += 1
        change = StoreChange(kind=kind, version=self.version)
        for listener in list(self._listeners):
            try:
                listener(change)
            except Exception:
                logger.exception(f"Store listener failed on {kind.value} change")

    def check_consistency(self) -> list[str]:
        """
        Verify the cross-references between indices and entities.

        Returns:
            Human-readable violations (empty when the graph is consistent)
        """
        problems: list[str] = []

        for key, frame in self.frames.items():
            if frame.key != key:
                problems.append(f"frame {frame.key} indexed under {key}")
            document = frame.current_document
            if document is not None and document.frame is not frame:
                problems.append(f"frame {key} current document does not point back")
            for child in frame.children:
                if self.frames.get(child.key) is not child:
                    problems.append(f"frame {key} has unindexed child {child.key}")

        for document_id, document in self.documents_by_id.items():
            if document.document_id != document_id:
                problems.append(
                    f"document {document.document_id!r} indexed under {document_id!r}"
                )
            if document.frame is not None and self.frames.get(document.frame.key) is not document.frame:
                problems.append(f"document {document_id!r} points at unindexed frame")

        for window_id, document in self.documents_by_window_id.items():
            if document.document_id is not None:
                if self.documents_by_id.get(document.document_id) is not document:
                    problems.append(
                        f"window {window_id!r} resolves to a document not indexed "
                        f"by id {document.document_id!r}"
                    )
            if document.frame is not None and self.frames.get(document.frame.key) is not document.frame:
                problems.append(f"window {window_id!r} document points at unindexed frame")

        return problems
