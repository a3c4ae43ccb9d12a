"""Shared schemas for granola2md."""

from granola2md.schemas.document import (
    CalendarEvent,
    DocumentDetail,
    DocumentMetadata,
    DocumentPanel,
    DocumentSummary,
    EventResult,
    GranolaDocument,
    ListResponse,
    NoteSearchResult,
    PanelResult,
    SearchResponse,
    TranscriptResult,
)
from granola2md.schemas.nodes import MarkKind, NodeKind

__all__ = [
    "CalendarEvent",
    "DocumentDetail",
    "DocumentMetadata",
    "DocumentPanel",
    "DocumentSummary",
    "EventResult",
    "GranolaDocument",
    "ListResponse",
    "MarkKind",
    "NodeKind",
    "NoteSearchResult",
    "PanelResult",
    "SearchResponse",
    "TranscriptResult",
]
