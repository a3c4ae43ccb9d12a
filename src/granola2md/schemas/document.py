"""Granola document envelope and the projections returned to callers."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class DocumentPanel(BaseModel):
    """The structured note panel last viewed for a document."""

    model_config = ConfigDict(extra="allow")

    id: str | None = None
    heading: str | None = None
    content: Any = None


class CalendarEvent(BaseModel):
    """Google Calendar event attached to a meeting document."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: str | None = None
    summary: str | None = None
    description: str | None = None
    start: Any = None
    end: Any = None
    attendees: list[Any] | None = None
    html_link: str | None = Field(default=None, alias="htmlLink")


class GranolaDocument(BaseModel):
    """A document envelope as returned by the Granola API.

    Only ``id`` is required. The rich-text trees (``notes`` and the panel
    ``content``) are kept as raw JSON and handed to the serializer untouched.
    """

    model_config = ConfigDict(extra="allow")

    id: str
    title: str | None = None
    type: str | None = None
    created_at: str | None = None
    updated_at: str | None = None
    notes: Any = None
    notes_markdown: str | None = None
    markdown: Any = None
    content: Any = None
    last_viewed_panel: DocumentPanel | None = None
    google_calendar_event: CalendarEvent | None = None
    people: Any = None


class DocumentSummary(BaseModel):
    """Basic metadata for document listings."""

    id: str
    title: str
    created_at: str | None = None
    updated_at: str | None = None


class DocumentMetadata(BaseModel):
    """Secondary metadata attached to a full document."""

    type: str | None = None
    people: Any = None
    google_calendar_event: dict[str, Any] | None = None


class DocumentDetail(BaseModel):
    """A single document with its full Markdown rendering."""

    id: str
    title: str
    markdown: str
    created_at: str | None = None
    updated_at: str | None = None
    metadata: DocumentMetadata


class NoteSearchResult(BaseModel):
    """A note matching a search query."""

    id: str
    title: str
    markdown: str
    content_preview: str
    has_content: bool
    created_at: str | None = None
    updated_at: str | None = None


class TranscriptResult(BaseModel):
    """A meeting document rendered from its panel."""

    id: str
    meeting_id: str
    title: str | None = None
    content: str
    created_at: str | None = None
    updated_at: str | None = None


class PanelResult(BaseModel):
    """A document panel matching a search query."""

    id: str
    document_id: str
    heading: str | None = None
    content: str


class EventResult(BaseModel):
    """A calendar event matching a search query."""

    id: str
    summary: str | None = None
    description: str | None = None
    start: Any = None
    end: Any = None
    attendees: list[Any] | None = None
    html_link: str | None = Field(default=None, serialization_alias="htmlLink")


class SearchResponse(BaseModel):
    """Envelope for search results."""

    query: str
    count: int
    results: list[NoteSearchResult | TranscriptResult | PanelResult | EventResult]


class ListResponse(BaseModel):
    """Envelope for document listings."""

    count: int
    documents: list[DocumentSummary]
