"""Select, search, and project Granola documents."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Iterable

from granola2md.markdown import convert_document_to_markdown
from granola2md.schemas import (
    DocumentDetail,
    DocumentMetadata,
    DocumentSummary,
    EventResult,
    GranolaDocument,
    NoteSearchResult,
    PanelResult,
    TranscriptResult,
)
from granola2md.schemas.nodes import NodeKind

UNTITLED = "Untitled"
MEETING_TYPE = "meeting"

NOTE_MARKDOWN_LIMIT = 2000
NOTE_PREVIEW_LIMIT = 500
TRANSCRIPT_CONTENT_LIMIT = 1000
PANEL_CONTENT_LIMIT = 500
EVENT_DESCRIPTION_LIMIT = 500


def _is_doc_tree(value: Any) -> bool:
    return isinstance(value, Mapping) and value.get("type") == NodeKind.DOC.value


def document_tree(doc: GranolaDocument) -> Mapping[str, Any] | None:
    """Return the rich-text tree to render for a document.

    The last viewed panel wins over the raw notes; either is only used when
    it is a ``doc`` node.
    """
    panel = doc.last_viewed_panel
    if panel is not None and _is_doc_tree(panel.content):
        return panel.content
    if _is_doc_tree(doc.notes):
        return doc.notes
    return None


def document_markdown(doc: GranolaDocument) -> str:
    """Render a document's notes as Markdown, or ``""`` if it has none."""
    tree = document_tree(doc)
    if tree is None:
        return ""
    return convert_document_to_markdown(tree)


def panel_markdown(doc: GranolaDocument) -> str:
    """Render only the last viewed panel of a document."""
    if doc.last_viewed_panel is None or not doc.last_viewed_panel.content:
        return ""
    return convert_document_to_markdown(doc.last_viewed_panel.content)


def matches_query(doc: GranolaDocument, query: str) -> bool:
    """Case-insensitive substring match on title and raw text fields."""
    needle = query.lower()
    for value in (doc.title, doc.markdown, doc.content):
        if isinstance(value, str) and needle in value.lower():
            return True
    return False


def search_documents(
    docs: Iterable[GranolaDocument], query: str, *, limit: int = 10
) -> list[GranolaDocument]:
    """Return up to ``limit`` documents matching ``query``, in order."""
    results: list[GranolaDocument] = []
    if limit <= 0:
        return results
    for doc in docs:
        if matches_query(doc, query):
            results.append(doc)
            if len(results) >= limit:
                break
    return results


def find_document(
    docs: Iterable[GranolaDocument], document_id: str
) -> GranolaDocument | None:
    """Return the first document with ``document_id``."""
    for doc in docs:
        if doc.id == document_id:
            return doc
    return None


def summarize_document(doc: GranolaDocument) -> DocumentSummary:
    return DocumentSummary(
        id=doc.id,
        title=doc.title or UNTITLED,
        created_at=doc.created_at,
        updated_at=doc.updated_at,
    )


def document_detail(doc: GranolaDocument) -> DocumentDetail:
    """Build the full view of a document, including its complete Markdown."""
    event = doc.google_calendar_event
    return DocumentDetail(
        id=doc.id,
        title=doc.title or UNTITLED,
        markdown=document_markdown(doc),
        created_at=doc.created_at,
        updated_at=doc.updated_at,
        metadata=DocumentMetadata(
            type=doc.type,
            people=doc.people,
            google_calendar_event=event.model_dump(by_alias=True) if event else None,
        ),
    )


def note_result(doc: GranolaDocument) -> NoteSearchResult:
    markdown = document_markdown(doc)
    return NoteSearchResult(
        id=doc.id,
        title=doc.title or UNTITLED,
        markdown=markdown[:NOTE_MARKDOWN_LIMIT],
        content_preview=markdown[:NOTE_PREVIEW_LIMIT],
        has_content=bool(markdown.strip()),
        created_at=doc.created_at,
        updated_at=doc.updated_at,
    )


def transcript_result(
    doc: GranolaDocument, *, limit: int | None = TRANSCRIPT_CONTENT_LIMIT
) -> TranscriptResult:
    """Render a meeting from its panel; ``limit=None`` keeps the full text."""
    content = panel_markdown(doc)
    if limit is not None:
        content = content[:limit]
    return TranscriptResult(
        id=doc.id,
        meeting_id=doc.id,
        title=doc.title,
        content=content,
        created_at=doc.created_at,
        updated_at=doc.updated_at,
    )


def is_meeting(doc: GranolaDocument) -> bool:
    return doc.type == MEETING_TYPE


def transcript_results(
    docs: Iterable[GranolaDocument], *, limit: int = 10
) -> list[TranscriptResult]:
    meetings = [doc for doc in docs if is_meeting(doc)]
    return [transcript_result(doc) for doc in meetings[:limit]]


def panel_results(
    docs: Iterable[GranolaDocument], *, limit: int = 10
) -> list[PanelResult]:
    """Project documents that carry a panel; others are dropped."""
    results: list[PanelResult] = []
    for doc in docs:
        panel = doc.last_viewed_panel
        if panel is None:
            continue
        results.append(
            PanelResult(
                id=panel.id or doc.id,
                document_id=doc.id,
                heading=panel.heading or doc.title,
                content=panel_markdown(doc)[:PANEL_CONTENT_LIMIT],
            )
        )
    return results[:limit]


def event_results(
    docs: Iterable[GranolaDocument], query: str, *, limit: int = 10
) -> list[EventResult]:
    """Match ``query`` against calendar event summaries and descriptions."""
    needle = query.lower()
    results: list[EventResult] = []
    if limit <= 0:
        return results
    for doc in docs:
        event = doc.google_calendar_event
        if event is None:
            continue
        summary = (event.summary or "").lower()
        description = (event.description or "").lower()
        if needle not in summary and needle not in description:
            continue
        results.append(
            EventResult(
                id=event.id or doc.id,
                summary=event.summary,
                description=(
                    event.description[:EVENT_DESCRIPTION_LIMIT]
                    if event.description is not None
                    else None
                ),
                start=event.start,
                end=event.end,
                attendees=event.attendees,
                html_link=event.html_link,
            )
        )
        if len(results) >= limit:
            break
    return results
