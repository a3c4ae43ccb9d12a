"""granola2md: render Granola notes into Markdown."""

from granola2md.client import GranolaClient
from granola2md.credentials import TokenStore
from granola2md.documents import document_markdown, find_document, search_documents
from granola2md.exceptions import (
    CredentialsError,
    DocumentNotFoundError,
    FetchError,
    Granola2mdError,
    RateLimitError,
)
from granola2md.markdown import convert_document_to_markdown
from granola2md.schemas import GranolaDocument, MarkKind, NodeKind

__all__ = [
    "CredentialsError",
    "DocumentNotFoundError",
    "FetchError",
    "Granola2mdError",
    "GranolaClient",
    "GranolaDocument",
    "MarkKind",
    "NodeKind",
    "RateLimitError",
    "TokenStore",
    "convert_document_to_markdown",
    "document_markdown",
    "find_document",
    "search_documents",
]
