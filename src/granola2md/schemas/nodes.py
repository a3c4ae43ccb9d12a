"""Node and mark kinds of the ProseMirror document tree."""

from __future__ import annotations

from enum import Enum
from typing import Any


class NodeKind(str, Enum):
    """Node kinds the Markdown serializer knows how to render."""

    DOC = "doc"
    DOCUMENT = "document"
    HEADING = "heading"
    PARAGRAPH = "paragraph"
    BULLET_LIST = "bulletList"
    ORDERED_LIST = "orderedList"
    LIST_ITEM = "listItem"
    TEXT = "text"
    HARD_BREAK = "hardBreak"
    CODE_BLOCK = "codeBlock"
    BLOCKQUOTE = "blockquote"
    UNKNOWN = ""

    @classmethod
    def from_value(cls, value: Any) -> NodeKind:
        """Map a raw ``type`` value to a kind, falling back to ``UNKNOWN``."""
        if isinstance(value, str):
            try:
                return cls(value)
            except ValueError:
                pass
        return cls.UNKNOWN


class MarkKind(str, Enum):
    """Inline mark kinds applied to text nodes."""

    BOLD = "bold"
    ITALIC = "italic"
    CODE = "code"
    LINK = "link"
    UNKNOWN = ""

    @classmethod
    def from_value(cls, value: Any) -> MarkKind:
        """Map a raw mark ``type`` value to a kind, falling back to ``UNKNOWN``."""
        if isinstance(value, str):
            try:
                return cls(value)
            except ValueError:
                pass
        return cls.UNKNOWN
