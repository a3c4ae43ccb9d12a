"""Convert ProseMirror document trees to Markdown with a custom serializer."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from granola2md.schemas.nodes import MarkKind, NodeKind

_DEFAULT_HEADING_LEVEL = 1


def convert_document_to_markdown(root: Any) -> str:
    """Convert a ProseMirror document tree into Markdown.

    The conversion is total: malformed or partial input degrades to empty
    defaults and never raises.

    Parameters
    ----------
    root : Any
        The root node of the tree, usually the ``doc`` node of a Granola
        notes field or panel.

    Returns
    -------
    str
        The Markdown text with leading and trailing whitespace removed, or
        an empty string when ``root`` is absent, not a node, or empty.
    """
    if not isinstance(root, Mapping) or not root.get("content"):
        return ""
    return _serialize_node(root).strip()


def _serialize_node(node: Any) -> str:
    if not isinstance(node, Mapping):
        return ""

    kind = NodeKind.from_value(node.get("type"))

    if kind is NodeKind.TEXT:
        return _serialize_text(node)

    if kind is NodeKind.HARD_BREAK:
        return "\n"

    if kind is NodeKind.HEADING:
        level = _heading_level(_attrs(node).get("level"))
        heading = _serialize_children(node).strip()
        return f"{'#' * level} {heading}\n\n"

    if kind is NodeKind.PARAGRAPH:
        paragraph = _serialize_children(node)
        return f"{paragraph}\n\n" if paragraph else "\n"

    if kind is NodeKind.BULLET_LIST:
        return _serialize_list(node, ordered=False)

    if kind is NodeKind.ORDERED_LIST:
        return _serialize_list(node, ordered=True)

    if kind is NodeKind.CODE_BLOCK:
        code = _serialize_children(node)
        language = _attrs(node).get("language") or ""
        return f"```{language}\n{code}\n```\n\n"

    if kind is NodeKind.BLOCKQUOTE:
        quote = _serialize_children(node).strip()
        lines = "\n".join(f"> {line}" for line in quote.split("\n"))
        return f"{lines}\n\n"

    # doc, listItem and unknown kinds only contribute their children
    return _serialize_children(node)


def _serialize_children(node: Mapping[str, Any]) -> str:
    return "".join(_serialize_node(child) for child in _children(node))


def _serialize_list(node: Mapping[str, Any], *, ordered: bool) -> str:
    lines: list[str] = []
    for index, item in enumerate(_children(node), start=1):
        if not isinstance(item, Mapping):
            continue
        if NodeKind.from_value(item.get("type")) is not NodeKind.LIST_ITEM:
            continue
        item_text = _serialize_children(item).strip()
        if not item_text:
            continue
        prefix = f"{index}. " if ordered else "- "
        lines.append(prefix + item_text)
    if not lines:
        return ""
    return "\n".join(lines) + "\n\n"


def _serialize_text(node: Mapping[str, Any]) -> str:
    text = node.get("text") or ""
    if not isinstance(text, str):
        text = str(text)

    marks = node.get("marks")
    if not isinstance(marks, list):
        return text

    for mark in marks:
        if not isinstance(mark, Mapping):
            continue
        text = _apply_mark(text, mark)
    return text


def _apply_mark(text: str, mark: Mapping[str, Any]) -> str:
    kind = MarkKind.from_value(mark.get("type"))
    if kind is MarkKind.BOLD:
        return f"**{text}**"
    if kind is MarkKind.ITALIC:
        return f"*{text}*"
    if kind is MarkKind.CODE:
        return f"`{text}`"
    if kind is MarkKind.LINK:
        attrs = _attrs(mark)
        target = attrs.get("href") or attrs.get("target") or ""
        return f"[{text}]({target})"
    return text


def _children(node: Mapping[str, Any]) -> list[Any]:
    content = node.get("content")
    return content if isinstance(content, list) else []


def _attrs(node: Mapping[str, Any]) -> Mapping[str, Any]:
    attrs = node.get("attrs")
    return attrs if isinstance(attrs, Mapping) else {}


def _heading_level(value: Any) -> int:
    """Coerce a heading ``level`` attribute; no upper clamp is applied."""
    if isinstance(value, bool):
        return _DEFAULT_HEADING_LEVEL
    if isinstance(value, str) and value.strip().isdigit():
        value = int(value.strip())
    elif isinstance(value, float) and value.is_integer():
        value = int(value)
    if isinstance(value, int) and value >= 1:
        return value
    return _DEFAULT_HEADING_LEVEL
