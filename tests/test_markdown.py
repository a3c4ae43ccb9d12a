"""Tests for the ProseMirror to Markdown serializer."""

from __future__ import annotations

import copy

import pytest

from granola2md.markdown import _serialize_node, convert_document_to_markdown
from helpers_nodes import doc, item, node, paragraph, text


class TestEmptyInput:
    """Tests for absent and malformed roots."""

    @pytest.mark.parametrize(
        "root",
        [None, {}, {"content": []}, {"type": "doc"}, "doc", [], 42],
    )
    def test_returns_empty_string(self, root: object) -> None:
        """Returns an empty string for absent, non-node, or empty roots."""
        assert convert_document_to_markdown(root) == ""

    def test_non_list_content_renders_nothing(self) -> None:
        """A truthy but non-list content field is treated as no children."""
        assert convert_document_to_markdown({"type": "doc", "content": "oops"}) == ""

    def test_non_mapping_children_are_ignored(self) -> None:
        """Children that are not nodes render to nothing."""
        root = {"type": "doc", "content": ["junk", None, 3, paragraph(text("kept"))]}
        assert convert_document_to_markdown(root) == "kept"


class TestHeadings:
    """Tests for heading rendering."""

    def test_level_two_heading(self) -> None:
        """Renders the level as hashes followed by a blank line."""
        heading = node("heading", text("Hi"), level=2)
        assert _serialize_node(heading) == "## Hi\n\n"
        assert convert_document_to_markdown(doc(heading)) == "## Hi"

    def test_missing_level_defaults_to_one(self) -> None:
        """Uses a single hash when no level is given."""
        assert convert_document_to_markdown(doc(node("heading", text("Title")))) == "# Title"

    @pytest.mark.parametrize("level", [0, -3, None, "abc", True, 1.5, [2]])
    def test_invalid_level_defaults_to_one(self, level: object) -> None:
        """Falls back to level one for unusable level values."""
        heading = node("heading", text("T"), level=level)
        assert _serialize_node(heading) == "# T\n\n"

    @pytest.mark.parametrize(("level", "hashes"), [("3", "###"), (4.0, "####")])
    def test_numeric_level_is_coerced(self, level: object, hashes: str) -> None:
        """Accepts digit strings and integral floats."""
        heading = node("heading", text("T"), level=level)
        assert _serialize_node(heading) == f"{hashes} T\n\n"

    def test_level_is_not_clamped(self) -> None:
        """Levels above six produce more than six hashes."""
        heading = node("heading", text("Deep"), level=8)
        assert _serialize_node(heading) == "######## Deep\n\n"

    def test_heading_text_is_trimmed(self) -> None:
        """Strips whitespace around the inline content."""
        heading = node("heading", text("  Spaced "), text("out  "), level=1)
        assert _serialize_node(heading) == "# Spaced out\n\n"


class TestParagraphs:
    """Tests for paragraph rendering."""

    def test_paragraph_gets_blank_line(self) -> None:
        """Appends two newlines after non-empty content."""
        assert _serialize_node(paragraph(text("a"), text("b"))) == "ab\n\n"

    def test_empty_paragraph_is_single_newline(self) -> None:
        """Preserves an empty paragraph as a bare newline."""
        assert _serialize_node(paragraph()) == "\n"
        assert _serialize_node({"type": "paragraph"}) == "\n"

    def test_empty_paragraph_between_paragraphs(self) -> None:
        """An empty paragraph adds one extra line between blocks."""
        root = doc(paragraph(text("a")), paragraph(), paragraph(text("b")))
        assert convert_document_to_markdown(root) == "a\n\n\nb"

    def test_hard_break(self) -> None:
        """Renders a hard break as a newline."""
        root = doc(paragraph(text("one"), {"type": "hardBreak"}, text("two")))
        assert convert_document_to_markdown(root) == "one\ntwo"


class TestMarks:
    """Tests for inline mark application."""

    @pytest.mark.parametrize(
        ("marks", "expected"),
        [
            (("bold",), "**x**"),
            (("italic",), "*x*"),
            (("code",), "`x`"),
            (("bold", "italic"), "***x***"),
            (("italic", "bold"), "***x***"),
        ],
    )
    def test_single_and_stacked_marks(self, marks: tuple[str, ...], expected: str) -> None:
        """Wraps the text once per mark."""
        assert _serialize_node(text("x", *marks)) == expected

    def test_first_mark_wraps_innermost(self) -> None:
        """Marks apply in stored order, each wrapping the previous result."""
        assert _serialize_node(text("x", "code", "bold")) == "**`x`**"
        assert _serialize_node(text("x", "bold", "code")) == "`**x**`"
        assert _serialize_node(text("x", "code", "link", href="u")) == "[`x`](u)"

    def test_link_mark(self) -> None:
        """Uses the mark's href as the link target."""
        assert _serialize_node(text("site", "link", href="https://example.com")) == (
            "[site](https://example.com)"
        )

    def test_link_without_attrs(self) -> None:
        """Falls back to an empty target."""
        link = {"type": "text", "text": "x", "marks": [{"type": "link"}]}
        assert _serialize_node(link) == "[x]()"

    def test_link_target_attribute(self) -> None:
        """Accepts a ``target`` attribute when ``href`` is absent."""
        link = {
            "type": "text",
            "text": "x",
            "marks": [{"type": "link", "attrs": {"target": "/t"}}],
        }
        assert _serialize_node(link) == "[x](/t)"

    def test_repeated_marks_apply_twice(self) -> None:
        """Each occurrence of a mark wraps again."""
        assert _serialize_node(text("x", "bold", "bold")) == "****x****"

    def test_unknown_marks_pass_through(self) -> None:
        """Unrecognized and malformed marks leave the text unchanged."""
        node_ = {
            "type": "text",
            "text": "x",
            "marks": [{"type": "highlight"}, "bold", None, {"attrs": {}}],
        }
        assert _serialize_node(node_) == "x"

    def test_non_list_marks_are_ignored(self) -> None:
        assert _serialize_node({"type": "text", "text": "x", "marks": {"type": "bold"}}) == "x"


class TestTextPayload:
    """Tests for text node payload handling."""

    def test_missing_text_is_empty(self) -> None:
        assert _serialize_node({"type": "text", "marks": [{"type": "bold"}]}) == "****"

    def test_non_string_text_is_stringified(self) -> None:
        assert _serialize_node({"type": "text", "text": 5}) == "5"

    @pytest.mark.parametrize("value", [0, False, "", [], None])
    def test_falsy_text_is_empty(self, value: object) -> None:
        """Falsy payloads of any type render as an empty string."""
        assert _serialize_node({"type": "text", "text": value}) == ""


class TestLists:
    """Tests for bullet and ordered lists."""

    def test_bullet_list(self) -> None:
        """Prefixes each item with a dash."""
        bullets = node(
            "bulletList", item(paragraph(text("a"))), item(paragraph(text("b")))
        )
        assert _serialize_node(bullets) == "- a\n- b\n\n"

    def test_ordered_list(self) -> None:
        """Numbers items from one."""
        ordered = node("orderedList", item(text("a")), item(text("b")))
        assert _serialize_node(ordered) == "1. a\n2. b\n\n"

    def test_ordered_index_counts_skipped_children(self) -> None:
        """Non-item children are skipped but still consume a number."""
        ordered = node(
            "orderedList",
            paragraph(text("stray")),
            item(text("a")),
            item(text("b")),
        )
        assert _serialize_node(ordered) == "2. a\n3. b\n\n"

    def test_empty_items_are_dropped_but_numbered(self) -> None:
        """Items with no text are omitted without renumbering."""
        ordered = node("orderedList", item(text("a")), item(), item(text("  ")), item(text("d")))
        assert _serialize_node(ordered) == "1. a\n4. d\n\n"

    def test_list_without_content_is_empty(self) -> None:
        """Lists with no text produce nothing at all."""
        assert _serialize_node(node("bulletList")) == ""
        assert _serialize_node(node("bulletList", item(paragraph()))) == ""
        assert _serialize_node(node("orderedList", "junk", None)) == ""

    def test_item_text_is_trimmed(self) -> None:
        """Paragraph spacing inside an item is removed."""
        bullets = node("bulletList", item(paragraph(text(" padded "))))
        assert _serialize_node(bullets) == "- padded\n\n"

    def test_nested_list_is_flattened_into_item(self) -> None:
        """A nested list renders inside its parent item's text."""
        nested = node(
            "bulletList",
            item(
                paragraph(text("a")),
                node("bulletList", item(paragraph(text("b")))),
            ),
        )
        assert _serialize_node(nested) == "- a\n\n- b\n\n"

    def test_list_item_outside_list(self) -> None:
        """A bare list item concatenates its children untouched."""
        assert _serialize_node(item(paragraph(text("a")))) == "a\n\n"


class TestCodeBlocks:
    """Tests for fenced code blocks."""

    def test_code_block_with_language(self) -> None:
        block = node("codeBlock", text("print(1)"), language="python")
        assert _serialize_node(block) == "```python\nprint(1)\n```\n\n"

    def test_code_block_without_language(self) -> None:
        block = node("codeBlock", text("x = 1"))
        assert _serialize_node(block) == "```\nx = 1\n```\n\n"

    def test_empty_code_block(self) -> None:
        assert _serialize_node({"type": "codeBlock"}) == "```\n\n```\n\n"


class TestBlockquotes:
    """Tests for blockquote rendering."""

    def test_multiline_quote(self) -> None:
        """Prefixes every line of the trimmed content."""
        quote = node(
            "blockquote",
            paragraph(text("line1"), {"type": "hardBreak"}, text("line2")),
        )
        assert _serialize_node(quote) == "> line1\n> line2\n\n"

    def test_quote_of_paragraphs_keeps_blank_line(self) -> None:
        quote = node("blockquote", paragraph(text("a")), paragraph(text("b")))
        assert _serialize_node(quote) == "> a\n> \n> b\n\n"

    def test_empty_quote(self) -> None:
        assert _serialize_node(node("blockquote")) == "> \n\n"


class TestUnknownNodes:
    """Tests for pass-through of unrecognized node kinds."""

    def test_unknown_kind_renders_children(self) -> None:
        """Unknown wrappers are transparent."""
        wrapper = node("callout", text("z"))
        assert _serialize_node(wrapper) == "z"
        assert convert_document_to_markdown(doc(wrapper)) == "z"

    def test_missing_type_renders_children(self) -> None:
        assert _serialize_node({"content": [text("z")]}) == "z"

    def test_document_kind_alias(self) -> None:
        root = {"type": "document", "content": [paragraph(text("body"))]}
        assert convert_document_to_markdown(root) == "body"


class TestWholeDocument:
    """Tests for complete documents."""

    @pytest.fixture
    def meeting_notes(self) -> dict:
        return doc(
            node("heading", text("Weekly sync"), level=1),
            paragraph(text("Attendees: "), text("Ana", "bold"), text(", Bo")),
            node("heading", text("Action items"), level=3),
            node(
                "orderedList",
                item(paragraph(text("Ship "), text("v2", "code"))),
                item(paragraph(text("Read "), text("notes", "link", href="https://x.test"))),
            ),
            node("blockquote", paragraph(text("Keep it simple", "italic"))),
            node("codeBlock", text("make release"), language="sh"),
            paragraph(),
        )

    def test_renders_full_document(self, meeting_notes: dict) -> None:
        expected = (
            "# Weekly sync\n\n"
            "Attendees: **Ana**, Bo\n\n"
            "### Action items\n\n"
            "1. Ship `v2`\n"
            "2. Read [notes](https://x.test)\n\n"
            "> *Keep it simple*\n\n"
            "```sh\nmake release\n```"
        )
        assert convert_document_to_markdown(meeting_notes) == expected

    def test_output_is_trimmed(self, meeting_notes: dict) -> None:
        result = convert_document_to_markdown(meeting_notes)
        assert result == result.strip()

    def test_repeated_calls_are_identical(self, meeting_notes: dict) -> None:
        assert convert_document_to_markdown(meeting_notes) == convert_document_to_markdown(
            meeting_notes
        )

    def test_input_is_not_mutated(self, meeting_notes: dict) -> None:
        before = copy.deepcopy(meeting_notes)
        convert_document_to_markdown(meeting_notes)
        assert meeting_notes == before
