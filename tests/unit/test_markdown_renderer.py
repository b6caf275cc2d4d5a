#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_markdown_renderer.py
"""Unit tests for MarkdownRenderer.

Tests cover:
- Rendering every supported node kind to Markdown
- Render options (hard breaks, bullets, indentation, fences, tables)
- Graceful degradation of unknown and malformed nodes
- Output normalisation (leading and trailing blank lines)

"""

import pytest
from utils import bullet_list, cell, doc, heading, item, ordered_list, para, row, table, text

from adf2md.exceptions import InvalidOptionsError
from adf2md.options import MarkdownRendererOptions, PlainTextOptions
from adf2md.renderers.markdown import ListContext, MarkdownRenderer


def render(node, **options):
    return MarkdownRenderer(MarkdownRendererOptions(**options)).render_to_string(node)


@pytest.mark.unit
class TestBasicRendering:
    """Tests for basic node rendering."""

    def test_render_empty_document(self):
        assert render(doc()) == ""

    def test_render_none(self):
        assert render(None) == ""

    def test_string_passes_through_unchanged(self):
        assert render("already *plain* text") == "already *plain* text"

    def test_paragraph_followed_by_blank_line(self):
        assert render(doc(para("Hello world"))) == "Hello world\n\n"

    def test_multiple_paragraphs(self):
        assert render(doc(para("First"), para("Second"))) == "First\n\nSecond\n\n"

    def test_bare_node_rendered_as_document(self):
        assert render(para("Hello")) == "Hello\n\n"

    def test_list_of_nodes_rendered_as_content(self):
        assert render([para("a"), para("b")]) == "a\n\nb\n\n"

    def test_whitespace_only_paragraph_omitted(self):
        assert render(doc(para("one"), para("   "), para("two"))) == "one\n\ntwo\n\n"

    def test_empty_paragraph_omitted(self):
        assert render(doc({"type": "paragraph"}, para("x"))) == "x\n\n"


@pytest.mark.unit
class TestHeadings:
    """Tests for heading rendering."""

    @pytest.mark.parametrize("level", [1, 2, 3, 4, 5, 6])
    def test_levels(self, level):
        assert render(doc(heading(level, "Title"))) == "#" * level + " Title\n\n"

    def test_level_clamped(self):
        assert render(doc(heading(9, "T"))) == "###### T\n\n"
        assert render(doc(heading(0, "T"))) == "# T\n\n"

    def test_missing_level_defaults_to_one(self):
        node = {"type": "heading", "content": [text("T")]}
        assert render(doc(node)) == "# T\n\n"

    def test_hard_break_becomes_space(self):
        node = heading(2, "a", {"type": "hardBreak"}, "b")
        assert render(doc(node)) == "## a b\n\n"

    def test_inline_marks_in_heading(self):
        assert render(doc(heading(1, text("Bold", "strong")))) == "# **Bold**\n\n"


@pytest.mark.unit
class TestInlineNodes:
    """Tests for inline node rendering."""

    def test_hard_break_spaces(self):
        assert render(doc(para("a", {"type": "hardBreak"}, "b"))) == "a  \nb\n\n"

    def test_hard_break_backslash(self):
        result = render(doc(para("a", {"type": "hardBreak"}, "b")), hard_break_style="backslash")
        assert result == "a\\\nb\n\n"

    def test_trailing_hard_break_dropped(self):
        assert render(doc(para("a", {"type": "hardBreak"}))) == "a\n\n"

    def test_mention_prefixed_with_at(self):
        mention = {"type": "mention", "attrs": {"id": "123", "text": "Ana"}}
        assert render(doc(para("cc ", mention))) == "cc @Ana\n\n"

    def test_mention_at_not_doubled(self):
        mention = {"type": "mention", "attrs": {"id": "123", "text": "@Ana"}}
        assert render(doc(para(mention))) == "@Ana\n\n"

    def test_mention_falls_back_to_id(self):
        mention = {"type": "mention", "attrs": {"id": "557058:abc"}}
        assert render(doc(para(mention))) == "@557058:abc\n\n"

    def test_mention_label_escaped(self):
        mention = {"type": "mention", "attrs": {"text": "@ana_silva"}}
        assert render(doc(para(mention))) == "@ana\\_silva\n\n"

    def test_mention_without_label_omitted(self):
        assert render(doc(para("x", {"type": "mention"}))) == "x\n\n"

    def test_emoji_text_unescaped(self):
        emoji = {"type": "emoji", "attrs": {"shortName": ":smile:", "text": "😄"}}
        assert render(doc(para(emoji))) == "😄\n\n"

    def test_emoji_short_name(self):
        emoji = {"type": "emoji", "attrs": {"shortName": ":custom_thing:"}}
        assert render(doc(para(emoji))) == ":custom_thing:\n\n"

    def test_inline_card_link(self):
        card = {"type": "inlineCard", "attrs": {"url": "https://example.com/a"}}
        assert render(doc(para(card))) == "[https://example.com/a](https://example.com/a)\n\n"

    def test_inline_card_data_url(self):
        card = {"type": "inlineCard", "attrs": {"data": {"url": "https://example.com/b"}}}
        assert render(doc(para(card))) == "[https://example.com/b](https://example.com/b)\n\n"

    def test_inline_card_long_label_truncated(self):
        url = "https://example.com/" + "x" * 100
        result = render(doc(para({"type": "inlineCard", "attrs": {"url": url}})))
        label = url[:59] + "…"
        assert result == f"[{label}]({url})\n\n"

    def test_inline_card_label_length_option(self):
        url = "https://example.com/abcdef"
        result = render(doc(para({"type": "inlineCard", "attrs": {"url": url}})), link_label_max_length=10)
        assert result == f"[https://e…]({url})\n\n"

    def test_inline_card_unsafe_url_rendered_as_text(self):
        card = {"type": "inlineCard", "attrs": {"url": "javascript:alert(1)"}}
        assert render(doc(para(card))) == "javascript:alert(1)\n\n"

    def test_inline_card_without_url_omitted(self):
        assert render(doc(para("a", {"type": "inlineCard"}))) == "a\n\n"

    def test_unknown_node_with_url_rendered_as_link(self):
        node = {"type": "blockCard", "attrs": {"url": "https://example.com"}}
        assert render(doc(node)) == "[https://example.com](https://example.com)"

    def test_text_with_numeric_payload(self):
        assert render(doc(para({"type": "text", "text": 42}))) == "42\n\n"


@pytest.mark.unit
class TestLists:
    """Tests for bullet and ordered lists."""

    def test_bullet_list(self):
        assert render(doc(bullet_list("a", "b"))) == "- a\n- b\n\n"

    def test_ordered_list_numbering(self):
        assert render(doc(ordered_list("a", "b", "c", order=1))) == "1. a\n2. b\n3. c\n\n"

    def test_ordered_list_default_start(self):
        assert render(doc(ordered_list("a", "b"))) == "1. a\n2. b\n\n"

    def test_ordered_list_custom_start(self):
        assert render(doc(ordered_list("a", "b", order=5))) == "5. a\n6. b\n\n"

    def test_ordered_list_start_attribute(self):
        node = ordered_list("a")
        node["attrs"] = {"start": 3}
        assert render(doc(node)) == "3. a\n\n"

    def test_ordered_list_negative_start(self):
        assert render(doc(ordered_list("a", order=-4))) == "0. a\n\n"

    def test_nested_bullet_list_indented(self):
        nested = bullet_list(item("parent", bullet_list("child")))
        assert render(doc(nested)) == "- parent\n  - child\n\n"

    def test_nested_list_in_ordered_item_aligned_with_text(self):
        nested = ordered_list(item("parent", bullet_list("child")))
        assert render(doc(nested)) == "1. parent\n   - child\n\n"

    def test_deeply_nested_lists(self):
        nested = bullet_list(item("a", bullet_list(item("b", bullet_list("c")))))
        assert render(doc(nested)) == "- a\n  - b\n    - c\n\n"

    def test_bullet_symbols_cycle_by_depth(self):
        nested = bullet_list(item("a", bullet_list(item("b", bullet_list("c")))))
        assert render(doc(nested), bullet_symbols="*-+") == "* a\n  - b\n    + c\n\n"

    def test_list_indent_width_option(self):
        nested = bullet_list(item("a", bullet_list("b")))
        assert render(doc(nested), list_indent_width=4) == "- a\n    - b\n\n"

    def test_item_with_multiple_paragraphs(self):
        nested = bullet_list(item("first", "second"))
        assert render(doc(nested)) == "- first\n\n  second\n\n"

    def test_empty_item_keeps_marker(self):
        assert render(doc(bullet_list(item(), "b"))) == "-\n- b\n\n"

    def test_list_item_outside_list_has_no_marker(self):
        assert render(doc(item("alone"))) == "alone\n\n"

    def test_non_mapping_children_skipped(self):
        node = {"type": "orderedList", "content": [None, item("a"), "junk", item("b")]}
        assert render(doc(node)) == "1. a\n2. b\n\n"

    def test_list_followed_by_paragraph(self):
        assert render(doc(bullet_list("a"), para("after"))) == "- a\n\nafter\n\n"

    def test_code_block_in_list_item(self):
        code = {"type": "codeBlock", "content": [text("x = 1")]}
        assert render(doc(bullet_list(item("run:", code)))) == "- run:\n\n  ```\n  x = 1\n  ```\n\n"

    def test_whitespace_line_in_nested_code_block_kept(self):
        code = {"type": "codeBlock", "content": [text("a\n    \nb")]}
        assert render(doc(bullet_list(item(code)))) == "- ```\n  a\n      \n  b\n  ```\n\n"


@pytest.mark.unit
class TestBlockquote:
    """Tests for block quotes."""

    def test_single_paragraph(self):
        node = {"type": "blockquote", "content": [para("quoted")]}
        assert render(doc(node)) == "> quoted\n\n"

    def test_multiple_paragraphs(self):
        node = {"type": "blockquote", "content": [para("a"), para("b")]}
        assert render(doc(node)) == "> a\n>\n> b\n\n"

    def test_nested_blockquote(self):
        inner = {"type": "blockquote", "content": [para("deep")]}
        node = {"type": "blockquote", "content": [inner]}
        assert render(doc(node)) == "> > deep\n\n"

    def test_empty_blockquote_omitted(self):
        assert render(doc({"type": "blockquote", "content": []})) == ""


@pytest.mark.unit
class TestCodeBlocks:
    """Tests for fenced code blocks."""

    def test_language_info_string(self):
        node = {"type": "codeBlock", "attrs": {"language": "javascript"}, "content": [text("console.log(1)")]}
        assert render(doc(node)) == "```javascript\nconsole.log(1)\n```\n\n"

    def test_no_language(self):
        node = {"type": "codeBlock", "content": [text("x")]}
        assert render(doc(node)) == "```\nx\n```\n\n"

    def test_body_not_escaped_or_mark_rendered(self):
        node = {"type": "codeBlock", "content": [text("a * b_c", "strong")]}
        assert render(doc(node)) == "```\na * b_c\n```\n\n"

    def test_fence_longer_than_backticks_in_body(self):
        node = {"type": "codeBlock", "content": [text("```\ninner\n```")]}
        assert render(doc(node)) == "````\n```\ninner\n```\n````\n\n"

    def test_hard_break_becomes_newline(self):
        node = {"type": "codeBlock", "content": [text("a"), {"type": "hardBreak"}, text("b")]}
        assert render(doc(node)) == "```\na\nb\n```\n\n"

    def test_language_sanitized(self):
        node = {"type": "codeBlock", "attrs": {"language": "py thon`"}, "content": [text("x")]}
        assert render(doc(node)) == "```python\nx\n```\n\n"

    def test_tilde_fence(self):
        node = {"type": "codeBlock", "content": [text("x")]}
        assert render(doc(node), code_fence_char="~") == "~~~\nx\n~~~\n\n"

    def test_empty_code_block(self):
        assert render(doc({"type": "codeBlock"})) == "```\n```\n\n"

    def test_trailing_newline_not_doubled(self):
        node = {"type": "codeBlock", "content": [text("x\n")]}
        assert render(doc(node)) == "```\nx\n```\n\n"


@pytest.mark.unit
class TestRule:
    """Tests for horizontal rules."""

    def test_rule(self):
        assert render(doc(para("a"), {"type": "rule"}, para("b"))) == "a\n\n---\n\nb\n\n"


@pytest.mark.unit
class TestTables:
    """Tests for table rendering."""

    def test_regular_table_with_header(self):
        node = table(
            row(cell("Name", header=True), cell("Value", header=True)),
            row(cell("a"), cell("1")),
        )
        assert render(doc(node)) == "| Name | Value |\n|---|---|\n| a | 1 |\n\n"

    def test_table_without_header_row_degrades_to_list(self):
        node = table(row(cell("a"), cell("1")), row(cell("b"), cell("2")))
        assert render(doc(node)) == "- a | 1\n- b | 2\n\n"

    def test_irregular_table_degrades_to_list(self):
        node = table(
            row(cell("H1", header=True), cell("H2", header=True)),
            row(cell("only")),
        )
        assert render(doc(node)) == "- H1 | H2\n- only\n\n"

    def test_spanning_cell_degrades_to_list(self):
        node = table(
            row(cell("H1", header=True), cell("H2", header=True)),
            row(cell("wide", colspan=2), cell("x")),
        )
        assert render(doc(node)) == "- H1 | H2\n- wide | x\n\n"

    def test_table_mode_list(self):
        node = table(row(cell("H", header=True)), row(cell("v")))
        assert render(doc(node), table_mode="list") == "- H\n- v\n\n"

    def test_pipe_in_cell_escaped(self):
        node = table(row(cell("a|b", header=True)), row(cell("c")))
        assert render(doc(node)) == "| a\\|b |\n|---|\n| c |\n\n"

    def test_multi_paragraph_cell_joined_with_br(self):
        multi = {"type": "tableCell", "content": [para("one"), para("two")]}
        node = table(row(cell("H", header=True)), row(multi))
        assert render(doc(node)) == "| H |\n|---|\n| one<br>two |\n\n"

    def test_empty_cells(self):
        empty = {"type": "tableCell", "content": []}
        node = table(row(cell("A", header=True), cell("B", header=True)), row(empty, cell("x")))
        assert render(doc(node)) == "| A | B |\n|---|---|\n|  | x |\n\n"

    def test_empty_table_omitted(self):
        assert render(doc(table())) == ""

    def test_standalone_row(self):
        assert render(doc(row(cell("a"), cell("b")))) == "a | b\n\n"

    def test_standalone_cell(self):
        assert render(doc(cell("only"))) == "only\n\n"

    def test_non_row_children_skipped(self):
        node = table(row(cell("H", header=True)), para("stray"), row(cell("v")))
        assert render(doc(node)) == "| H |\n|---|\n| v |\n\n"


@pytest.mark.unit
class TestGracefulDegradation:
    """Unknown and malformed nodes never raise."""

    def test_unknown_node_concatenates_text_children(self):
        node = {"type": "mysteryNode", "content": [text("a"), text("b")]}
        assert render(node) == "ab"

    def test_unknown_node_inside_document(self):
        node = {"type": "mysteryNode", "content": [text("a"), text("b")]}
        assert render(doc(node)) == "ab"

    def test_unknown_block_wrapper_renders_block_children(self):
        panel = {"type": "panel", "attrs": {"panelType": "info"}, "content": [para("note"), bullet_list("x")]}
        assert render(doc(panel, para("after"))) == "note\n\n- x\n\nafter\n\n"

    def test_inline_output_separated_from_following_block(self):
        node = {"type": "status", "content": [text("DONE")]}
        assert render(doc(node, para("next"))) == "DONE\n\nnext\n\n"

    def test_hard_break_inside_unknown_inline_container(self):
        status = {"type": "status", "content": [text("a"), {"type": "hardBreak"}, text("b")]}
        assert render(doc(para(status))) == "a  \nb\n\n"

    def test_hard_break_between_inline_children_of_document(self):
        assert render(doc(text("a"), {"type": "hardBreak"}, text("b"), para("next"))) == "a  \nb\n\nnext\n\n"

    def test_unknown_leaf_node_omitted(self):
        assert render(doc(para("a"), {"type": "media", "attrs": {"id": "x"}}, para("b"))) == "a\n\nb\n\n"

    @pytest.mark.parametrize(
        "node",
        [
            {"type": None, "content": [text("x")]},
            {"content": [text("x")]},
            {"type": "paragraph", "content": "not a list"},
            {"type": "paragraph", "attrs": "bad", "content": [text("x")]},
        ],
    )
    def test_malformed_nodes_do_not_raise(self, node):
        assert isinstance(render(doc(node)), str)

    def test_non_mapping_values_in_content(self):
        assert render(doc(None, 42, para("ok"))) == "ok\n\n"

    def test_bare_string_in_content_escaped(self):
        node = {"type": "paragraph", "content": [text("a"), "*b*"]}
        assert render(doc(node)) == "a\\*b\\*\n\n"

    def test_marks_on_non_text_ignored(self):
        node = {"type": "paragraph", "marks": [{"type": "strong"}], "content": [text("x")]}
        assert render(doc(node)) == "x\n\n"


@pytest.mark.unit
class TestOutputNormalisation:
    """Tests for output whitespace guarantees."""

    def test_no_leading_blank_lines(self):
        assert not render(doc(para(" "), para("x"))).startswith("\n")

    def test_at_most_one_trailing_blank_line(self):
        result = render(doc(para("a"), {"type": "rule"}))
        assert result.endswith("---\n\n")
        assert not result.endswith("\n\n\n")


@pytest.mark.unit
class TestRendererConfiguration:
    """Tests for renderer construction and statelessness."""

    def test_wrong_options_type_rejected(self):
        with pytest.raises(InvalidOptionsError):
            MarkdownRenderer(PlainTextOptions())

    def test_default_options(self):
        assert MarkdownRenderer().options == MarkdownRendererOptions()

    def test_renderer_reusable(self):
        renderer = MarkdownRenderer()
        first = renderer.render_to_string(doc(bullet_list(item("a", bullet_list("b")))))
        second = renderer.render_to_string(doc(bullet_list(item("a", bullet_list("b")))))
        assert first == second

    def test_input_not_mutated(self):
        document = doc(para(text("x", "strong", "em")), ordered_list("a", order=2))
        snapshot = repr(document)
        render(document)
        assert repr(document) == snapshot

    def test_list_context_nested(self):
        assert ListContext().nested().nested() == ListContext(depth=2)
