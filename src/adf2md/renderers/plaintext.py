#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/adf2md/renderers/plaintext.py
"""Plain text rendering from document trees.

This module provides the PlainTextRenderer class which converts document
trees to plain, unformatted text. All marks and Markdown syntax are
dropped and only the text content is kept. This is useful for:
- Search indexing
- Notification previews
- Feeding issue text into language models

Block nodes end with the configured paragraph separator; table cells
are joined with the configured cell separator.

"""

from __future__ import annotations

from typing import Any, Mapping, Sequence

from adf2md.adf.nodes import get_attr_str, get_attrs, get_content, get_text, get_type, is_node
from adf2md.constants import BLOCK_NODE_TYPES, TABLE_CELL_TYPES
from adf2md.options.plaintext import PlainTextOptions
from adf2md.renderers.base import BaseRenderer
from adf2md.utils.escape import strip_control_characters


class PlainTextRenderer(BaseRenderer[None]):
    """Render document trees to plain, unformatted text.

    Parameters
    ----------
    options : PlainTextOptions or None, default = None
        Plain text rendering options

    Examples
    --------
        >>> doc = {
        ...     "version": 1,
        ...     "type": "doc",
        ...     "content": [
        ...         {"type": "paragraph", "content": [
        ...             {"type": "text", "text": "Hello ", "marks": [{"type": "strong"}]},
        ...             {"type": "mention", "attrs": {"text": "@Ana"}},
        ...         ]},
        ...     ],
        ... }
        >>> PlainTextRenderer().render_to_string(doc)
        'Hello @Ana'

    """

    def __init__(self, options: PlainTextOptions | None = None):
        """Initialize the plain text renderer with options."""
        BaseRenderer._validate_options_type(options, PlainTextOptions, "plaintext")
        options = options or PlainTextOptions()
        BaseRenderer.__init__(self, options)
        self.options: PlainTextOptions = options

    def initial_context(self) -> None:
        return None

    def render_to_string(self, node: Any) -> str:
        """Render a document, node or fragment to plain text.

        Parameters
        ----------
        node : Any
            A document, bare node, list of nodes, string or None

        Returns
        -------
        str
            Plain text output without trailing whitespace

        """
        if node is None:
            return ""
        if isinstance(node, str):
            return node
        return self._walk(node, 0, None).rstrip()

    def _join_blocks(self, children: Sequence[Any], parts: Sequence[str]) -> str:
        """Join rendered children, separating block output from inline runs."""
        separator = self.options.paragraph_separator
        out = ""
        prev_inline = False
        for child, part in zip(children, parts):
            if not part:
                continue
            is_block = isinstance(child, Mapping) and get_type(child) in BLOCK_NODE_TYPES
            if prev_inline and is_block:
                out += separator
            out += part
            prev_inline = not is_block
        return out

    def _block(self, text: str) -> str:
        text = text.strip("\n")
        if not text.strip():
            return ""
        return text + self.options.paragraph_separator

    def _trim(self, text: str) -> str:
        """Remove the trailing block separator of a rendered child."""
        separator = self.options.paragraph_separator
        if separator and text.endswith(separator):
            text = text[: -len(separator)]
        return text.strip("\n")

    def visit_doc(self, node: Mapping[str, Any], depth: int, context: None) -> str:
        return self._join_blocks(get_content(node), self._walk_children(node, depth, context))

    def visit_paragraph(self, node: Mapping[str, Any], depth: int, context: None) -> str:
        return self._block("".join(self._walk_children(node, depth, context)))

    def visit_heading(self, node: Mapping[str, Any], depth: int, context: None) -> str:
        return self._block("".join(self._walk_children(node, depth, context)).replace("\n", " ").strip())

    def visit_bullet_list(self, node: Mapping[str, Any], depth: int, context: None) -> str:
        """Render a list as one line per item, nested items indented."""
        lines = []
        for part in self._walk_children(node, depth, context):
            text = self._trim(part)
            if not text:
                continue
            first, *rest = text.split("\n")
            lines.append(first)
            lines.extend(f"  {line}" if line else "" for line in rest)
        return self._block("\n".join(lines))

    visit_ordered_list = visit_bullet_list

    def visit_list_item(self, node: Mapping[str, Any], depth: int, context: None) -> str:
        parts = [self._trim(part) for part in self._walk_children(node, depth, context)]
        return self._block("\n".join(part for part in parts if part))

    def visit_blockquote(self, node: Mapping[str, Any], depth: int, context: None) -> str:
        return self._join_blocks(get_content(node), self._walk_children(node, depth, context))

    def visit_code_block(self, node: Mapping[str, Any], depth: int, context: None) -> str:
        return self._block("".join(self._walk_children(node, depth, context)))

    def visit_rule(self, node: Mapping[str, Any], depth: int, context: None) -> str:
        return ""

    def visit_table(self, node: Mapping[str, Any], depth: int, context: None) -> str:
        rows = [
            self._trim(part)
            for row, part in zip(get_content(node), self._walk_children(node, depth, context))
            if is_node(row) and row["type"] == "tableRow"
        ]
        return self._block("\n".join(row for row in rows if row))

    def visit_table_row(self, node: Mapping[str, Any], depth: int, context: None) -> str:
        cells = [
            " ".join(self._trim(part).split())
            for cell, part in zip(get_content(node), self._walk_children(node, depth, context))
            if is_node(cell) and cell["type"] in TABLE_CELL_TYPES
        ]
        return self._block(self.options.table_cell_separator.join(cells))

    def visit_table_cell(self, node: Mapping[str, Any], depth: int, context: None) -> str:
        return self._join_blocks(get_content(node), self._walk_children(node, depth, context))

    def visit_text(self, node: Mapping[str, Any], depth: int, context: None) -> str:
        return strip_control_characters(get_text(node))

    def visit_hard_break(self, node: Mapping[str, Any], depth: int, context: None) -> str:
        return "\n"

    def visit_mention(self, node: Mapping[str, Any], depth: int, context: None) -> str:
        label = get_attr_str(node, "text", "displayName", "id").strip()
        label = label[1:] if label.startswith("@") else label
        return f"@{strip_control_characters(label)}" if label else ""

    def visit_emoji(self, node: Mapping[str, Any], depth: int, context: None) -> str:
        return strip_control_characters(get_attr_str(node, "text", "shortName"))

    def visit_inline_card(self, node: Mapping[str, Any], depth: int, context: None) -> str:
        url = get_attr_str(node, "url")
        if not url:
            data = get_attrs(node).get("data")
            if isinstance(data, Mapping) and isinstance(data.get("url"), str):
                url = data["url"]
        return strip_control_characters(url.strip())

    def visit_bare_string(self, value: str, depth: int, context: None) -> str:
        return strip_control_characters(value)

    def generic_visit(self, node: Mapping[str, Any], depth: int, context: None) -> str:
        """Render an unknown node as its children, or its URL when it has none."""
        url = get_attr_str(node, "url")
        if url and not get_content(node):
            return strip_control_characters(url.strip())
        return self._join_blocks(get_content(node), self._walk_children(node, depth, context))


