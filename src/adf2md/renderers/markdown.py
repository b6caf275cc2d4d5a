#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/adf2md/renderers/markdown.py
"""Markdown rendering from document trees.

This module provides the MarkdownRenderer class which converts document
trees to Markdown text. Every visit method returns the Markdown of its
node: block nodes end with a blank line, inline nodes return bare text.
Containers join their children with ``_join_blocks``, which keeps runs
of inline output together and separates block output with blank lines.

List nesting is tracked with an immutable ``ListContext`` passed down
the traversal, never on the renderer instance.

"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Any, Mapping, Sequence

from adf2md.adf.nodes import (
    get_attr_int,
    get_attr_str,
    get_attrs,
    get_content,
    get_marks,
    get_text,
    get_type,
    is_node,
)
from adf2md.constants import (
    BLOCK_NODE_TYPES,
    INLINE_NODE_TYPES,
    LIST_NODE_TYPES,
    TABLE_CELL_SEPARATOR,
    TABLE_CELL_TYPES,
)
from adf2md.options.markdown import MarkdownRendererOptions
from adf2md.renderers._marks import plausible_href, render_text_run
from adf2md.renderers.base import BaseRenderer
from adf2md.utils.escape import escape_markdown, escape_table_cell, strip_control_characters

logger = logging.getLogger(__name__)

# A hard break or soft newline: two trailing spaces or an unescaped backslash, then LF
_LINE_BREAK_RE = re.compile(r"(?:[ ]{2,}|(?<!\\)\\)?\n")
_TRAILING_BREAKS_RE = re.compile(r"(?:[ \t]*(?:(?<!\\)\\)?\n)+$")
_LANGUAGE_STRIP_RE = re.compile(r"[\s`]+")


def _is_block_output(child: Any, part: str) -> bool:
    """Return True if ``part``, the rendering of ``child``, is block output."""
    if isinstance(child, str):
        return False
    if isinstance(child, Mapping):
        node_type = get_type(child)
        if node_type in BLOCK_NODE_TYPES:
            return True
        if node_type in INLINE_NODE_TYPES:
            return False
    return part.endswith("\n\n")


@dataclass(frozen=True)
class ListContext:
    """Position of the traversal relative to enclosing lists.

    Parameters
    ----------
    depth : int, default 0
        Number of enclosing lists

    """

    depth: int = 0

    def nested(self) -> ListContext:
        """Return the context for the items of a list one level deeper."""
        return ListContext(depth=self.depth + 1)


class MarkdownRenderer(BaseRenderer[ListContext]):
    """Render document trees to Markdown text.

    Parameters
    ----------
    options : MarkdownRendererOptions or None, default = None
        Markdown formatting options

    Examples
    --------
    Basic usage:

        >>> renderer = MarkdownRenderer()
        >>> doc = {
        ...     "version": 1,
        ...     "type": "doc",
        ...     "content": [
        ...         {"type": "heading", "attrs": {"level": 2}, "content": [{"type": "text", "text": "Title"}]},
        ...     ],
        ... }
        >>> renderer.render_to_string(doc)
        '## Title\\n\\n'

    """

    def __init__(self, options: MarkdownRendererOptions | None = None):
        """Initialize the Markdown renderer with options."""
        BaseRenderer._validate_options_type(options, MarkdownRendererOptions, "markdown")
        options = options or MarkdownRendererOptions()
        BaseRenderer.__init__(self, options)
        self.options: MarkdownRendererOptions = options

    def initial_context(self) -> ListContext:
        """Return the context of the document root, outside any list."""
        return ListContext()

    def render_to_string(self, node: Any) -> str:
        """Render a document, node or fragment to Markdown.

        Parameters
        ----------
        node : Any
            A document, a bare node (rendered as if it were the only
            child of a document), a list of nodes, a plain string
            (returned unchanged) or None (rendered as an empty string)

        Returns
        -------
        str
            Markdown text with no leading blank lines and at most one
            trailing blank line

        """
        if node is None:
            return ""
        if isinstance(node, str):
            return node

        result = self._walk(node, 0, self.initial_context())
        return self._cleanup_output(result)

    @staticmethod
    def _cleanup_output(text: str) -> str:
        """Trim leading blank lines and keep at most one trailing blank line."""
        text = text.lstrip("\n")
        stripped = text.rstrip("\n")
        trailing = len(text) - len(stripped)
        return stripped + "\n" * min(trailing, 2)

    @staticmethod
    def _join_blocks(children: Sequence[Any], parts: Sequence[str], tight: bool = False) -> str:
        """Join the rendered children of a container node.

        Consecutive inline outputs are concatenated. Block outputs are
        separated by a blank line, except that in ``tight`` mode a nested
        list directly follows the preceding block on the next line.
        Known kinds are classified by type; for other kinds the output
        decides, block output ending in a blank line.

        Parameters
        ----------
        children : sequence
            The child nodes, aligned with parts
        parts : sequence of str
            The rendered children
        tight : bool, default False
            Join nested lists without a blank line (list items)

        Returns
        -------
        str
            The joined Markdown

        """
        out = ""
        prev_inline = False
        for child, part in zip(children, parts):
            if not part:
                continue
            is_inline = not _is_block_output(child, part)
            if out and not (is_inline and prev_inline):
                is_list = isinstance(child, Mapping) and get_type(child) in LIST_NODE_TYPES
                out = out.rstrip("\n") + ("\n" if tight and is_list else "\n\n")
            out += part
            prev_inline = is_inline
        return out

    def _render_inline(self, node: Mapping[str, Any], depth: int, context: ListContext) -> str:
        """Render the inline children of a leaf block, dropping trailing line breaks."""
        content = "".join(self._walk_children(node, depth, context))
        return _TRAILING_BREAKS_RE.sub("", content)

    # ------------------------------------------------------------------
    # Block nodes
    # ------------------------------------------------------------------

    def visit_doc(self, node: Mapping[str, Any], depth: int, context: ListContext) -> str:
        """Render the document root."""
        return self._join_blocks(get_content(node), self._walk_children(node, depth, context))

    def visit_paragraph(self, node: Mapping[str, Any], depth: int, context: ListContext) -> str:
        """Render a paragraph followed by a blank line."""
        content = self._render_inline(node, depth, context)
        if not content.strip():
            return ""
        return f"{content}\n\n"

    def visit_heading(self, node: Mapping[str, Any], depth: int, context: ListContext) -> str:
        """Render an ATX heading; line breaks inside it become spaces."""
        level = max(1, min(6, get_attr_int(node, "level", 1)))
        content = _LINE_BREAK_RE.sub(" ", self._render_inline(node, depth, context)).strip()
        return f"{'#' * level} {content}".rstrip() + "\n\n"

    def visit_bullet_list(self, node: Mapping[str, Any], depth: int, context: ListContext) -> str:
        """Render a bullet list."""
        symbols = self.options.bullet_symbols
        bullet = symbols[context.depth % len(symbols)]
        return self._render_list(node, depth, context, lambda index: f"{bullet} ")

    def visit_ordered_list(self, node: Mapping[str, Any], depth: int, context: ListContext) -> str:
        """Render an ordered list numbered from its start offset."""
        start = get_attr_int(node, "order", get_attr_int(node, "start", 1))
        # CommonMark allows at most nine digits in an ordered list marker
        start = min(max(0, start), 999_999_999)
        return self._render_list(node, depth, context, lambda index: f"{start + index}. ")

    def _render_list(self, node: Mapping[str, Any], depth: int, context: ListContext, marker_for: Any) -> str:
        """Render list items, each prefixed with its marker.

        The first line of an item follows the marker. Continuation lines
        (further paragraphs, nested lists) are indented by
        ``list_indent_width``, or by the marker width when unset.

        """
        item_context = context.nested()
        lines: list[str] = []
        index = 0
        for child in get_content(node):
            if not isinstance(child, Mapping):
                continue
            marker = marker_for(index)
            index += 1

            body = self._walk(child, depth + 1, item_context).strip("\n")
            body_lines = body.split("\n")
            indent = " " * (self.options.list_indent_width or len(marker))

            lines.append(marker + body_lines[0] if body_lines[0] else marker.rstrip())
            lines.extend(indent + line if line else "" for line in body_lines[1:])

        if not lines:
            return ""
        return "\n".join(lines) + "\n\n"

    def visit_list_item(self, node: Mapping[str, Any], depth: int, context: ListContext) -> str:
        """Render the content of a list item without its marker.

        The marker is added by the enclosing list.

        """
        content = self._join_blocks(get_content(node), self._walk_children(node, depth, context), tight=True)
        content = content.rstrip("\n")
        if not content.strip():
            return ""
        return f"{content}\n\n"

    def visit_blockquote(self, node: Mapping[str, Any], depth: int, context: ListContext) -> str:
        """Render a block quote, prefixing every line with ``> ``."""
        content = self._join_blocks(get_content(node), self._walk_children(node, depth, context)).rstrip("\n")
        if not content.strip():
            return ""
        quoted = [f"> {line}" if line else ">" for line in content.split("\n")]
        return "\n".join(quoted) + "\n\n"

    def visit_code_block(self, node: Mapping[str, Any], depth: int, context: ListContext) -> str:
        """Render a fenced code block.

        The body is the verbatim text of the children, never escaped or
        mark-rendered. The fence grows past any run of the fence
        character inside the body.

        """
        code = self._code_text(node, depth)
        fence_char = self.options.code_fence_char

        longest = max((len(run) for run in re.findall(re.escape(fence_char) + "+", code)), default=0)
        fence = fence_char * max(self.options.code_fence_min, longest + 1)

        language = _LANGUAGE_STRIP_RE.sub("", get_attr_str(node, "language"))

        if code and not code.endswith("\n"):
            code += "\n"
        return f"{fence}{language}\n{code}{fence}\n\n"

    def _code_text(self, node: Mapping[str, Any], depth: int) -> str:
        """Collect the raw text below a code block."""
        pieces: list[str] = []
        for child in get_content(node):
            if not self._depth_guard.enter(depth + 1):
                pieces.append(self.options.depth_placeholder)
            elif isinstance(child, str):
                pieces.append(strip_control_characters(child))
            elif not isinstance(child, Mapping):
                continue
            elif get_type(child) == "text":
                pieces.append(strip_control_characters(get_text(child)))
            elif get_type(child) == "hardBreak":
                pieces.append("\n")
            else:
                pieces.append(self._code_text(child, depth + 1))
        return "".join(pieces)

    def visit_rule(self, node: Mapping[str, Any], depth: int, context: ListContext) -> str:
        """Render a horizontal rule."""
        return "---\n\n"

    def visit_table(self, node: Mapping[str, Any], depth: int, context: ListContext) -> str:
        """Render a table.

        Regular tables (equal cell counts, a header row, no spanning
        cells) become pipe tables. Anything else becomes one bullet per
        row so no malformed pipe table is ever produced.

        """
        if not self._depth_guard.enter(depth + 2):
            logger.warning("Maximum nesting depth %d exceeded, truncating table", self.options.max_depth)
            return f"{self.options.depth_placeholder}\n\n"

        rows: list[list[str]] = []
        header_flags: list[bool] = []
        has_spans = False
        for row in get_content(node):
            if not is_node(row) or row["type"] != "tableRow":
                logger.debug("Skipping non-row child of table: %r", get_type(row) if isinstance(row, Mapping) else row)
                continue
            cells = [cell for cell in get_content(row) if is_node(cell) and cell["type"] in TABLE_CELL_TYPES]
            rows.append([self._render_cell(cell, depth + 2, context) for cell in cells])
            header_flags.append(bool(cells) and all(cell["type"] == "tableHeader" for cell in cells))
            has_spans = has_spans or any(
                get_attr_int(cell, "colspan", 1) > 1 or get_attr_int(cell, "rowspan", 1) > 1 for cell in cells
            )

        if not rows:
            return ""

        is_regular = (
            self.options.table_mode == "auto"
            and not has_spans
            and header_flags[0]
            and len(rows[0]) > 0
            and all(len(row) == len(rows[0]) for row in rows)
        )
        if is_regular:
            return self._render_pipe_table(rows)
        return self._render_table_as_list(rows)

    def _render_cell(self, cell: Mapping[str, Any], depth: int, context: ListContext) -> str:
        """Render a table cell to a single line of inline Markdown."""
        content = self._walk(cell, depth, context).strip("\n")
        content = re.sub(r"\n{2,}", "\n", content)
        return escape_table_cell(content)

    @staticmethod
    def _render_pipe_table(rows: list[list[str]]) -> str:
        """Render rows as a pipe table, the first row being the header."""
        lines = ["| " + " | ".join(rows[0]) + " |", "|" + "|".join(["---"] * len(rows[0])) + "|"]
        lines.extend("| " + " | ".join(row) + " |" for row in rows[1:])
        return "\n".join(lines) + "\n\n"

    @staticmethod
    def _render_table_as_list(rows: list[list[str]]) -> str:
        """Render each row as a bullet holding its cell texts."""
        lines = []
        for row in rows:
            cells = [cell for cell in row if cell]
            if cells:
                lines.append("- " + TABLE_CELL_SEPARATOR.join(cells))
        if not lines:
            return ""
        return "\n".join(lines) + "\n\n"

    def visit_table_row(self, node: Mapping[str, Any], depth: int, context: ListContext) -> str:
        """Render a row found outside a table as its cell texts joined by separators."""
        cells = [escape_table_cell(part.strip("\n")) for part in self._walk_children(node, depth, context)]
        cells = [cell for cell in cells if cell]
        if not cells:
            return ""
        return TABLE_CELL_SEPARATOR.join(cells) + "\n\n"

    def visit_table_cell(self, node: Mapping[str, Any], depth: int, context: ListContext) -> str:
        """Render the content of a table cell as blocks."""
        return self._join_blocks(get_content(node), self._walk_children(node, depth, context))

    # ------------------------------------------------------------------
    # Inline nodes
    # ------------------------------------------------------------------

    def visit_text(self, node: Mapping[str, Any], depth: int, context: ListContext) -> str:
        """Render a text run with its marks."""
        return render_text_run(get_text(node), get_marks(node), self.options)

    def visit_hard_break(self, node: Mapping[str, Any], depth: int, context: ListContext) -> str:
        """Render a hard line break."""
        if self.options.hard_break_style == "backslash":
            return "\\\n"
        return "  \n"

    def visit_mention(self, node: Mapping[str, Any], depth: int, context: ListContext) -> str:
        """Render a mention as ``@`` followed by its display label."""
        label = get_attr_str(node, "text", "displayName", "id").strip()
        label = label[1:] if label.startswith("@") else label
        if not label:
            return ""
        return "@" + self._escape(label)

    def visit_emoji(self, node: Mapping[str, Any], depth: int, context: ListContext) -> str:
        """Render an emoji as its unicode text or shortcode, unescaped."""
        return strip_control_characters(get_attr_str(node, "text", "shortName"))

    def visit_inline_card(self, node: Mapping[str, Any], depth: int, context: ListContext) -> str:
        """Render a smart link card as a Markdown link to its URL."""
        url = get_attr_str(node, "url")
        if not url:
            data = get_attrs(node).get("data")
            if isinstance(data, Mapping) and isinstance(data.get("url"), str):
                url = data["url"]
        return self._url_link(url)

    def _url_link(self, url: str) -> str:
        """Render a URL as a link labelled with the (possibly truncated) URL."""
        url = url.strip()
        if not url:
            return ""
        max_length = self.options.link_label_max_length
        label = url if len(url) <= max_length else url[: max_length - 1] + "…"
        href = plausible_href(url)
        if href is None:
            return self._escape(label)
        return f"[{self._escape(label)}]({href})"

    def visit_bare_string(self, value: str, depth: int, context: ListContext) -> str:
        """Render a string found in place of a node as literal text."""
        return self._escape(value)

    def generic_visit(self, node: Mapping[str, Any], depth: int, context: ListContext) -> str:
        """Render a node of unknown kind.

        A childless node carrying a ``url`` attribute renders as a link,
        any other node as the concatenation of its children. A node with
        neither renders as nothing.

        """
        url = get_attr_str(node, "url")
        if url and not get_content(node):
            return self._url_link(url)
        return self._join_blocks(get_content(node), self._walk_children(node, depth, context))

    def _escape(self, text: str) -> str:
        if self.options.escape_special:
            return escape_markdown(text)
        return strip_control_characters(text)
