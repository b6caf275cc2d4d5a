#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/adf2md/adf/visitors.py
"""Visitor pattern implementation for document tree traversal.

Nodes of the document format are tagged mappings rather than classes,
so dispatch goes through a lookup table from node kind to visitor
method name. Any kind missing from the table is routed to
``generic_visit``, which implements the graceful-degradation rule for
node kinds this library does not know about.

"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, ClassVar, Generic, Mapping, TypeVar

from adf2md.adf.nodes import get_type

logger = logging.getLogger(__name__)

ContextT = TypeVar("ContextT")


class AdfVisitor(ABC, Generic[ContextT]):
    """Abstract base class for document tree visitors.

    Subclasses implement a ``visit_*`` method for each entry of
    ``NODE_HANDLERS``. Every visit method receives the node, its depth in
    the tree and a visitor-specific context value, and returns the
    rendered string for that node.

    Examples
    --------
    A visitor that only keeps text payloads:

        >>> class TextOnly(AdfVisitor):
        ...     NODE_HANDLERS = {"text": "visit_text"}
        ...
        ...     def visit_text(self, node, depth, context):
        ...         return node.get("text", "")
        ...
        ...     def generic_visit(self, node, depth, context):
        ...         return "".join(
        ...             self.dispatch(child, depth + 1, context) for child in node.get("content", [])
        ...         )
        >>> TextOnly().dispatch({"type": "paragraph", "content": [{"type": "text", "text": "hi"}]}, 0, None)
        'hi'

    """

    NODE_HANDLERS: ClassVar[dict[str, str]] = {
        "doc": "visit_doc",
        "paragraph": "visit_paragraph",
        "heading": "visit_heading",
        "bulletList": "visit_bullet_list",
        "orderedList": "visit_ordered_list",
        "listItem": "visit_list_item",
        "blockquote": "visit_blockquote",
        "codeBlock": "visit_code_block",
        "rule": "visit_rule",
        "table": "visit_table",
        "tableRow": "visit_table_row",
        "tableHeader": "visit_table_cell",
        "tableCell": "visit_table_cell",
        "text": "visit_text",
        "hardBreak": "visit_hard_break",
        "mention": "visit_mention",
        "emoji": "visit_emoji",
        "inlineCard": "visit_inline_card",
    }

    def dispatch(self, node: Mapping[str, Any], depth: int, context: ContextT) -> str:
        """Route a node to the visit method registered for its kind.

        Parameters
        ----------
        node : Mapping
            The node to visit
        depth : int
            Depth of the node in the tree (document root is 0)
        context : ContextT
            Visitor-specific traversal context

        Returns
        -------
        str
            Result of the visit method

        """
        node_type = get_type(node)
        handler_name = self.NODE_HANDLERS.get(node_type)
        if handler_name is None:
            logger.debug("No handler for node type %r, degrading to its children", node_type)
            return self.generic_visit(node, depth, context)
        handler = getattr(self, handler_name)
        return handler(node, depth, context)

    @abstractmethod
    def generic_visit(self, node: Mapping[str, Any], depth: int, context: ContextT) -> str:
        """Visit a node whose kind has no registered handler."""
        pass
