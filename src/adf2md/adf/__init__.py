#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/adf2md/adf/__init__.py
"""Document-format tree model, visitors and builders."""

from adf2md.adf.builder import coerce, coerce_optional, empty_document, text_to_document
from adf2md.adf.nodes import AdfDocument, AdfMark, AdfNode, MarkType, is_document, is_inline_node, is_node
from adf2md.adf.visitors import AdfVisitor

__all__ = [
    "AdfDocument",
    "AdfMark",
    "AdfNode",
    "AdfVisitor",
    "MarkType",
    "coerce",
    "coerce_optional",
    "empty_document",
    "is_document",
    "is_inline_node",
    "is_node",
    "text_to_document",
]
