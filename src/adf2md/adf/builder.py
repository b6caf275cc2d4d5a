#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/adf2md/adf/builder.py
"""Builders that turn arbitrary values into valid documents.

Callers preparing a write payload often hold plain text, nothing at all,
or a tree of unknown quality. The functions here always produce a
document that satisfies the document invariant. No Markdown parsing is
performed: strings are carried verbatim as text.

"""

from __future__ import annotations

import logging
import re
import reprlib
from typing import Any, Mapping, Sequence

from adf2md.adf.nodes import AdfDocument, AdfNode, get_type, is_document, is_inline_node
from adf2md.constants import DOC_TYPE, DOCUMENT_VERSION

logger = logging.getLogger(__name__)

_BLANK_LINE_RE = re.compile(r"\n\s*\n")


def empty_document() -> AdfDocument:
    """Return a new document with no content."""
    return {"version": DOCUMENT_VERSION, "type": DOC_TYPE, "content": []}


def text_paragraph(text: str) -> AdfNode:
    """Build a paragraph holding a single text node with ``text`` verbatim."""
    return {"type": "paragraph", "content": [{"type": "text", "text": text}]}


def split_paragraphs(text: str) -> list[str]:
    """Split text on blank lines, dropping whitespace-only chunks.

    Parameters
    ----------
    text : str
        Text to split

    Returns
    -------
    list[str]
        Paragraph texts, each carried verbatim

    Examples
    --------
        >>> split_paragraphs("first\\n\\n  \\nsecond\\nline")
        ['first', 'second\\nline']

    """
    normalized = text.replace("\r\n", "\n").replace("\r", "\n")
    return [chunk for chunk in _BLANK_LINE_RE.split(normalized) if chunk.strip()]


def text_to_document(text: str) -> AdfDocument:
    """Wrap plain text into a document, one paragraph per blank-line separated chunk."""
    doc = empty_document()
    doc["content"] = [text_paragraph(chunk) for chunk in split_paragraphs(text)]
    return doc


def _empty_like(value: Any) -> Any:
    return {} if isinstance(value, Mapping) else []


def copy_tree(value: Any) -> Any:
    """Copy a tree of mappings and sequences without recursion.

    Mappings become dicts and tuples become lists; all other values are
    shared with the input. Shared and cyclic references are preserved,
    so trees of any depth or shape are copied without error.

    Parameters
    ----------
    value : Any
        Tree to copy

    Returns
    -------
    Any
        The copy, or ``value`` itself if it is neither a mapping nor a
        list or tuple

    Examples
    --------
        >>> node = {"type": "paragraph", "content": ({"type": "text", "text": "x"},)}
        >>> copy_tree(node)
        {'type': 'paragraph', 'content': [{'type': 'text', 'text': 'x'}]}

    """
    if not isinstance(value, (Mapping, list, tuple)):
        return value

    root = _empty_like(value)
    copies: dict[int, Any] = {id(value): root}
    pending = [(value, root)]
    while pending:
        source, target = pending.pop()
        items = source.items() if isinstance(source, Mapping) else enumerate(source)
        for key, item in items:
            if isinstance(item, (Mapping, list, tuple)):
                copied = copies.get(id(item))
                if copied is None:
                    copied = copies[id(item)] = _empty_like(item)
                    pending.append((item, copied))
            else:
                copied = item
            if isinstance(target, dict):
                target[key] = copied
            else:
                target.append(copied)
    return root


def _as_text(value: Any) -> str:
    """Convert value to text, falling back to a size-limited repr."""
    try:
        return str(value)
    except Exception as e:
        # Deeply nested or self-referential containers, objects with a broken __str__
        logger.debug("str() failed for %s (%s), using a truncated repr", type(value).__name__, type(e).__name__)
        return reprlib.repr(value)


def _sanitize_content(content: Sequence[Any]) -> list[AdfNode]:
    """Deep-copy content elements that can live under a document root."""
    sanitized: list[AdfNode] = []
    for element in content:
        if isinstance(element, Mapping):
            if is_inline_node(element):
                sanitized.append({"type": "paragraph", "content": [copy_tree(element)]})
            else:
                sanitized.append(copy_tree(element))
        elif isinstance(element, str):
            sanitized.extend(text_paragraph(chunk) for chunk in split_paragraphs(element))
        else:
            logger.debug("Dropping content element of type %s", type(element).__name__)
    return sanitized


def _wrap_content(content: Sequence[Any]) -> AdfDocument:
    doc = empty_document()
    doc["content"] = _sanitize_content(content)
    return doc


def coerce(value: Any) -> AdfDocument:
    """Produce a valid document from any value.

    Parameters
    ----------
    value : Any
        ``None``, a plain string, an already-valid document, a partial
        tree or any other value

    Returns
    -------
    AdfDocument
        A document satisfying the document invariant. A valid input
        document is returned as-is, every other result is a new value.

    Notes
    -----
    The rules are applied in order:

    1. ``None`` gives an empty document.
    2. A valid document is passed through unchanged.
    3. ``str``/``bytes`` are split on blank lines into paragraphs.
    4. A mapping of type ``"doc"`` (or with no type) that has a
       ``content`` list has that content adopted under a new root. A
       ``"doc"`` mapping without one gives an empty document.
    5. Any other node is wrapped as the single element of a new root;
       inline nodes get a paragraph around them first.
    6. A list or tuple is treated as a content array.
    7. Anything else is converted with ``str()`` and handled as text.

    Examples
    --------
        >>> coerce("Hello")
        {'version': 1, 'type': 'doc', 'content': [{'type': 'paragraph', 'content': [{'type': 'text', 'text': 'Hello'}]}]}
        >>> coerce(None)
        {'version': 1, 'type': 'doc', 'content': []}

    """
    if value is None:
        return empty_document()

    if is_document(value):
        return value

    if isinstance(value, str):
        return text_to_document(value)

    if isinstance(value, (bytes, bytearray)):
        return text_to_document(bytes(value).decode("utf-8", errors="replace"))

    if isinstance(value, Mapping):
        node_type = get_type(value)
        content = value.get("content")
        if node_type in ("", DOC_TYPE) and isinstance(content, (list, tuple)):
            return _wrap_content(content)
        if node_type == DOC_TYPE:
            return empty_document()
        if node_type and node_type != DOC_TYPE:
            return _wrap_content([value])
        logger.debug("Coercing unrecognised mapping as text")
        return text_to_document(_as_text(value))

    if isinstance(value, (list, tuple)):
        return _wrap_content(value)

    return text_to_document(_as_text(value))


def coerce_optional(value: Any) -> AdfDocument | None:
    """Coerce value, returning None when the document would have no content.

    Useful for optional write fields, where sending an empty document is
    different from leaving the field out.

    Examples
    --------
        >>> coerce_optional("   ") is None
        True

    """
    doc = coerce(value)
    if not doc["content"]:
        return None
    return doc
