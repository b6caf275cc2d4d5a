"""Test utilities for the adf2md test suite.

Small builders for document trees, so tests read as the structure they
exercise rather than as nested JSON.
"""


def doc(*blocks):
    """Build a document holding the given blocks."""
    return {"version": 1, "type": "doc", "content": list(blocks)}


def text(value, *marks):
    """Build a text node; marks are given as names or mark mappings."""
    node = {"type": "text", "text": value}
    if marks:
        node["marks"] = [{"type": mark} if isinstance(mark, str) else mark for mark in marks]
    return node


def para(*inlines):
    """Build a paragraph; plain strings become text nodes."""
    return {"type": "paragraph", "content": [text(i) if isinstance(i, str) else i for i in inlines]}


def heading(level, *inlines):
    return {"type": "heading", "attrs": {"level": level}, "content": [text(i) if isinstance(i, str) else i for i in inlines]}


def item(*blocks):
    """Build a list item; plain strings become paragraphs."""
    return {"type": "listItem", "content": [para(b) if isinstance(b, str) else b for b in blocks]}


def bullet_list(*items):
    return {"type": "bulletList", "content": [item(i) if isinstance(i, str) else i for i in items]}


def ordered_list(*items, order=None):
    node = {"type": "orderedList", "content": [item(i) if isinstance(i, str) else i for i in items]}
    if order is not None:
        node["attrs"] = {"order": order}
    return node


def cell(value, header=False, **attrs):
    node = {"type": "tableHeader" if header else "tableCell", "content": [para(value)]}
    if attrs:
        node["attrs"] = attrs
    return node


def row(*cells):
    return {"type": "tableRow", "content": list(cells)}


def table(*rows):
    return {"type": "table", "content": list(rows)}


def nested_blockquotes(levels, leaf="deep"):
    """Build ``levels`` blockquotes nested inside each other around a paragraph."""
    node = para(leaf)
    for _ in range(levels):
        node = {"type": "blockquote", "content": [node]}
    return node
