#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/adf2md/adf/nodes.py
"""Node model for the Atlassian Document Format (ADF).

ADF trees are handled as the plain ``dict``/``list`` values produced by
``json.loads``. This module provides the typed views used for
annotations, type guards for the document shape, and tolerant accessors
that never raise on malformed nodes. The tree coming from the remote
system is untrusted, so every accessor degrades to an empty value when
the field is missing or has the wrong type.

"""

from __future__ import annotations

from enum import IntEnum
from typing import Any, Mapping, Sequence, TypedDict

from adf2md.constants import DOC_TYPE, INLINE_NODE_TYPES


class AdfMark(TypedDict, total=False):
    """A formatting annotation attached to a text node."""

    type: str
    attrs: dict[str, Any]


class AdfNode(TypedDict, total=False):
    """Any node of the document tree."""

    type: str
    content: list["AdfNode"]
    text: str
    attrs: dict[str, Any]
    marks: list[AdfMark]


class AdfDocument(TypedDict):
    """The root node of a document."""

    version: int
    type: str
    content: list[AdfNode]


class MarkType(IntEnum):
    """Supported marks, ordered from innermost to outermost wrapper.

    The integer value is the wrap priority: a lower value is applied
    first and therefore ends up closer to the text.

    """

    CODE = 0
    STRONG = 1
    EM = 2
    STRIKE = 3
    UNDERLINE = 4
    SUBSUP = 5
    LINK = 6

    @classmethod
    def from_name(cls, name: Any) -> MarkType | None:
        """Look up a mark by its document-format name.

        Parameters
        ----------
        name : Any
            Value of the mark's ``type`` field

        Returns
        -------
        MarkType or None
            The mark, or None for unknown or non-string names

        """
        if not isinstance(name, str):
            return None
        return _MARK_NAMES.get(name)


_MARK_NAMES = {
    "code": MarkType.CODE,
    "strong": MarkType.STRONG,
    "em": MarkType.EM,
    "strike": MarkType.STRIKE,
    "underline": MarkType.UNDERLINE,
    "subsup": MarkType.SUBSUP,
    "link": MarkType.LINK,
}


def is_node(value: Any) -> bool:
    """Return True if value is a mapping with a string ``type``."""
    return isinstance(value, Mapping) and isinstance(value.get("type"), str)


def is_document(value: Any) -> bool:
    """Return True if value has the shape of a valid document.

    A document is a node whose ``type`` is ``"doc"``, whose ``version``
    is a number and whose ``content`` is a list.

    Examples
    --------
        >>> is_document({"version": 1, "type": "doc", "content": []})
        True
        >>> is_document({"type": "doc", "content": []})
        False

    """
    if not is_node(value) or value["type"] != DOC_TYPE:
        return False
    version = value.get("version")
    if isinstance(version, bool) or not isinstance(version, (int, float)):
        return False
    return isinstance(value.get("content"), list)


def is_inline_node(value: Any) -> bool:
    """Return True if value is a node of a known inline kind."""
    return is_node(value) and value["type"] in INLINE_NODE_TYPES


def get_type(node: Mapping[str, Any]) -> str:
    """Return the node kind, or an empty string if it is missing or not a string."""
    node_type = node.get("type")
    return node_type if isinstance(node_type, str) else ""


def get_content(node: Mapping[str, Any]) -> Sequence[Any]:
    """Return the child sequence of a node, or an empty tuple."""
    content = node.get("content")
    if isinstance(content, (list, tuple)):
        return content
    return ()


def get_attrs(node: Mapping[str, Any]) -> Mapping[str, Any]:
    """Return the attribute mapping of a node or mark, or an empty dict."""
    attrs = node.get("attrs")
    return attrs if isinstance(attrs, Mapping) else {}


def get_attr_str(node: Mapping[str, Any], *names: str) -> str:
    """Return the first non-empty string attribute among names.

    Parameters
    ----------
    node : Mapping
        Node or mark carrying ``attrs``
    *names : str
        Attribute names to try, in order

    Returns
    -------
    str
        The attribute value, or an empty string

    """
    attrs = get_attrs(node)
    for name in names:
        value = attrs.get(name)
        if isinstance(value, str) and value:
            return value
    return ""


def get_attr_int(node: Mapping[str, Any], name: str, default: int) -> int:
    """Return an integer attribute, accepting numeric strings, else default."""
    value = get_attrs(node).get(name)
    if isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return default
    return default


def get_text(node: Mapping[str, Any]) -> str:
    """Return the payload of a text node.

    Scalar payloads are converted with ``str()``; anything else gives an
    empty string.

    """
    text = node.get("text")
    if isinstance(text, str):
        return text
    if isinstance(text, (int, float)) and not isinstance(text, bool):
        return str(text)
    return ""


def get_marks(node: Mapping[str, Any]) -> list[Mapping[str, Any]]:
    """Return the well-formed marks of a text node."""
    marks = node.get("marks")
    if not isinstance(marks, (list, tuple)):
        return []
    return [mark for mark in marks if isinstance(mark, Mapping)]
