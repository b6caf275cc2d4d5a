#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/adf2md/utils/escape.py
"""Markdown text escaping utilities.

Literal text taken from a document must never turn into Markdown syntax
by accident. The functions here are applied exactly once, at the point a
text payload is rendered. Code spans and code blocks bypass them since
their content is rendered verbatim.

"""

from __future__ import annotations

import re
import unicodedata

from adf2md.constants import MARKDOWN_ALWAYS_ESCAPE, MARKDOWN_LINE_START_ESCAPE, TABLE_LINE_BREAK

_LINE_START_RE = re.compile(r"^([ \t]{0,3})([" + re.escape(MARKDOWN_LINE_START_ESCAPE) + r"])", re.MULTILINE)


def normalize_newlines(text: str) -> str:
    """Convert CRLF and lone CR line endings to LF."""
    return text.replace("\r\n", "\n").replace("\r", "\n")


def strip_control_characters(text: str) -> str:
    r"""Remove control characters other than newline and tab.

    Parameters
    ----------
    text : str
        Text to clean

    Returns
    -------
    str
        Text without NUL and other non-printable control characters

    Examples
    --------
        >>> strip_control_characters("a\x00b\x07c\td")
        'abc\td'

    """
    if not text:
        return text
    text = normalize_newlines(text)
    return "".join(char for char in text if char in "\n\t" or unicodedata.category(char) != "Cc")


def escape_markdown(text: str) -> str:
    r"""Escape Markdown-significant characters in literal text.

    Backslash, backtick, asterisk, underscore and square brackets are
    escaped wherever they appear. ``#``, ``-`` and ``>`` are escaped only
    when they are the first non-blank character of a line, where they
    would start a heading, a list item or a block quote. Control
    characters are stripped first.

    Parameters
    ----------
    text : str
        Text to escape

    Returns
    -------
    str
        Escaped text

    Examples
    --------
        >>> escape_markdown("2 * 3 = [six]")
        '2 \\* 3 = \\[six\\]'
        >>> escape_markdown("# not a heading")
        '\\# not a heading'
        >>> escape_markdown("a - b")
        'a - b'

    """
    if not text:
        return text

    text = strip_control_characters(text)

    escaped_chars = []
    for char in text:
        if char in MARKDOWN_ALWAYS_ESCAPE:
            escaped_chars.append("\\")
        escaped_chars.append(char)
    result = "".join(escaped_chars)

    return _LINE_START_RE.sub(r"\1\\\2", result)


def escape_table_cell(text: str) -> str:
    r"""Make rendered inline Markdown safe inside a pipe table cell.

    Pipes are escaped and line breaks become ``<br>`` since a table row
    must stay on a single line.

    Examples
    --------
        >>> escape_table_cell("a | b\nc")
        'a \\| b<br>c'

    """
    if not text:
        return text
    result = text.replace("|", r"\|")
    result = re.sub(r"(?:[ ]{2,}|(?<!\\)\\)?\n", TABLE_LINE_BREAK, result.strip())
    return result


def escape_link_destination(url: str) -> str:
    """Percent-encode characters that would end an inline link destination.

    Examples
    --------
        >>> escape_link_destination("https://en.wikipedia.org/wiki/Foo_(bar)")
        'https://en.wikipedia.org/wiki/Foo_%28bar%29'

    """
    return url.replace(" ", "%20").replace("(", "%28").replace(")", "%29").replace("<", "%3C").replace(">", "%3E")


def escape_link_title(title: str) -> str:
    """Escape double quotes and backslashes in a link title."""
    return strip_control_characters(title).replace("\\", "\\\\").replace('"', '\\"').replace("\n", " ")
