#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/adf2md/renderers/_marks.py
"""Mark wrapping for text runs.

A text run may carry several marks at once. Marks arrive as an unordered
list, so they are first normalised into a fixed priority order (see
``MarkType``) and then applied innermost first. The same set of marks
therefore always yields the same Markdown, whatever the input order.

"""

from __future__ import annotations

import logging
import re
from typing import Any, Mapping, Sequence

from adf2md.adf.nodes import MarkType, get_attrs, get_type
from adf2md.constants import DANGEROUS_SCHEMES
from adf2md.options.markdown import MarkdownRendererOptions
from adf2md.utils.escape import escape_link_destination, escape_link_title, escape_markdown, strip_control_characters

logger = logging.getLogger(__name__)

_BACKTICK_RUN_RE = re.compile(r"`+")

_DELIMITERS = {
    MarkType.STRONG: "**",
    MarkType.EM: "*",
    MarkType.STRIKE: "~~",
}


def normalize_marks(marks: Sequence[Any]) -> list[tuple[MarkType, Mapping[str, Any]]]:
    """Turn raw marks into a de-duplicated list sorted by wrap priority.

    Unknown marks and malformed entries are dropped. When a mark kind
    appears more than once, the first occurrence wins.

    Parameters
    ----------
    marks : sequence
        Raw ``marks`` value of a text node

    Returns
    -------
    list of (MarkType, Mapping)
        Marks with their attributes, innermost first

    Examples
    --------
        >>> [mark for mark, _ in normalize_marks([{"type": "em"}, {"type": "strong"}])]
        [<MarkType.STRONG: 1>, <MarkType.EM: 2>]

    """
    found: dict[MarkType, Mapping[str, Any]] = {}
    for mark in marks:
        if not isinstance(mark, Mapping):
            continue
        mark_type = MarkType.from_name(get_type(mark))
        if mark_type is None:
            logger.debug("Ignoring unsupported mark %r", mark.get("type"))
            continue
        found.setdefault(mark_type, get_attrs(mark))
    return sorted(found.items(), key=lambda item: item[0])


def code_span(text: str) -> str:
    """Wrap text in a code span whose fence cannot clash with the content.

    Examples
    --------
        >>> code_span("x = 1")
        '`x = 1`'
        >>> code_span("a `tick`")
        '`` a `tick` ``'

    """
    if not text:
        return ""
    longest = max((len(run) for run in _BACKTICK_RUN_RE.findall(text)), default=0)
    fence = "`" * (longest + 1)
    needs_padding = text.startswith("`") or text.endswith("`") or (
        text.startswith(" ") and text.endswith(" ") and text.strip(" ") != ""
    )
    if needs_padding:
        text = f" {text} "
    return f"{fence}{text}{fence}"


def _wrap_delimited(text: str, delimiter: str) -> str:
    """Wrap text in an emphasis-style delimiter, keeping outer whitespace outside."""
    core = text.strip()
    if not core:
        return text
    start = len(text) - len(text.lstrip())
    leading = text[:start]
    trailing = text[start + len(core):]
    return f"{leading}{delimiter}{core}{delimiter}{trailing}"


def plausible_href(href: Any) -> str | None:
    """Return a Markdown-safe link destination, or None if href is not usable.

    A usable href is a non-empty string without whitespace or control
    characters whose scheme is not a script or data scheme.

    Examples
    --------
        >>> plausible_href("https://example.com/a_(b)")
        'https://example.com/a_%28b%29'
        >>> plausible_href("javascript:alert(1)") is None
        True
        >>> plausible_href("") is None
        True

    """
    if not isinstance(href, str):
        return None
    href = href.strip()
    if not href:
        return None
    if strip_control_characters(href) != href or any(char.isspace() for char in href):
        return None
    if href.lower().startswith(DANGEROUS_SCHEMES):
        return None
    return escape_link_destination(href)


def wrap_marks(text: str, marks: Sequence[Any], options: MarkdownRendererOptions) -> str:
    """Apply the Markdown wrappers of every active mark to a text run.

    The text must already be escaped, except when a ``code`` mark is
    present: code spans are verbatim and receive the raw text.

    Parameters
    ----------
    text : str
        Escaped (or, under a code mark, raw) text
    marks : sequence
        Raw ``marks`` value of the text node
    options : MarkdownRendererOptions
        Controls underline and subscript/superscript output

    Returns
    -------
    str
        The wrapped text

    """
    result = text
    for mark_type, attrs in normalize_marks(marks):
        if mark_type is MarkType.CODE:
            result = code_span(result)
        elif mark_type in _DELIMITERS:
            result = _wrap_delimited(result, _DELIMITERS[mark_type])
        elif mark_type is MarkType.UNDERLINE:
            if options.underline_mode == "html" and result.strip():
                result = f"<u>{result}</u>"
        elif mark_type is MarkType.SUBSUP:
            tag = attrs.get("type")
            if options.subsup_mode == "html" and tag in ("sub", "sup") and result.strip():
                result = f"<{tag}>{result}</{tag}>"
        elif mark_type is MarkType.LINK:
            result = _wrap_link(result, attrs)
    return result


def _wrap_link(text: str, attrs: Mapping[str, Any]) -> str:
    href = plausible_href(attrs.get("href"))
    if href is None:
        logger.debug("Skipping link mark with unusable href %r", attrs.get("href"))
        return text
    title = attrs.get("title")
    if isinstance(title, str) and title.strip():
        return f'[{text}]({href} "{escape_link_title(title)}")'
    return f"[{text}]({href})"


def render_text_run(raw_text: str, marks: Sequence[Any], options: MarkdownRendererOptions) -> str:
    """Render the payload of a text node with its marks.

    Control characters are stripped. The text is escaped unless a code
    mark is present or escaping is disabled, then the marks are applied.

    Examples
    --------
        >>> opts = MarkdownRendererOptions()
        >>> render_text_run("a*b", [{"type": "strong"}], opts)
        '**a\\\\*b**'
        >>> render_text_run("a*b", [{"type": "code"}], opts)
        '`a*b`'

    """
    text = strip_control_characters(raw_text)
    if not text:
        return ""
    normalized = normalize_marks(marks)
    is_code = any(mark_type is MarkType.CODE for mark_type, _ in normalized)
    if not is_code and options.escape_special:
        text = escape_markdown(text)
    return wrap_marks(text, marks, options)
