"""adf2md - Atlassian Document Format to Markdown conversion.

adf2md turns rich-text document trees, as returned by issue trackers and
wikis for descriptions and comments, into readable Markdown, and wraps
plain strings or partially formed trees into valid documents for the
opposite direction.

Documents are plain ``dict``/``list`` values exactly as decoded from
JSON. Rendering never raises for malformed input: unknown node kinds
degrade to their children and overly deep branches are truncated.

Requirements
------------
- Python 3.10+

Examples
--------
Render a document to Markdown:

    >>> from adf2md import render
    >>> render({"version": 1, "type": "doc", "content": [
    ...     {"type": "heading", "attrs": {"level": 1}, "content": [{"type": "text", "text": "Title"}]},
    ... ]})
    '# Title\\n\\n'

Wrap a plain string into a document:

    >>> from adf2md import coerce
    >>> coerce("first\\n\\nsecond")["content"][1]
    {'type': 'paragraph', 'content': [{'type': 'text', 'text': 'second'}]}

See Also
--------
adf2md.renderers : Renderer classes
adf2md.options : Renderer options

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

# Check Python version before any imports
import sys

if sys.version_info < (3, 10):
    raise ImportError(
        "adf2md requires Python 3.10 or later. "
        f"You are using Python {sys.version_info.major}.{sys.version_info.minor}."
    )

__version__ = "1.0.0"

from adf2md.api import coerce, coerce_optional, extract_plain_text, is_document, render
from adf2md.exceptions import Adf2MdError, DependencyError, InvalidOptionsError, ParsingError, ValidationError
from adf2md.options import BaseRendererOptions, MarkdownRendererOptions, PlainTextOptions
from adf2md.renderers import MarkdownRenderer, PlainTextRenderer

__all__ = [
    "__version__",
    "render",
    "coerce",
    "coerce_optional",
    "extract_plain_text",
    "is_document",
    "MarkdownRenderer",
    "PlainTextRenderer",
    "BaseRendererOptions",
    "MarkdownRendererOptions",
    "PlainTextOptions",
    "Adf2MdError",
    "DependencyError",
    "InvalidOptionsError",
    "ParsingError",
    "ValidationError",
]
