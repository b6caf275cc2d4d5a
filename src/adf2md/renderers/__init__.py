#  Copyright (c) 2025 Tom Villani, Ph.D.

# src/adf2md/renderers/__init__.py
"""Renderers turning document trees into text.

Available renderers:
- MarkdownRenderer: Render to Markdown text
- PlainTextRenderer: Render to plain, unformatted text

Renderers keep no per-call state, so a single instance can be shared
between threads.

Examples
--------
    >>> from adf2md.renderers import MarkdownRenderer
    >>> from adf2md.options import MarkdownRendererOptions
    >>> renderer = MarkdownRenderer(MarkdownRendererOptions(hard_break_style="backslash"))
    >>> markdown = renderer.render_to_string({"type": "paragraph", "content": [{"type": "text", "text": "a"}]})

"""

from adf2md.renderers.base import BaseRenderer, DepthGuard
from adf2md.renderers.markdown import ListContext, MarkdownRenderer
from adf2md.renderers.plaintext import PlainTextRenderer

__all__ = [
    "BaseRenderer",
    "DepthGuard",
    "ListContext",
    "MarkdownRenderer",
    "PlainTextRenderer",
]
