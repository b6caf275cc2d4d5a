"""Renderer options for adf2md.

All options are frozen dataclasses. Use ``create_updated()`` to derive a
modified copy.
"""

from adf2md.options.base import BaseRendererOptions, CloneFrozenMixin
from adf2md.options.markdown import MarkdownRendererOptions
from adf2md.options.plaintext import PlainTextOptions

__all__ = [
    "BaseRendererOptions",
    "CloneFrozenMixin",
    "MarkdownRendererOptions",
    "PlainTextOptions",
]
