"""The major exported API functions for document conversion."""

#  Copyright (c) 2025 Tom Villani, Ph.D.
# src/adf2md/api.py
import logging
from dataclasses import fields
from typing import Any, Optional, TypeVar

from adf2md.adf.builder import coerce, coerce_optional
from adf2md.adf.nodes import is_document
from adf2md.options.base import BaseRendererOptions
from adf2md.options.markdown import MarkdownRendererOptions
from adf2md.options.plaintext import PlainTextOptions
from adf2md.renderers.markdown import MarkdownRenderer
from adf2md.renderers.plaintext import PlainTextRenderer
from adf2md.utils.decorators import debug_timer

logger = logging.getLogger(__name__)

OptionsT = TypeVar("OptionsT", bound=BaseRendererOptions)


def _resolve_options(options_class: type[OptionsT], options: Optional[OptionsT], kwargs: dict) -> Optional[OptionsT]:
    """Merge keyword overrides into an options instance.

    Parameters
    ----------
    options_class : type
        Options dataclass used when no instance is given
    options : BaseRendererOptions or None
        Base options
    kwargs : dict
        Field overrides. Keys that are not fields of options_class are
        ignored with a warning.

    Returns
    -------
    BaseRendererOptions or None
        The options to use, or None for the renderer defaults

    """
    if not kwargs:
        return options

    valid_fields = {f.name for f in fields(options_class)}
    known = {key: value for key, value in kwargs.items() if key in valid_fields}
    for key in kwargs.keys() - known.keys():
        logger.warning(f"Ignoring unknown {options_class.__name__} option: {key}")

    if options is not None:
        return options.create_updated(**known)
    return options_class(**known)


def render(node: Any, options: Optional[MarkdownRendererOptions] = None, **kwargs: Any) -> str:
    """Render a document, node or fragment to Markdown.

    Never raises for malformed input: unknown node kinds degrade to their
    children, invalid attributes are treated as absent and overly deep
    branches are replaced by a placeholder.

    Parameters
    ----------
    node : Any
        A document, a bare node, a list of nodes, a plain string
        (returned unchanged) or None (rendered as an empty string)
    options : MarkdownRendererOptions, optional
        Markdown formatting options
    kwargs : Any
        Individual option overrides (e.g. ``underline_mode="ignore"``)

    Returns
    -------
    str
        Markdown text

    Raises
    ------
    ValueError
        If an option override has an invalid value
    InvalidOptionsError
        If options is not a MarkdownRendererOptions

    Examples
    --------
        >>> render({"version": 1, "type": "doc", "content": [
        ...     {"type": "paragraph", "content": [{"type": "text", "text": "Hi", "marks": [{"type": "strong"}]}]}
        ... ]})
        '**Hi**\\n\\n'
        >>> render(None)
        ''

    """
    final_options = _resolve_options(MarkdownRendererOptions, options, kwargs)
    renderer = MarkdownRenderer(final_options)
    with debug_timer(logger, "Rendering (markdown)"):
        return renderer.render_to_string(node)


def extract_plain_text(node: Any, options: Optional[PlainTextOptions] = None, **kwargs: Any) -> str:
    """Extract the text content of a document, dropping all formatting.

    Parameters
    ----------
    node : Any
        A document, a bare node, a list of nodes, a plain string
        (returned unchanged) or None
    options : PlainTextOptions, optional
        Plain text options
    kwargs : Any
        Individual option overrides (e.g. ``paragraph_separator="\\n"``)

    Returns
    -------
    str
        Plain text without trailing whitespace

    Examples
    --------
        >>> extract_plain_text({"type": "paragraph", "content": [{"type": "text", "text": "Hi"}]})
        'Hi'

    """
    final_options = _resolve_options(PlainTextOptions, options, kwargs)
    renderer = PlainTextRenderer(final_options)
    with debug_timer(logger, "Rendering (plaintext)"):
        return renderer.render_to_string(node)


__all__ = [
    "coerce",
    "coerce_optional",
    "extract_plain_text",
    "is_document",
    "render",
]
