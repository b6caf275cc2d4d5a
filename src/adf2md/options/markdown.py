#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for Markdown rendering.

This module defines the options controlling how document trees are
turned into Markdown text.
"""
# src/adf2md/options/markdown.py


from __future__ import annotations

from dataclasses import dataclass, field

from adf2md.constants import (
    DEFAULT_BULLET_SYMBOLS,
    DEFAULT_CODE_FENCE_CHAR,
    DEFAULT_CODE_FENCE_MIN,
    DEFAULT_ESCAPE_SPECIAL,
    DEFAULT_HARD_BREAK_STYLE,
    DEFAULT_LINK_LABEL_MAX_LENGTH,
    DEFAULT_LIST_INDENT_WIDTH,
    DEFAULT_SUBSUP_MODE,
    DEFAULT_TABLE_MODE,
    DEFAULT_UNDERLINE_MODE,
    CodeFenceChar,
    HardBreakStyle,
    SubSupMode,
    TableMode,
    UnderlineMode,
)
from adf2md.options.base import BaseRendererOptions


@dataclass(frozen=True)
class MarkdownRendererOptions(BaseRendererOptions):
    """Markdown rendering options.

    Parameters
    ----------
    escape_special : bool, default True
        Escape Markdown-significant characters in literal text.
    underline_mode : {"html", "ignore"}, default "html"
        How to render underline marks, Markdown has no native syntax:
        - "html": <u>text</u>
        - "ignore": leave the text unwrapped
    subsup_mode : {"html", "ignore"}, default "html"
        How to render subscript/superscript marks:
        - "html": <sub>text</sub> / <sup>text</sup>
        - "ignore": leave the text unwrapped
    hard_break_style : {"spaces", "backslash"}, default "spaces"
        Markdown form of a hard line break: two trailing spaces or a
        trailing backslash before the newline.
    bullet_symbols : str, default "-"
        Characters used for bullet list markers, cycled by nesting depth.
    list_indent_width : int or None, default None
        Spaces used to indent the continuation lines of a list item
        (nested lists, further paragraphs). None aligns them with the
        item text, i.e. uses the marker width.
    code_fence_char : {"`", "~"}, default "`"
        Character used for code block fences.
    code_fence_min : int, default 3
        Minimum fence length; fences grow past any run in the body.
    link_label_max_length : int, default 60
        Longest URL shown as the label of a card link before truncation.
    table_mode : {"auto", "list"}, default "auto"
        - "auto": pipe table when the table is regular, bullet rows otherwise
        - "list": always render tables as bullet rows

    Examples
    --------
        >>> options = MarkdownRendererOptions(underline_mode="ignore")
        >>> options.create_updated(max_depth=16).max_depth
        16

    """

    escape_special: bool = field(
        default=DEFAULT_ESCAPE_SPECIAL,
        metadata={
            "help": "Escape special Markdown characters in text",
            "cli_name": "no-escape-special",
            "importance": "core",
        },
    )
    underline_mode: UnderlineMode = field(
        default=DEFAULT_UNDERLINE_MODE,
        metadata={
            "help": "How to render underline marks",
            "choices": ["html", "ignore"],
            "importance": "core",
        },
    )
    subsup_mode: SubSupMode = field(
        default=DEFAULT_SUBSUP_MODE,
        metadata={
            "help": "How to render subscript/superscript marks",
            "choices": ["html", "ignore"],
            "importance": "advanced",
        },
    )
    hard_break_style: HardBreakStyle = field(
        default=DEFAULT_HARD_BREAK_STYLE,
        metadata={
            "help": "Markdown form of hard line breaks",
            "choices": ["spaces", "backslash"],
            "importance": "advanced",
        },
    )
    bullet_symbols: str = field(
        default=DEFAULT_BULLET_SYMBOLS,
        metadata={
            "help": "Characters to cycle through for nested bullet lists",
            "importance": "advanced",
        },
    )
    list_indent_width: int | None = field(
        default=DEFAULT_LIST_INDENT_WIDTH,
        metadata={
            "help": "Spaces per nested list level (default: marker width)",
            "type": int,
            "importance": "advanced",
        },
    )
    code_fence_char: CodeFenceChar = field(
        default=DEFAULT_CODE_FENCE_CHAR,
        metadata={
            "help": "Character used for code block fences",
            "choices": ["`", "~"],
            "importance": "advanced",
        },
    )
    code_fence_min: int = field(
        default=DEFAULT_CODE_FENCE_MIN,
        metadata={
            "help": "Minimum length of code block fences",
            "type": int,
            "importance": "advanced",
        },
    )
    link_label_max_length: int = field(
        default=DEFAULT_LINK_LABEL_MAX_LENGTH,
        metadata={
            "help": "Longest URL shown as a card link label before truncation",
            "type": int,
            "importance": "advanced",
        },
    )
    table_mode: TableMode = field(
        default=DEFAULT_TABLE_MODE,
        metadata={
            "help": "Render tables as pipe tables when regular, or always as bullet rows",
            "choices": ["auto", "list"],
            "importance": "core",
        },
    )

    def __post_init__(self) -> None:
        """Validate option values.

        Raises
        ------
        ValueError
            If any field value is outside its valid range.

        """
        super().__post_init__()

        if self.underline_mode not in ("html", "ignore"):
            raise ValueError(f"underline_mode must be 'html' or 'ignore', got {self.underline_mode!r}")
        if self.subsup_mode not in ("html", "ignore"):
            raise ValueError(f"subsup_mode must be 'html' or 'ignore', got {self.subsup_mode!r}")
        if self.hard_break_style not in ("spaces", "backslash"):
            raise ValueError(f"hard_break_style must be 'spaces' or 'backslash', got {self.hard_break_style!r}")
        if self.table_mode not in ("auto", "list"):
            raise ValueError(f"table_mode must be 'auto' or 'list', got {self.table_mode!r}")
        if self.code_fence_char not in ("`", "~"):
            raise ValueError(f"code_fence_char must be '`' or '~', got {self.code_fence_char!r}")

        if not self.bullet_symbols or any(symbol not in "-*+" for symbol in self.bullet_symbols):
            raise ValueError(f"bullet_symbols must only contain '-', '*' or '+', got {self.bullet_symbols!r}")

        if self.list_indent_width is not None and not 1 <= self.list_indent_width <= 8:
            raise ValueError(f"list_indent_width must be between 1 and 8, got {self.list_indent_width}")

        if self.code_fence_min < 3:
            raise ValueError(f"code_fence_min must be at least 3, got {self.code_fence_min}")

        if self.link_label_max_length < 4:
            raise ValueError(f"link_label_max_length must be at least 4, got {self.link_label_max_length}")
