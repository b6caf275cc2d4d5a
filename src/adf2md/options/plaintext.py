#  Copyright (c) 2025 Tom Villani, Ph.D.
# adf2md/options/plaintext.py
"""Configuration options for plain text extraction.

This module defines options for rendering document trees to plain text.
"""

from dataclasses import dataclass, field

from adf2md.constants import DEFAULT_PARAGRAPH_SEPARATOR, DEFAULT_TABLE_CELL_SEPARATOR
from adf2md.options.base import BaseRendererOptions


@dataclass(frozen=True)
class PlainTextOptions(BaseRendererOptions):
    r"""Configuration options for plain text extraction.

    All formatting is dropped, leaving only the text content.

    Parameters
    ----------
    paragraph_separator : str, default "\n\n"
        Separator placed after paragraphs and other block elements.
    table_cell_separator : str, default " | "
        Separator placed between the cells of a table row.

    """

    paragraph_separator: str = field(
        default=DEFAULT_PARAGRAPH_SEPARATOR,
        metadata={
            "help": "Separator between paragraphs and block elements",
            "importance": "core",
        },
    )
    table_cell_separator: str = field(
        default=DEFAULT_TABLE_CELL_SEPARATOR,
        metadata={
            "help": "Separator between table cells",
            "importance": "core",
        },
    )

    def __post_init__(self) -> None:
        """Validate options by calling parent validation."""
        super().__post_init__()
