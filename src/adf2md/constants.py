#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for the adf2md library.

Constants are organized by category:
1. Type Definitions - Literal types used by the options classes
2. Document Format - Node and mark kind names of the document tree
3. Traversal Limits - Depth guard defaults and bounds
4. Markdown Formatting - Default renderer settings
5. Security - Link scheme handling
6. CLI - Exit codes and configuration discovery
"""

from __future__ import annotations

from typing import Literal

# =============================================================================
# Type Definitions
# =============================================================================

UnderlineMode = Literal["html", "ignore"]
SubSupMode = Literal["html", "ignore"]
HardBreakStyle = Literal["spaces", "backslash"]
CodeFenceChar = Literal["`", "~"]
TableMode = Literal["auto", "list"]

# =============================================================================
# Document Format
# =============================================================================

DOCUMENT_VERSION = 1
DOC_TYPE = "doc"

BLOCK_NODE_TYPES = frozenset(
    {
        "doc",
        "paragraph",
        "heading",
        "bulletList",
        "orderedList",
        "listItem",
        "blockquote",
        "codeBlock",
        "rule",
        "table",
        "tableRow",
        "tableHeader",
        "tableCell",
    }
)

INLINE_NODE_TYPES = frozenset(
    {
        "text",
        "hardBreak",
        "mention",
        "emoji",
        "inlineCard",
    }
)

LIST_NODE_TYPES = frozenset({"bulletList", "orderedList"})
TABLE_CELL_TYPES = frozenset({"tableHeader", "tableCell"})

# =============================================================================
# Traversal Limits
# =============================================================================

DEFAULT_MAX_DEPTH = 64
# Each tree level costs a handful of Python frames, keep well below sys.getrecursionlimit()
MAX_DEPTH_LIMIT = 128
DEFAULT_DEPTH_PLACEHOLDER = "…"

# =============================================================================
# Markdown Formatting
# =============================================================================

DEFAULT_ESCAPE_SPECIAL = True
DEFAULT_UNDERLINE_MODE: UnderlineMode = "html"
DEFAULT_SUBSUP_MODE: SubSupMode = "html"
DEFAULT_HARD_BREAK_STYLE: HardBreakStyle = "spaces"
DEFAULT_BULLET_SYMBOLS = "-"
DEFAULT_LIST_INDENT_WIDTH: int | None = None
DEFAULT_CODE_FENCE_CHAR: CodeFenceChar = "`"
DEFAULT_CODE_FENCE_MIN = 3
DEFAULT_LINK_LABEL_MAX_LENGTH = 60
DEFAULT_TABLE_MODE: TableMode = "auto"

# Markdown characters escaped wherever they appear in literal text
MARKDOWN_ALWAYS_ESCAPE = "\\`*_[]"
# Markdown characters escaped only as the first non-blank character of a line
MARKDOWN_LINE_START_ESCAPE = "#->"

TABLE_CELL_SEPARATOR = " | "
TABLE_LINE_BREAK = "<br>"

# =============================================================================
# Plain Text Formatting
# =============================================================================

DEFAULT_PARAGRAPH_SEPARATOR = "\n\n"
DEFAULT_TABLE_CELL_SEPARATOR = " | "

# =============================================================================
# Security
# =============================================================================

DANGEROUS_SCHEMES = (
    "javascript:",
    "vbscript:",
    "data:",
)

# =============================================================================
# CLI
# =============================================================================

EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_VALIDATION_ERROR = 2
EXIT_PARSING_ERROR = 3
EXIT_DEPENDENCY_ERROR = 4

CONFIG_FILENAMES = [".adf2md.toml", ".adf2md.yaml", ".adf2md.yml", ".adf2md.json", "pyproject.toml"]
