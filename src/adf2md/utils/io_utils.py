#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/adf2md/utils/io_utils.py
"""Input and output helpers shared by the renderers and the CLI."""

from __future__ import annotations

import io
import json
import sys
from pathlib import Path
from typing import IO, Any, Union, cast

from adf2md.exceptions import ParsingError


def read_text(source: Union[str, Path, IO[str], IO[bytes], None]) -> str:
    """Read text from a path, a file-like object, or stdin.

    Parameters
    ----------
    source : str, Path, IO or None
        ``None`` or ``"-"`` reads standard input. Binary streams are
        decoded as UTF-8.

    Returns
    -------
    str
        The text content

    """
    if source is None or source == "-":
        return sys.stdin.read()
    if isinstance(source, (str, Path)):
        return Path(source).read_text(encoding="utf-8")
    raw = source.read()
    if isinstance(raw, bytes):
        return raw.decode("utf-8", errors="replace")
    return raw


def load_json(text: str) -> Any:
    """Decode JSON text.

    Raises
    ------
    ParsingError
        If the text is not valid JSON, or nests too deeply to decode

    """
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise ParsingError(f"Invalid JSON input: {e}", parsing_stage="json_parsing", original_error=e) from e
    except RecursionError as e:
        raise ParsingError(
            "JSON input is nested too deeply to decode", parsing_stage="json_parsing", original_error=e
        ) from e


def write_content(content: str, output: Union[str, Path, IO[bytes], IO[str]]) -> None:
    """Write text content to a file path or a file-like object.

    Parameters
    ----------
    content : str
        Content to write
    output : str, Path, IO[bytes] or IO[str]
        Output destination. Paths are written as UTF-8; binary streams
        receive UTF-8 encoded bytes.

    Raises
    ------
    TypeError
        If output type is not supported

    Examples
    --------
        >>> from io import BytesIO
        >>> buffer = BytesIO()
        >>> write_content("# Title", buffer)
        >>> buffer.getvalue()
        b'# Title'

    """
    if isinstance(output, (str, Path)):
        Path(output).write_text(content, encoding="utf-8")
        return

    if not hasattr(output, "write"):
        raise TypeError(f"Unsupported output type: {type(output).__name__}")

    # Detect binary or text mode, falling back to the mode attribute of file objects
    if isinstance(output, io.TextIOBase):
        is_binary_mode = False
    elif isinstance(output, (io.BufferedIOBase, io.RawIOBase)):
        is_binary_mode = True
    else:
        mode = getattr(output, "mode", "")
        is_binary_mode = isinstance(mode, str) and "b" in mode

    if is_binary_mode:
        cast(IO[bytes], output).write(content.encode("utf-8"))
    else:
        cast(IO[str], output).write(content)
