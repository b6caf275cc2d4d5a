"""Command-line interface for the adf2md conversion library.

Two subcommands are provided: ``render`` turns a document (JSON) into
Markdown or plain text, ``coerce`` wraps plain text or loose JSON into a
valid document.

Configuration File Support
--------------------------
Renderer options may be set in ``.adf2md.toml``, ``.adf2md.yaml``,
``.adf2md.json`` or a ``[tool.adf2md]`` table of ``pyproject.toml``,
discovered from the working directory upwards, given with ``--config``
or named by the ``ADF2MD_CONFIG`` environment variable. Command-line
flags always override configuration values.

Examples
--------
Render a document read from a file::

    $ adf2md render issue.json

Render from stdin with backslash hard breaks::

    $ curl -s ... | jq .fields.description | adf2md render - --hard-break-style backslash

Extract plain text::

    $ adf2md render comment.json --plain

Pretty-print in the terminal::

    $ adf2md render issue.json --rich

Wrap plain text into a document::

    $ echo "first paragraph" | adf2md coerce --indent 0

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.
import argparse
import json
import logging
import os
import sys

from adf2md import __version__
from adf2md.api import coerce, extract_plain_text, render
from adf2md.cli.builder import add_options_arguments, build_options, get_exit_code_for_exception, parse_indent
from adf2md.cli.config import CONFIG_ENV_VAR, load_config_with_priority
from adf2md.constants import EXIT_SUCCESS, EXIT_VALIDATION_ERROR
from adf2md.exceptions import Adf2MdError
from adf2md.logging_utils import configure_logging
from adf2md.options.markdown import MarkdownRendererOptions
from adf2md.options.plaintext import PlainTextOptions
from adf2md.utils.decorators import debug_timer, requires_dependencies
from adf2md.utils.io_utils import load_json, read_text, write_content

logger = logging.getLogger(__name__)


def _create_common_parser() -> argparse.ArgumentParser:
    """Create the parent parser holding flags shared by every subcommand."""
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--config",
        type=str,
        metavar="PATH",
        help=f"Load renderer options from a TOML, YAML or JSON file (default: auto-discovery, or ${CONFIG_ENV_VAR})",
    )
    common.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
        help="Set logging level for debugging (default: WARNING)",
    )
    common.add_argument(
        "--log-file",
        type=str,
        metavar="PATH",
        help="Write log messages to specified file in addition to console output",
    )
    common.add_argument(
        "--trace",
        action="store_true",
        help="Enable trace mode with very verbose logging and timing information",
    )
    return common


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the adf2md command.

    Returns
    -------
    argparse.ArgumentParser
        Parser with the ``render`` and ``coerce`` subcommands

    """
    common = _create_common_parser()

    parser = argparse.ArgumentParser(
        prog="adf2md",
        description="Render Atlassian Document Format (ADF) documents to Markdown, or wrap text into ADF",
    )
    parser.add_argument("--version", "-v", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")
    subparsers.required = True

    render_parser = subparsers.add_parser(
        "render",
        parents=[common],
        help="Render an ADF document (JSON) to Markdown",
        description="Render an ADF document, a node or a list of nodes (JSON) to Markdown or plain text",
    )
    render_parser.add_argument("input", nargs="?", default="-", help="Input JSON file, '-' for stdin (default)")
    render_parser.add_argument("--out", "-o", dest="output", metavar="PATH", help="Output file (default: stdout)")
    render_parser.add_argument(
        "--plain", action="store_true", help="Extract plain text instead of rendering Markdown"
    )
    render_parser.add_argument(
        "--rich", action="store_true", help="Pretty-print the result in the terminal (requires adf2md[rich])"
    )
    add_options_arguments(render_parser, [MarkdownRendererOptions, PlainTextOptions], "rendering options")

    coerce_parser = subparsers.add_parser(
        "coerce",
        parents=[common],
        help="Wrap plain text or loose JSON into a valid ADF document",
        description="Wrap plain text (split into paragraphs on blank lines) into a valid ADF document",
    )
    coerce_parser.add_argument("input", nargs="?", default="-", help="Input text file, '-' for stdin (default)")
    coerce_parser.add_argument("--out", "-o", dest="output", metavar="PATH", help="Output file (default: stdout)")
    coerce_parser.add_argument(
        "--json", action="store_true", help="Parse the input as JSON before coercing it (nodes, lists, documents)"
    )
    coerce_parser.add_argument(
        "--indent", type=parse_indent, default=2, help="Indentation of the JSON output (default: 2, 0 for compact)"
    )

    return parser


def _setup_logging_level(parsed_args: argparse.Namespace) -> None:
    """Set up logging level based on command-line arguments."""
    log_level = logging.DEBUG if parsed_args.trace else getattr(logging, parsed_args.log_level.upper())
    configure_logging(log_level, log_file=parsed_args.log_file, trace_mode=parsed_args.trace)


@requires_dependencies("rich output", [("rich", "rich")], extra="rich")
def format_rich(content: str, markdown: bool = True) -> str:
    """Format content for terminal display using rich.

    Parameters
    ----------
    content : str
        Markdown (or plain text) to format
    markdown : bool, default True
        Interpret content as Markdown

    Returns
    -------
    str
        Content with terminal styling escapes

    Raises
    ------
    DependencyError
        If rich is not installed

    """
    from rich.console import Console
    from rich.markdown import Markdown

    console = Console()
    with console.capture() as capture:
        console.print(Markdown(content) if markdown else content)
    return capture.get()


def _emit(content: str, output: str | None) -> None:
    if output:
        write_content(content, output)
        logger.info(f"Wrote {len(content)} characters to {output}")
    else:
        sys.stdout.write(content)


def run_render(parsed_args: argparse.Namespace, config: dict) -> int:
    """Execute the ``render`` subcommand."""
    text = read_text(parsed_args.input)
    with debug_timer(logger, "Parsing (json)"):
        document = load_json(text)

    if parsed_args.plain:
        options = build_options(PlainTextOptions, config, parsed_args, section="plaintext")
        result = extract_plain_text(document, options)
        if result:
            result += "\n"
    else:
        markdown_options = build_options(MarkdownRendererOptions, config, parsed_args, section="markdown")
        result = render(document, markdown_options)

    if parsed_args.rich and not parsed_args.output:
        result = format_rich(result, markdown=not parsed_args.plain)

    _emit(result, parsed_args.output)
    return EXIT_SUCCESS


def run_coerce(parsed_args: argparse.Namespace) -> int:
    """Execute the ``coerce`` subcommand."""
    text = read_text(parsed_args.input)
    value = load_json(text) if parsed_args.json else text
    document = coerce(value)
    indent = parsed_args.indent or None
    _emit(json.dumps(document, indent=indent, ensure_ascii=False) + "\n", parsed_args.output)
    return EXIT_SUCCESS


def main(args: list[str] | None = None) -> int:
    """Execute the CLI entry point.

    Parameters
    ----------
    args : list of str, optional
        Command-line arguments, defaults to ``sys.argv[1:]``

    Returns
    -------
    int
        Process exit code

    """
    parser = create_parser()
    parsed_args = parser.parse_args(args)

    _setup_logging_level(parsed_args)

    try:
        config = load_config_with_priority(parsed_args.config, os.environ.get(CONFIG_ENV_VAR))
    except argparse.ArgumentTypeError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_VALIDATION_ERROR

    try:
        if parsed_args.command == "coerce":
            return run_coerce(parsed_args)
        return run_render(parsed_args, config)
    except (Adf2MdError, argparse.ArgumentTypeError, OSError, UnicodeDecodeError) as e:
        print(f"Error: {e}", file=sys.stderr)
        logger.debug("Command failed", exc_info=True)
        return get_exit_code_for_exception(e)


if __name__ == "__main__":
    sys.exit(main())
