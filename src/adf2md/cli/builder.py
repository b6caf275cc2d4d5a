#  Copyright (c) 2025 Tom Villani, Ph.D.

"""Dynamic CLI argument building for adf2md.

Renderer options are frozen dataclasses whose fields carry argparse
hints in their metadata (``help``, ``choices``, ``type``, ``cli_name``).
This module turns those fields into command-line flags and turns parsed
flags, merged with configuration file values, back into option objects.

"""

from __future__ import annotations

import argparse
import json
from dataclasses import MISSING, Field, fields
from typing import Any, Dict, Iterable, Type, TypeVar

from adf2md.constants import (
    EXIT_DEPENDENCY_ERROR,
    EXIT_ERROR,
    EXIT_PARSING_ERROR,
    EXIT_VALIDATION_ERROR,
)
from adf2md.exceptions import DependencyError, ParsingError, ValidationError
from adf2md.options.base import BaseRendererOptions

OptionsT = TypeVar("OptionsT", bound=BaseRendererOptions)


def snake_to_kebab(name: str) -> str:
    """Convert a snake_case field name to a kebab-case flag name.

    Examples
    --------
    >>> snake_to_kebab("underline_mode")
    'underline-mode'

    """
    return name.replace("_", "-")


def get_argument_kwargs(field: Field) -> tuple[str, Dict[str, Any]]:
    """Build the flag name and argparse kwargs for one options field.

    Boolean fields that default to True become ``store_false`` flags
    named by the ``cli_name`` metadata entry (e.g. ``--no-escape-special``).
    Every flag uses ``argparse.SUPPRESS`` as default, so only flags given
    on the command line show up in the parsed namespace.

    Parameters
    ----------
    field : dataclasses.Field
        Field of a renderer options dataclass

    Returns
    -------
    tuple of (str, dict)
        The flag (e.g. ``--max-depth``) and the add_argument kwargs

    """
    metadata = dict(field.metadata)
    cli_name = f"--{metadata.get('cli_name', snake_to_kebab(field.name))}"
    help_text = metadata.get("help", f"Configure {field.name}")

    kwargs: Dict[str, Any] = {"dest": field.name, "default": argparse.SUPPRESS}

    if field.default is True or field.default is False:
        kwargs["action"] = "store_false" if field.default else "store_true"
        kwargs["help"] = help_text
        return cli_name, kwargs

    if "choices" in metadata:
        kwargs["choices"] = metadata["choices"]
    elif metadata.get("type") in (int, float):
        kwargs["type"] = metadata["type"]

    if field.default is not MISSING:
        help_text += f" (default: {field.default!r})"
    kwargs["help"] = help_text
    return cli_name, kwargs


def add_options_arguments(
    parser: argparse.ArgumentParser, options_classes: Iterable[Type[BaseRendererOptions]], title: str
) -> None:
    """Add one flag per field of the given options classes.

    Fields shared between classes (inherited from BaseRendererOptions)
    are added once.

    """
    group = parser.add_argument_group(title)
    seen: set[str] = set()
    for options_class in options_classes:
        for field in fields(options_class):
            if field.name in seen or field.metadata.get("exclude_from_cli", False):
                continue
            seen.add(field.name)
            cli_name, kwargs = get_argument_kwargs(field)
            group.add_argument(cli_name, **kwargs)


def build_options(
    options_class: Type[OptionsT], config: Dict[str, Any], args: argparse.Namespace, section: str
) -> OptionsT:
    """Create an options instance from configuration values and parsed flags.

    Priority, highest first: explicit command-line flags, the
    ``section`` table of the configuration, top-level configuration keys.

    Parameters
    ----------
    options_class : type
        Renderer options dataclass to instantiate
    config : dict
        Loaded configuration file contents
    args : argparse.Namespace
        Parsed command-line arguments
    section : str
        Name of the configuration table specific to this options class

    Returns
    -------
    BaseRendererOptions
        Instance of options_class

    Raises
    ------
    argparse.ArgumentTypeError
        If a configuration value is invalid for its field

    """
    field_names = {field.name for field in fields(options_class)}

    values: Dict[str, Any] = {key: value for key, value in config.items() if key in field_names}
    section_values = config.get(section, {})
    if isinstance(section_values, dict):
        values.update({key: value for key, value in section_values.items() if key in field_names})

    values.update({name: getattr(args, name) for name in field_names if hasattr(args, name)})

    try:
        return options_class(**values)
    except (TypeError, ValueError) as e:
        raise argparse.ArgumentTypeError(f"Invalid {options_class.__name__} configuration: {e}") from e


def parse_indent(value: str) -> int:
    """Parse a non-negative JSON indentation width."""
    try:
        indent = int(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"Indent must be an integer, got {value!r}") from e
    if indent < 0:
        raise argparse.ArgumentTypeError(f"Indent must be non-negative, got {indent}")
    return indent


def get_exit_code_for_exception(exception: Exception) -> int:
    """Map an exception to an appropriate CLI exit code.

    Examples
    --------
    >>> get_exit_code_for_exception(ParsingError("bad json"))
    3

    """
    if isinstance(exception, (DependencyError, ImportError)):
        return EXIT_DEPENDENCY_ERROR

    # Decoding errors are ValueErrors, check them first
    if isinstance(exception, (ParsingError, json.JSONDecodeError, UnicodeDecodeError)):
        return EXIT_PARSING_ERROR

    if isinstance(exception, (ValidationError, argparse.ArgumentTypeError, ValueError)):
        return EXIT_VALIDATION_ERROR

    return EXIT_ERROR
