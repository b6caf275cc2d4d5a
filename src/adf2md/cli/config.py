#  Copyright (c) 2025 Tom Villani, Ph.D.

"""Configuration file discovery and loading for the adf2md CLI.

Configuration keys are renderer option field names. Keys at the top
level apply to every renderer, a ``[markdown]`` or ``[plaintext]`` table
applies to one renderer only::

    # .adf2md.toml
    underline_mode = "ignore"
    max_depth = 32

    [plaintext]
    paragraph_separator = "\\n"

Lookup order: ``--config``, then ``$ADF2MD_CONFIG``, then the nearest
project file (working directory upwards) layered over the user file in
the home directory.

"""

import argparse
import json
import sys
from pathlib import Path

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib  # type: ignore[import-not-found,unused-ignore]
from typing import Any, Callable, Dict, Optional

import yaml

from adf2md.constants import CONFIG_FILENAMES

CONFIG_ENV_VAR = "ADF2MD_CONFIG"

PYPROJECT_FILENAME = "pyproject.toml"

_DEDICATED_FILENAMES = [name for name in CONFIG_FILENAMES if name != PYPROJECT_FILENAME]


def _parse_toml(config_path: Path) -> Any:
    with open(config_path, "rb") as f:
        return tomllib.load(f)


def _parse_json(config_path: Path) -> Any:
    with open(config_path, "r", encoding="utf-8") as f:
        return json.load(f)


def _parse_yaml(config_path: Path) -> Any:
    with open(config_path, "r", encoding="utf-8") as f:
        # An empty YAML file loads as None
        return yaml.safe_load(f) or {}


# suffix -> (format label, parser, decode error, name of the expected top-level value)
_FORMATS: Dict[str, tuple[str, Callable[[Path], Any], type[Exception], str]] = {
    ".toml": ("TOML", _parse_toml, tomllib.TOMLDecodeError, "a table"),
    ".json": ("JSON", _parse_json, json.JSONDecodeError, "an object"),
    ".yaml": ("YAML", _parse_yaml, yaml.YAMLError, "a mapping"),
    ".yml": ("YAML", _parse_yaml, yaml.YAMLError, "a mapping"),
}


def _read_config_data(config_path: Path) -> Any:
    """Parse a config file with the parser registered for its suffix.

    Raises
    ------
    argparse.ArgumentTypeError
        If the suffix is unknown, the file cannot be read, or it does not parse

    """
    suffix = config_path.suffix.lower()
    if suffix not in _FORMATS:
        raise argparse.ArgumentTypeError(f"Unsupported config file format: {suffix}. Use .json, .toml, or .yaml")

    label, parse, decode_error, _ = _FORMATS[suffix]
    try:
        return parse(config_path)
    except decode_error as e:
        raise argparse.ArgumentTypeError(f"Invalid {label} in config file {config_path}: {e}") from e
    except OSError as e:
        raise argparse.ArgumentTypeError(f"Error reading {label} config {config_path}: {e}") from e


def _pyproject_section(config_path: Path) -> Dict[str, Any]:
    """Return the ``[tool.adf2md]`` table of a pyproject.toml, empty if absent."""
    tool = _read_config_data(config_path).get("tool", {})
    section = tool.get("adf2md", {}) if isinstance(tool, dict) else {}
    if not isinstance(section, dict):
        raise argparse.ArgumentTypeError(
            f"[tool.adf2md] section in {config_path} must be a table, got {type(section).__name__}"
        )
    return section


def load_config_file(config_path: Path | str) -> Dict[str, Any]:
    """Load configuration from a JSON, TOML, YAML or pyproject.toml file.

    Parameters
    ----------
    config_path : Path or str
        Path to the configuration file. The format is chosen from the
        extension; a file named ``pyproject.toml`` contributes only its
        ``[tool.adf2md]`` table.

    Returns
    -------
    dict
        Configuration dictionary loaded from file

    Raises
    ------
    argparse.ArgumentTypeError
        If the file is missing, unreadable, malformed or does not hold a
        mapping at the top level

    Examples
    --------
    >>> config = load_config_file(".adf2md.toml")
    >>> config.get("underline_mode")
    'ignore'

    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise argparse.ArgumentTypeError(f"Configuration file does not exist: {config_path}")
    if not config_path.is_file():
        raise argparse.ArgumentTypeError(f"Configuration path is not a file: {config_path}")

    if config_path.name.lower() == PYPROJECT_FILENAME:
        return _pyproject_section(config_path)

    data = _read_config_data(config_path)
    if not isinstance(data, dict):
        label, _, _, expected = _FORMATS[config_path.suffix.lower()]
        raise argparse.ArgumentTypeError(
            f"{label} config file must contain {expected}, got {type(data).__name__}"
        )
    return data


def _has_pyproject_section(pyproject_path: Path) -> bool:
    try:
        return bool(_pyproject_section(pyproject_path))
    except argparse.ArgumentTypeError:
        # Unreadable pyproject.toml files are skipped during discovery
        return False


def _dedicated_file_in(directory: Path) -> Optional[Path]:
    for filename in _DEDICATED_FILENAMES:
        candidate = directory / filename
        if candidate.is_file():
            return candidate
    return None


def find_config_in_parents(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Find the nearest project configuration file.

    Each directory from ``start_dir`` up to the filesystem root is checked
    for the dedicated files (.adf2md.toml, .adf2md.yaml, .adf2md.yml,
    .adf2md.json), then for a pyproject.toml with a ``[tool.adf2md]``
    table.

    Parameters
    ----------
    start_dir : Path, optional
        Starting directory for search, defaults to current working directory

    Returns
    -------
    Path or None
        Path to first config file found, or None if not found

    """
    start = (start_dir or Path.cwd()).resolve()

    for directory in (start, *start.parents):
        found = _dedicated_file_in(directory)
        if found is not None:
            return found
        pyproject_path = directory / PYPROJECT_FILENAME
        if pyproject_path.is_file() and _has_pyproject_section(pyproject_path):
            return pyproject_path

    return None


def find_user_config() -> Optional[Path]:
    """Return the user-wide configuration file in the home directory, if any."""
    return _dedicated_file_in(Path.home())


def discover_config_file() -> Optional[Path]:
    """Discover a configuration file in the working tree, then in the home directory."""
    return find_config_in_parents() or find_user_config()


def merge_configs(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Merge two configuration dictionaries, nested tables recursively.

    Neither argument is modified.

    Examples
    --------
    >>> merge_configs({"plaintext": {"a": 1}, "max_depth": 8}, {"plaintext": {"b": 2}, "max_depth": 16})
    {'plaintext': {'a': 1, 'b': 2}, 'max_depth': 16}

    """
    merged = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = merge_configs(current, value)
        else:
            merged[key] = value
    return merged


def load_config_with_priority(
    explicit_path: Optional[str] = None, env_var_path: Optional[str] = None
) -> Dict[str, Any]:
    """Load the configuration that applies to this run.

    An explicit path (``--config``) wins over the environment variable
    path (``ADF2MD_CONFIG``); either one is used alone. Otherwise the
    discovered project file is merged over the user file in the home
    directory.

    Returns
    -------
    dict
        Loaded configuration dictionary (empty dict if no config found)

    Raises
    ------
    argparse.ArgumentTypeError
        If a config file is specified or found but cannot be loaded

    """
    chosen = explicit_path or env_var_path
    if chosen:
        return load_config_file(chosen)

    discovered = discover_config_file()
    if discovered is None:
        return {}

    config = load_config_file(discovered)
    user_config = find_user_config()
    if user_config is not None and user_config.resolve() != discovered.resolve():
        config = merge_configs(load_config_file(user_config), config)
    return config
