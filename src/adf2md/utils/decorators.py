#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/adf2md/utils/decorators.py
"""Utility decorators for adf2md entry points.

This module provides the dependency check used by features backed by
optional packages, and a timing context manager for DEBUG logging.

"""

from __future__ import annotations

import importlib
import logging
import time
from contextlib import contextmanager
from functools import wraps
from typing import Any, Callable, Generator, List, Tuple

from adf2md.exceptions import DependencyError


def requires_dependencies(feature: str, packages: List[Tuple[str, str]], extra: str = "") -> Callable:
    """Check that optional packages are importable before calling a function.

    Parameters
    ----------
    feature : str
        Name of the feature (e.g., "rich output"), shown in the error message
    packages : list of tuple
        Required packages as (install_name, import_name) tuples
    extra : str, optional
        Name of the adf2md extra that installs the packages

    Returns
    -------
    Callable
        Decorated function that checks dependencies before execution

    Raises
    ------
    DependencyError
        If any required package is missing

    Examples
    --------
        >>> @requires_dependencies("rich output", [("rich", "rich")], extra="rich")
        ... def show(text):
        ...     from rich.console import Console
        ...     Console().print(text)

    """

    def decorator(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            missing = []
            original_error = None

            for install_name, import_name in packages:
                try:
                    # nosemgrep: python.lang.security.audit.non-literal-import.non-literal-import
                    importlib.import_module(import_name)
                except ImportError as e:
                    missing.append(install_name)
                    if original_error is None:
                        original_error = e

            if missing:
                install_command = f"pip install adf2md[{extra}]" if extra else f"pip install {' '.join(missing)}"
                raise DependencyError(
                    feature=feature,
                    missing_packages=missing,
                    install_command=install_command,
                    original_import_error=original_error,
                ) from original_error

            return func(*args, **kwargs)

        return wrapper

    return decorator


@contextmanager
def debug_timer(logger: logging.Logger, operation: str) -> Generator[None, None, None]:
    """Time a block of code and log the elapsed time at DEBUG level.

    Nothing is measured when the logger is not enabled for DEBUG.

    Parameters
    ----------
    logger : logging.Logger
        Logger instance to use for DEBUG messages
    operation : str
        Description of the operation being timed (e.g., "Rendering (markdown)")

    Examples
    --------
        >>> logger = logging.getLogger(__name__)
        >>> with debug_timer(logger, "Rendering (markdown)"):
        ...     result = renderer.render_to_string(doc)

    """
    if logger.isEnabledFor(logging.DEBUG):
        start_time = time.perf_counter()
        yield
        elapsed = time.perf_counter() - start_time
        logger.debug(f"{operation} completed in {elapsed:.4f}s")
    else:
        yield
