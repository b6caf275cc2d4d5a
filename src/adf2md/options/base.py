"""Base classes for renderer options.

This module defines the foundation classes for the options used by the
adf2md renderers.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field, replace
from typing import Any

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self

from adf2md.constants import DEFAULT_DEPTH_PLACEHOLDER, DEFAULT_MAX_DEPTH, MAX_DEPTH_LIMIT


@dataclass(frozen=True)
class CloneFrozenMixin:
    """Mixin providing frozen dataclass cloning capabilities.

    This mixin adds the ability to create modified copies of frozen dataclass
    instances, which is useful for immutable configuration objects.
    """

    def create_updated(self, **kwargs: Any) -> Self:
        """Create a new instance with updated field values.

        Parameters
        ----------
        **kwargs : Any
            Field names and their new values

        Returns
        -------
        Self
            New instance with specified fields updated

        """
        return replace(self, **kwargs)


@dataclass(frozen=True)
class BaseRendererOptions(CloneFrozenMixin):
    """Base class for all renderer options.

    Parameters
    ----------
    max_depth : int, default 64
        Maximum nesting depth the traversal descends to. Deeper branches
        are replaced by ``depth_placeholder``.
    depth_placeholder : str, default "…"
        Text rendered in place of a branch cut off by the depth guard.

    Notes
    -----
    Subclasses should define format-specific rendering options as frozen dataclass fields.

    """

    max_depth: int = field(
        default=DEFAULT_MAX_DEPTH,
        metadata={
            "help": f"Maximum nesting depth rendered before branches are truncated (1-{MAX_DEPTH_LIMIT})",
            "type": int,
            "importance": "security",
        },
    )
    depth_placeholder: str = field(
        default=DEFAULT_DEPTH_PLACEHOLDER,
        metadata={
            "help": "Text rendered in place of a branch that exceeds max_depth",
            "importance": "advanced",
        },
    )

    def __post_init__(self) -> None:
        """Validate numeric ranges for base renderer options.

        Raises
        ------
        ValueError
            If any field value is outside its valid range.

        """
        if isinstance(self.max_depth, bool) or not isinstance(self.max_depth, int):
            raise ValueError(f"max_depth must be an integer, got {type(self.max_depth).__name__}")
        if not 1 <= self.max_depth <= MAX_DEPTH_LIMIT:
            raise ValueError(f"max_depth must be between 1 and {MAX_DEPTH_LIMIT}, got {self.max_depth}")
