#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/adf2md/renderers/base.py
"""Base classes for document tree renderers.

This module defines the abstract base class shared by the renderers and
the traversal engine that drives them. The traversal threads the current
depth through every recursive call and consults a ``DepthGuard`` before
descending, so pathological or adversarial trees cannot exhaust the call
stack. Renderers keep no per-call state on the instance, which makes a
single renderer safe to share between threads.

"""

from __future__ import annotations

import logging
from abc import abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import IO, Any, Mapping, Union

from adf2md.adf.nodes import get_content
from adf2md.adf.visitors import AdfVisitor, ContextT
from adf2md.exceptions import InvalidOptionsError
from adf2md.options.base import BaseRendererOptions
from adf2md.utils.io_utils import write_content

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DepthGuard:
    """Bound on how deep the traversal may descend.

    Parameters
    ----------
    max_depth : int
        Deepest allowed node depth, the document root being depth 0

    Examples
    --------
        >>> guard = DepthGuard(max_depth=2)
        >>> guard.enter(2)
        True
        >>> guard.enter(3)
        False

    """

    max_depth: int

    def enter(self, depth: int) -> bool:
        """Return True if a node at ``depth`` may be rendered."""
        return depth <= self.max_depth


class BaseRenderer(AdfVisitor[ContextT]):
    """Abstract base class for all document tree renderers.

    Subclasses implement the ``visit_*`` methods of ``AdfVisitor`` and
    ``render_to_string``. They call ``_walk`` to render a child node and
    ``_walk_children`` to render all children of a node; both go
    through the depth guard.

    Parameters
    ----------
    options : BaseRendererOptions or None, default = None
        Format-specific rendering options

    """

    def __init__(self, options: BaseRendererOptions | None = None):
        """Initialize the renderer with optional configuration."""
        self.options = options or BaseRendererOptions()
        self._depth_guard = DepthGuard(self.options.max_depth)

    @abstractmethod
    def render_to_string(self, node: Any) -> str:
        """Render a document, node, or fragment to a string.

        Parameters
        ----------
        node : Any
            Document, bare node, list of nodes, string or None

        Returns
        -------
        str
            Rendered output

        """
        pass

    def render(self, node: Any, output: Union[str, Path, IO[bytes], IO[str]]) -> None:
        """Render a document and write the result to output.

        Parameters
        ----------
        node : Any
            Document or node to render
        output : str, Path, IO[bytes] or IO[str]
            Output destination (file path or file-like object)

        """
        self.write_text_output(self.render_to_string(node), output)

    @abstractmethod
    def initial_context(self) -> ContextT:
        """Return the traversal context used at the document root."""
        pass

    @abstractmethod
    def visit_bare_string(self, value: str, depth: int, context: ContextT) -> str:
        """Render a plain string found where a node was expected."""
        pass

    def _walk(self, node: Any, depth: int, context: ContextT) -> str:
        """Render one node of the tree.

        This is the single entry point of the recursion. Values that are
        not nodes are tolerated: ``None`` and unknown scalars render as
        nothing, strings are handed to ``visit_bare_string`` and lists
        are rendered as a content array.

        Parameters
        ----------
        node : Any
            The node to render
        depth : int
            Depth of the node (document root is 0)
        context : ContextT
            Traversal context passed down unchanged unless a visit method
            derives a new one

        Returns
        -------
        str
            Rendered node, or the depth placeholder if the node is too deep

        """
        if not self._depth_guard.enter(depth):
            logger.warning("Maximum nesting depth %d exceeded, truncating branch", self.options.max_depth)
            return self.options.depth_placeholder

        if node is None:
            return ""
        if isinstance(node, str):
            return self.visit_bare_string(node, depth, context)
        if isinstance(node, (list, tuple)):
            return "".join(self._walk(child, depth + 1, context) for child in node)
        if not isinstance(node, Mapping):
            logger.debug("Skipping value of type %s found in place of a node", type(node).__name__)
            return ""
        return self.dispatch(node, depth, context)

    def _walk_children(self, node: Mapping[str, Any], depth: int, context: ContextT) -> list[str]:
        """Render every child of a node, one string per child."""
        return [self._walk(child, depth + 1, context) for child in get_content(node)]

    def generic_visit(self, node: Mapping[str, Any], depth: int, context: ContextT) -> str:
        """Render a node of unknown kind as the concatenation of its children."""
        return "".join(self._walk_children(node, depth, context))

    @staticmethod
    def _validate_options_type(options: BaseRendererOptions | None, expected_type: type, renderer_name: str) -> None:
        """Validate that options are of the correct type for this renderer.

        Raises
        ------
        InvalidOptionsError
            If options are not None and not an instance of expected_type

        """
        if options is not None and not isinstance(options, expected_type):
            raise InvalidOptionsError(
                renderer_name=renderer_name,
                expected_type=expected_type,
                received_type=type(options),
            )

    @staticmethod
    def write_text_output(text: str, output: Union[str, Path, IO[bytes], IO[str]]) -> None:
        """Write text output to a file or IO stream.

        Examples
        --------
            >>> from io import StringIO
            >>> buffer = StringIO()
            >>> BaseRenderer.write_text_output("# Hello", buffer)
            >>> buffer.getvalue()
            '# Hello'

        """
        write_content(text, output)
